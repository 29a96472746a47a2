"""
Kaleidoscope Lexer - turns source text into a flat list of tokens

Works by trying an ordered list of (pattern, constructor) rules at the
current position. First rule that matches wins; there's no longest-match
across rules. Anything none of the rules accept is eaten one character at
a time as an OTHER token, so tokenizing never fails on bad input.

xwest
"""

import logging
from typing import Iterable, List, Optional, Sequence, Tuple

from .tokens import (
    Token, TokenType, SourceLocation, TokenConstructor, TOKEN_RULES, other_token
)
from .patterns import PatternCache

logger = logging.getLogger(__name__)


class Lexer:
    """
    Kaleidoscope lexical analyzer.
    
    Converts source code text into a list of tokens. Whitespace is
    dropped; unrecognized characters become OTHER tokens.
    """
    
    def __init__(
        self,
        source: str,
        filename: str = "<unknown>",
        rules: Optional[Sequence[Tuple[str, TokenConstructor]]] = None,
        cache: Optional[PatternCache] = None,
    ):
        """
        Initialize the lexer with source code.
        
        Args:
            source: Source code string
            filename: Name of source file for error reporting
            rules: Ordered (pattern, constructor) rules, defaults to TOKEN_RULES
            cache: Compiled pattern cache to share between lexers
            
        Raises:
            PatternError: If one of the rule patterns doesn't compile
        """
        self.source = source
        self.filename = filename
        self.rules = list(rules) if rules is not None else list(TOKEN_RULES)
        self.cache = cache if cache is not None else PatternCache()
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens: List[Token] = []
        
        # Compile every rule up front so a bad pattern fails here, not mid-input
        for pattern, _ in self.rules:
            self.cache.compile(pattern)
    
    def tokenize(self) -> List[Token]:
        """
        Tokenize the entire source code.
        
        Returns:
            List of tokens in source order (no EOF token)
        """
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens = []
        
        while self.pos < len(self.source):
            location = SourceLocation(self.filename, self.line, self.column, self.pos)
            token, length = self._next_token()
            if token is not None:
                self.tokens.append(token.with_location(location))
            self._advance_by(length)
        
        logger.debug("%s: produced %d tokens", self.filename, len(self.tokens))
        return self.tokens
    
    def _next_token(self) -> Tuple[Optional[Token], int]:
        """Match the next rule at the current position.
        
        Returns the token (None for skipped text) and how many characters it covers.
        """
        for pattern, constructor in self.rules:
            text = self.cache.match(pattern, self.source, self.pos)
            # An empty match would never advance
            if text:
                return constructor(text), len(text)
        
        return other_token(self.source[self.pos]), 1
    
    def _advance_by(self, count: int):
        """Advance position by `count` characters, updating line/column."""
        for char in self.source[self.pos:self.pos + count]:
            if char == '\n':
                self.line += 1
                self.column = 1
            else:
                self.column += 1
        self.pos += count


def tokenize_string(source: str, filename: str = "<string>",
                    cache: Optional[PatternCache] = None) -> List[Token]:
    """
    Convenience function to tokenize a source string.
    
    Args:
        source: Source code string
        filename: Filename for error reporting
        cache: Optional shared pattern cache
        
    Returns:
        List of tokens
    """
    return Lexer(source, filename, cache=cache).tokenize()


def tokenize_file(filepath: str) -> List[Token]:
    """
    Convenience function to tokenize a source file.
    
    Raises:
        OSError: If file cannot be read
    """
    with open(filepath, 'r', encoding='utf-8') as f:
        source = f.read()
        
    return tokenize_string(source, filepath)


def untokenize(tokens: Iterable[Token]) -> str:
    """Render tokens back to source text, one space between tokens."""
    return " ".join(token.lexeme for token in tokens if token.type != TokenType.EOF)
