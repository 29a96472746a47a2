"""
Token definitions for the Kaleidoscope lexer.

Kaleidoscope has a deliberately tiny lexical grammar:
- the `def` keyword
- identifiers and numeric literals
- parentheses and commas
- the four arithmetic operators
- a catch-all token for any single character nothing else accepts

The ordered rule table at the bottom of this module is what the lexer runs.

Author: xwest
"""

import re
from enum import Enum, auto
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Tuple


class TokenType(Enum):
    """Enumeration of all token types in Kaleidoscope."""
    
    DEFINE = auto()                 # def
    IDENTIFIER = auto()             # foo, x1
    NUMBER = auto()                 # 42, 3.14, 1.2.3 (permissive)
    PARENS_OPEN = auto()            # (
    PARENS_CLOSE = auto()           # )
    COMMA = auto()                  # ,
    BINARY_OPERATOR = auto()        # + - * /
    OTHER = auto()                  # any single unrecognized character
    
    # Never produced by the lexer; the parser hands this out past the end
    EOF = auto()


@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in the source code.
    
    Used for error reporting.
    """
    filename: str
    line: int
    column: int
    offset: int  # Character offset from start of source
    
    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"
    
    def __repr__(self) -> str:
        return f"SourceLocation({self.filename!r}, {self.line}, {self.column}, {self.offset})"


@dataclass(frozen=True)
class Token:
    """
    Represents a lexical token in the Kaleidoscope language.
    
    Two tokens are equal when their type, lexeme and value agree; where
    they came from in the source doesn't matter.
    """
    type: TokenType
    lexeme: str                     # Raw text from source
    value: Any                      # name for IDENTIFIER, float for NUMBER, symbol for BINARY_OPERATOR
    location: Optional[SourceLocation] = field(default=None, compare=False)
    
    def __str__(self) -> str:
        if self.value is not None and self.value != self.lexeme:
            return f"{self.type.name}({self.lexeme!r} -> {self.value!r})"
        return f"{self.type.name}({self.lexeme!r})"
    
    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.lexeme!r}, {self.value!r})"
    
    @property
    def is_identifier(self) -> bool:
        return self.type == TokenType.IDENTIFIER
    
    @property
    def is_operator(self) -> bool:
        return self.type == TokenType.BINARY_OPERATOR
    
    def with_location(self, location: SourceLocation) -> "Token":
        return Token(self.type, self.lexeme, self.value, location)


KEYWORDS = {
    "def": TokenType.DEFINE,
}

_NUMBER_PREFIX = re.compile(r"\d+(?:\.\d*)?|\.\d+")


def parse_number(lexeme: str) -> float:
    """
    Convert a numeric lexeme to a float, accepting malformed input.
    
    The lexer only guarantees the lexeme is made of digits and dots, so
    `1.2.3` is possible. The longest leading `digits[.digits]` run is used
    and anything after it is ignored; no leading number at all gives 0.0.
    """
    m = _NUMBER_PREFIX.match(lexeme)
    if m is None:
        return 0.0
    return float(m.group(0))


# A rule constructor turns the matched text into a token, or None to drop it
TokenConstructor = Callable[[str], Optional[Token]]


def _skip(text: str) -> Optional[Token]:
    return None


def _identifier_or_keyword(text: str) -> Token:
    token_type = KEYWORDS.get(text, TokenType.IDENTIFIER)
    value = text if token_type == TokenType.IDENTIFIER else None
    return Token(token_type, text, value)


def _number(text: str) -> Token:
    return Token(TokenType.NUMBER, text, parse_number(text))


def _punctuation(token_type: TokenType) -> TokenConstructor:
    return lambda text: Token(token_type, text, None)


def _binary_operator(text: str) -> Token:
    return Token(TokenType.BINARY_OPERATOR, text, text)


# Tried in order for every token; the first pattern that matches wins,
# even if a later one would match more text.
TOKEN_RULES: List[Tuple[str, TokenConstructor]] = [
    (r"[ \t\n]", _skip),
    (r"[a-zA-Z][a-zA-Z0-9]*", _identifier_or_keyword),
    (r"[0-9.]+", _number),
    (r"\(", _punctuation(TokenType.PARENS_OPEN)),
    (r"\)", _punctuation(TokenType.PARENS_CLOSE)),
    (r",", _punctuation(TokenType.COMMA)),
    (r"[+\-*/]", _binary_operator),
]


def other_token(char: str) -> Token:
    """Token for a single character no rule accepted."""
    return Token(TokenType.OTHER, char, char)
