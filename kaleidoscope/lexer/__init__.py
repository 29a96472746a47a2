"""
Kaleidoscope Lexer Package

Rule-table tokenizer for the Kaleidoscope language.

Key Features:
- Ordered first-match rule table (not longest match)
- Compiled pattern cache owned by each lexer (or shared explicitly)
- Unrecognized characters recovered as OTHER tokens, never errors
- Source location tracking for parser diagnostics

Author: xwest
"""

from .tokens import Token, TokenType, SourceLocation, TOKEN_RULES
from .patterns import PatternCache
from .lexer import Lexer, tokenize_string, tokenize_file, untokenize
from .errors import Diagnostic, LexerError, PatternError

__all__ = [
    "Lexer", 
    "Token", 
    "TokenType", 
    "SourceLocation",
    "TOKEN_RULES",
    "PatternCache",
    "tokenize_string",
    "tokenize_file",
    "untokenize",
    "Diagnostic",
    "LexerError",
    "PatternError",
]
