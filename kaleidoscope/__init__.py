"""
Kaleidoscope Front End

Tokenizer and parser for Kaleidoscope, a minimal expression language with
numbers, variables, the four arithmetic operators, calls and `def`
function definitions.

Architecture:
    kaleidoscope/
    ├── lexer/           # Rule-table tokenization
    ├── parser/          # Recursive descent + precedence climbing, AST
    └── cli.py           # Driver: print tokens and trees

Author: xwest
License: MIT
"""

__version__ = "0.1.0"
__author__ = "xwest"
__email__ = "dev@kaleidoscope-lang.org"
__license__ = "MIT"

from .lexer import Lexer, tokenize_string
from .parser import Parser, ParseError, parse_string

__all__ = [
    # Core classes  
    "Lexer",
    "Parser",
    "ParseError",
    "tokenize_string",
    "parse_string",
    
    # Version info
    "__version__",
    "__author__",
    "__email__",
    "__license__",
]
