"""
Error handling for the Kaleidoscope parser.

The parser stops at the first syntax error. Each error is classified by a
ParseErrorKind so callers can tell, for example, a missing ')' apart from
a malformed argument list without looking at message text.

Author: xwest
"""

from enum import Enum
from typing import Optional, List

from ..lexer.tokens import Token, TokenType, SourceLocation
from ..lexer.errors import Diagnostic


class ParseErrorKind(Enum):
    """Classification of parser failures."""
    UNEXPECTED_TOKEN = "UnexpectedToken"
    UNDEFINED_OPERATOR = "UndefinedOperator"
    EXPECTED_CHARACTER = "ExpectedCharacter"
    EXPECTED_EXPRESSION = "ExpectedExpression"
    EXPECTED_ARGUMENT_LIST = "ExpectedArgumentList"
    EXPECTED_FUNCTION_NAME = "ExpectedFunctionName"


class ParseError(Exception):
    """
    Exception raised when the parser encounters a syntax error.
    
    Attributes:
        kind: What went wrong
        detail: The operator symbol for UNDEFINED_OPERATOR, the missing
            character for EXPECTED_CHARACTER, otherwise None
        token: The token the parser was looking at
        diagnostic: Message, location and help text for reporting
    """
    
    def __init__(
        self, 
        kind: ParseErrorKind,
        message: str, 
        location: SourceLocation,
        token: Optional[Token] = None,
        detail: Optional[str] = None,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        super().__init__(message)
        self.kind = kind
        self.detail = detail
        self.token = token
        self.diagnostic = Diagnostic(
            message=message,
            location=location, 
            severity="error",
            code=code,
            help_text=help_text,
            suggestions=suggestions
        )
    
    def __str__(self) -> str:
        return str(self.diagnostic)
    
    def __repr__(self) -> str:
        if self.detail is not None:
            return f"ParseError({self.kind.value}({self.detail!r}))"
        return f"ParseError({self.kind.value})"


PARSER_ERROR_CODES = {
    "P001": "Unexpected token",
    "P002": "Undefined operator",
    "P003": "Expected character",
    "P004": "Expected expression",
    "P005": "Expected argument list",
    "P006": "Expected function name",
    "P007": "Nesting too deep",
}


def _describe(token: Token) -> str:
    if token.type == TokenType.EOF:
        return "end of input"
    return f"{token.type.name} {token.lexeme!r}"


def _location(token: Token) -> SourceLocation:
    return token.location or SourceLocation("<unknown>", 0, 0, 0)


# Helper functions for creating each kind of parser error

def create_unexpected_token_error(expected: str, found: Token) -> ParseError:
    """Create an error for a structural token of the wrong kind."""
    return ParseError(
        ParseErrorKind.UNEXPECTED_TOKEN,
        message=f"Expected {expected}, found {_describe(found)}",
        location=_location(found),
        token=found,
        code="P001",
        help_text=f"The parser expected to see {expected} at this position."
    )


def create_undefined_operator_error(symbol: str, found: Token) -> ParseError:
    """Create an error for an operator missing from the precedence table."""
    return ParseError(
        ParseErrorKind.UNDEFINED_OPERATOR,
        message=f"Undefined operator '{symbol}'",
        location=_location(found),
        token=found,
        detail=symbol,
        code="P002",
        help_text="Only operators listed in the precedence table can be used."
    )


def create_expected_character_error(char: str, found: Token) -> ParseError:
    """Create an error for a missing '(' or ')'."""
    return ParseError(
        ParseErrorKind.EXPECTED_CHARACTER,
        message=f"Expected character '{char}', found {_describe(found)}",
        location=_location(found),
        token=found,
        detail=char,
        code="P003",
        suggestions=[f"Add a '{char}'"]
    )


def create_expected_expression_error(found: Token) -> ParseError:
    """Create an error for a token that can't start an expression."""
    return ParseError(
        ParseErrorKind.EXPECTED_EXPRESSION,
        message=f"Expected expression, found {_describe(found)}",
        location=_location(found),
        token=found,
        code="P004",
        help_text="An expression starts with a number, an identifier or '('."
    )


def create_expected_argument_list_error(found: Token) -> ParseError:
    """Create an error for a bad separator inside an argument list."""
    return ParseError(
        ParseErrorKind.EXPECTED_ARGUMENT_LIST,
        message=f"Expected ',' or ')' in argument list, found {_describe(found)}",
        location=_location(found),
        token=found,
        code="P005",
        suggestions=["Separate arguments with ','", "Close the argument list with ')'"]
    )


def create_expected_function_name_error(found: Token) -> ParseError:
    """Create an error for 'def' not followed by a name."""
    return ParseError(
        ParseErrorKind.EXPECTED_FUNCTION_NAME,
        message=f"Expected function name after 'def', found {_describe(found)}",
        location=_location(found),
        token=found,
        code="P006"
    )


def create_nesting_too_deep_error(found: Token) -> ParseError:
    """Create an error for input nested deeper than the parser can recurse."""
    return ParseError(
        ParseErrorKind.UNEXPECTED_TOKEN,
        message=f"Expression nested too deeply at {_describe(found)}",
        location=_location(found),
        token=found,
        code="P007",
        help_text="Split the expression into smaller functions."
    )
