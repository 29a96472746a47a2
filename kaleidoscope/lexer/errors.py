"""
Error handling for the Kaleidoscope lexer.

The lexer never rejects source text: characters it doesn't recognize come
out as OTHER tokens and the parser decides what to do with them. The only
lexer failure is a broken rule table, which is reported when the lexer is
built.

Author: xwest
"""

from typing import Optional, List
from dataclasses import dataclass

from .tokens import SourceLocation


@dataclass
class Diagnostic:
    """Error or warning report with a source location."""
    message: str
    location: SourceLocation
    severity: str  # "error", "warning"
    code: Optional[str] = None
    help_text: Optional[str] = None
    suggestions: Optional[List[str]] = None
    
    def __str__(self) -> str:
        severity_prefix = self.severity.upper()
        result = f"{severity_prefix}: {self.message}\n"
        result += f"  --> {self.location}\n"
        
        if self.help_text:
            result += f"  help: {self.help_text}\n"
        
        if self.suggestions:
            result += "  suggestions:\n"
            for suggestion in self.suggestions:
                result += f"    - {suggestion}\n"
        
        return result


class LexerError(Exception):
    """
    Exception raised when the lexer cannot run at all.
    
    Contains detailed diagnostic information for error reporting.
    """
    
    def __init__(
        self, 
        message: str, 
        location: SourceLocation,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        super().__init__(message)
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


class PatternError(LexerError):
    """A lexer rule pattern failed to compile."""
    
    def __init__(self, pattern: str, reason: str):
        super().__init__(
            message=f"Invalid lexer pattern: {pattern!r}",
            location=SourceLocation("<rules>", 0, 0, 0),
            code="L001",
            help_text=reason,
        )
        self.pattern = pattern

