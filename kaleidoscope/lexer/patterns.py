"""
Anchored pattern matching for the Kaleidoscope lexer.

Each lexer rule is a regular expression that must match at the very start
of the remaining input. Compiled expressions are cached by pattern text on
a PatternCache owned by the lexer, so the same rule is compiled once.

Author: xwest
"""

import logging
import re
from typing import Dict, Iterable, Optional

from .errors import PatternError

logger = logging.getLogger(__name__)


class PatternCache:
    """
    Cache of compiled, start-anchored regular expressions.
    
    Keyed by the literal pattern text. Entries are only ever added.
    """
    
    def __init__(self, patterns: Optional[Iterable[str]] = None):
        self._compiled: Dict[str, re.Pattern] = {}
        
        if patterns:
            for pattern in patterns:
                self.compile(pattern)
    
    def compile(self, pattern: str) -> re.Pattern:
        """Return the compiled form of `pattern`, compiling it on first use."""
        compiled = self._compiled.get(pattern)
        if compiled is not None:
            return compiled
        
        try:
            compiled = re.compile(pattern)
        except re.error as e:
            raise PatternError(pattern, str(e)) from e
        
        logger.debug("compiled lexer pattern %r", pattern)
        self._compiled[pattern] = compiled
        return compiled
    
    def match(self, pattern: str, subject: str, pos: int = 0) -> Optional[str]:
        """
        Match `pattern` at `pos` in `subject`.
        
        Returns:
            The matched text, or None if the pattern doesn't match there
        """
        m = self.compile(pattern).match(subject, pos)
        if m is None:
            return None
        return m.group(0)
    
    def __contains__(self, pattern: str) -> bool:
        return pattern in self._compiled
    
    def __len__(self) -> int:
        return len(self._compiled)
