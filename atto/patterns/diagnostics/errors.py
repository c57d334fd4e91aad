"""
Diagnostic errors for route patterns.
"""

from dataclasses import dataclass
from typing import Optional, List
from ..compiler.ast_nodes import Span


@dataclass
class PatternDiagnostic:
    """Base class for all pattern diagnostics."""
    message: str
    span: Optional[Span] = None
    pattern: Optional[str] = None
    suggestions: List[str] = None

    def __post_init__(self):
        if self.suggestions is None:
            self.suggestions = []

    def __str__(self) -> str:
        return self.message

    def format(self) -> str:
        """Format diagnostic for display."""
        parts = []

        error_type = self.__class__.__name__
        parts.append(f"{error_type}: {self.message}")
        if self.pattern is not None and self.span:
            parts.append(f"  --> {self.span}")
            parts.append(f"  |  {self.pattern}")
            parts.append("  |  " + " " * self.span.start + "^" * max(1, self.span.end - self.span.start))
        elif self.span:
            parts.append(f"  --> {self.span}")

        if self.suggestions:
            parts.append("\nSuggestions:")
            for i, suggestion in enumerate(self.suggestions, 1):
                parts.append(f"  {i}) {suggestion}")

        return "\n".join(parts)


class PatternSyntaxError(PatternDiagnostic, Exception):
    """Syntax error in pattern."""
    pass

