"""
Pattern matching.

A path matches when the request method is allowed and the anchored
expression covers the whole path, query string excluded. Callers try
patterns in their own order; no specificity sorting is applied.
"""

from dataclasses import dataclass
from typing import Dict, Optional

from .compiler.compiler import CompiledPattern


@dataclass
class MatchResult:
    """Result of pattern matching."""
    pattern: CompiledPattern
    params: Dict[str, str]


def strip_query(path: str) -> str:
    """Drop the query string (``?`` and everything after it)."""
    return path.partition("?")[0]


def match_pattern(
    pattern: CompiledPattern,
    path: str,
    method: str = "GET",
) -> Optional[MatchResult]:
    """Match a single pattern against a path and method."""
    if not pattern.allows(method):
        return None

    path = strip_query(path)

    # Quick prefix check
    if pattern.static_prefix and not path.startswith(pattern.static_prefix):
        return None

    match = pattern.regex.fullmatch(path)
    if match is None:
        return None

    # Optional groups that did not participate are left out
    params = {
        name: value
        for name, value in match.groupdict().items()
        if value is not None
    }
    return MatchResult(pattern=pattern, params=params)
