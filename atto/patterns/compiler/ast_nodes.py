"""
AST node definitions for route patterns.

These nodes represent the parsed structure of a route pattern such as
``POST|DELETE /blog/:id<\\d+>[/comments[/:page<\\d+>]]``.
"""

from dataclasses import dataclass, field
from typing import Any, Optional, List, Dict, FrozenSet, Iterator
from enum import Enum


class SegmentKind(str, Enum):
    """Kind of pattern segment."""
    STATIC = "static"
    TOKEN = "token"
    OPTIONAL = "optional"
    WILDCARD = "wildcard"


@dataclass
class Span:
    """Source code span for diagnostics."""
    start: int
    end: int
    line: int = 1
    column: int = 1

    def __repr__(self) -> str:
        return f"Line {self.line}:{self.column} (pos {self.start}-{self.end})"


@dataclass
class BaseSegment:
    """Base class for all segments."""
    kind: SegmentKind = field(default=SegmentKind.STATIC, init=False)
    span: Optional[Span] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind.value}


@dataclass
class StaticSegment(BaseSegment):
    """Literal text run."""
    value: str = ""

    def __post_init__(self):
        self.kind = SegmentKind.STATIC

    def to_dict(self) -> Dict[str, Any]:
        return {
            **super().to_dict(),
            "value": self.value,
        }


@dataclass
class TokenSegment(BaseSegment):
    """
    Named parameter ``:name`` with an optional inline ``<constraint>``.

    ``constraint`` holds only what was written on this occurrence; the
    route-wide constraint table lives on the compiled pattern.
    """
    name: str = ""
    constraint: Optional[str] = None

    def __post_init__(self):
        self.kind = SegmentKind.TOKEN

    def to_dict(self) -> Dict[str, Any]:
        return {
            **super().to_dict(),
            "name": self.name,
            "constraint": self.constraint,
        }


@dataclass
class WildcardSegment(BaseSegment):
    """Greedy ``*`` marker, matches anything including slashes."""

    def __post_init__(self):
        self.kind = SegmentKind.WILDCARD


@dataclass
class OptionalGroup(BaseSegment):
    """Optional segment group [...]."""
    segments: List[BaseSegment] = field(default_factory=list)

    def __post_init__(self):
        self.kind = SegmentKind.OPTIONAL

    @property
    def height(self) -> int:
        """
        Nesting height: 1 for a group without subgroups, otherwise one more
        than its tallest subgroup. Groups of height N become bracket-free
        after N - 1 inside-out resolution passes.
        """
        children = [s.height for s in self.segments if isinstance(s, OptionalGroup)]
        return 1 + max(children, default=0)

    def to_dict(self) -> Dict[str, Any]:
        return {
            **super().to_dict(),
            "segments": [s.to_dict() for s in self.segments],
        }


@dataclass
class PatternAST:
    """Complete AST for a route pattern."""
    raw: str
    methods: FrozenSet[str] = field(default_factory=frozenset)
    segments: List[BaseSegment] = field(default_factory=list)
    span: Optional[Span] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {
            "raw": self.raw,
            "methods": sorted(self.methods),
            "span": {"start": self.span.start, "end": self.span.end} if self.span else None,
            "segments": [s.to_dict() for s in self.segments],
        }

    def walk(self) -> Iterator[BaseSegment]:
        """Yield every segment depth-first, in pattern order."""

        def visit(segments: List[BaseSegment]):
            for seg in segments:
                yield seg
                if isinstance(seg, OptionalGroup):
                    yield from visit(seg.segments)

        return visit(self.segments)

    def get_param_names(self) -> List[str]:
        """Get all parameter names in pattern order (including nested optionals)."""
        names = []
        for seg in self.walk():
            if isinstance(seg, TokenSegment) and seg.name not in names:
                names.append(seg.name)
        return names

    def get_static_prefix(self) -> str:
        """Literal text before the first non-static segment."""
        prefix_parts = []
        for segment in self.segments:
            if isinstance(segment, StaticSegment):
                prefix_parts.append(segment.value)
            else:
                break
        return "".join(prefix_parts)

    def is_catch_all(self) -> bool:
        """True when the pattern is nothing but wildcards."""
        return bool(self.segments) and all(
            isinstance(s, WildcardSegment) for s in self.segments
        )
