"""Compiler package for route patterns."""

from .parser import PatternParser, PatternToken, Tokenizer, parse_pattern, split_methods
from .ast_nodes import (
    SegmentKind,
    Span,
    BaseSegment,
    StaticSegment,
    TokenSegment,
    WildcardSegment,
    OptionalGroup,
    PatternAST,
)
from .compiler import PatternCompiler, CompiledPattern

__all__ = [
    "PatternParser",
    "PatternToken",
    "Tokenizer",
    "parse_pattern",
    "split_methods",
    "SegmentKind",
    "Span",
    "BaseSegment",
    "StaticSegment",
    "TokenSegment",
    "WildcardSegment",
    "OptionalGroup",
    "PatternAST",
    "PatternCompiler",
    "CompiledPattern",
]
