"""
Route pattern engine.

A pattern such as ``POST|DELETE /blog/:id<\\d+>[/comments[/:page<\\d+>]]``
is parsed once into a ``PatternAST`` and compiled into a
``CompiledPattern``. The same compiled pattern drives both matching
(path to parameters) and assembly (parameters to URL), so the two always
agree on the grammar.
"""

from .compiler.parser import PatternParser, PatternToken, Tokenizer, parse_pattern, split_methods
from .compiler.ast_nodes import (
    PatternAST,
    Span,
    SegmentKind,
    StaticSegment,
    TokenSegment,
    OptionalGroup,
    WildcardSegment,
)
from .compiler.compiler import PatternCompiler, CompiledPattern
from .diagnostics.errors import (
    PatternDiagnostic,
    PatternSyntaxError,
)
from .grammar import DEFAULT_CONSTRAINT
from .matcher import MatchResult, match_pattern, strip_query
from .assembler import PatternAssembler, assemble
from .cache import (
    PatternCache,
    CacheStats,
    compile_pattern,
    get_global_cache,
    set_global_cache,
)

__all__ = [
    # Parser
    "PatternParser",
    "PatternToken",
    "Tokenizer",
    "parse_pattern",
    "split_methods",
    # AST
    "PatternAST",
    "Span",
    "SegmentKind",
    "StaticSegment",
    "TokenSegment",
    "OptionalGroup",
    "WildcardSegment",
    # Compiler
    "PatternCompiler",
    "CompiledPattern",
    "DEFAULT_CONSTRAINT",
    # Diagnostics
    "PatternDiagnostic",
    "PatternSyntaxError",
    # Matching and assembly
    "match_pattern",
    "MatchResult",
    "strip_query",
    "PatternAssembler",
    "assemble",
    # Caching
    "PatternCache",
    "CacheStats",
    "compile_pattern",
    "get_global_cache",
    "set_global_cache",
]
