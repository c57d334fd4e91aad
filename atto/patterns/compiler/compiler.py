"""
Compiler that transforms AST into executable compiled patterns.
"""

import re
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, FrozenSet, Pattern, Set

from .ast_nodes import (
    PatternAST,
    StaticSegment,
    TokenSegment,
    OptionalGroup,
    WildcardSegment,
    BaseSegment,
)
from ..grammar import DEFAULT_CONSTRAINT, WILDCARD_REGEX
from ...faults import ConstraintInvalidFault

logger = logging.getLogger("atto.patterns")


@dataclass
class CompiledPattern:
    """
    Fully compiled pattern ready for matching and assembly.

    Regular expressions are compiled on first use: a malformed constraint
    only fails when a route using it is actually matched or assembled.
    """
    raw: str
    methods: FrozenSet[str]
    ast: PatternAST
    constraints: Dict[str, str]
    params: List[str]
    static_prefix: str
    regex_source: str
    _regex: Optional[Pattern] = field(default=None, repr=False, compare=False)
    _constraint_regexes: Dict[str, Pattern] = field(default_factory=dict, repr=False, compare=False)

    def allows(self, method: str) -> bool:
        """True when the pattern declares no methods or includes ``method``."""
        return not self.methods or method.upper() in self.methods

    def constraint_for(self, name: str) -> str:
        """Effective constraint of a parameter (declared or default)."""
        return self.constraints.get(name, DEFAULT_CONSTRAINT)

    def constraint_regex(self, name: str) -> Pattern:
        """Compiled constraint of a parameter, for full-match validation."""
        compiled = self._constraint_regexes.get(name)
        if compiled is None:
            constraint = self.constraint_for(name)
            try:
                compiled = re.compile(constraint, re.DOTALL)
            except re.error as exc:
                raise ConstraintInvalidFault(name, constraint, str(exc)) from exc
            self._constraint_regexes[name] = compiled
        return compiled

    @property
    def regex(self) -> Pattern:
        """Anchored matching expression for the whole pattern."""
        if self._regex is None:
            try:
                self._regex = re.compile(self.regex_source, re.DOTALL)
            except re.error as exc:
                # Pin the failure on the constraint that caused it
                for name in self.params:
                    self.constraint_regex(name)
                raise ConstraintInvalidFault("*", self.raw, str(exc)) from exc
        return self._regex

    def to_dict(self) -> Dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {
            "raw": self.raw,
            "methods": sorted(self.methods),
            "static_prefix": self.static_prefix,
            "params": {name: self.constraint_for(name) for name in self.params},
            "regex": self.regex_source,
            "ast": self.ast.to_dict(),
        }

    def to_json(self, indent: Optional[int] = 2) -> str:
        """Serialize to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)


class PatternCompiler:
    """Compiles AST into executable patterns."""

    def compile(self, ast: PatternAST) -> CompiledPattern:
        """Compile AST into executable pattern."""
        constraints = self._collect_constraints(ast)
        regex_source = self._build_regex(ast, constraints)

        compiled = CompiledPattern(
            raw=ast.raw,
            methods=ast.methods,
            ast=ast,
            constraints=constraints,
            params=ast.get_param_names(),
            static_prefix=ast.get_static_prefix(),
            regex_source=regex_source,
        )
        logger.debug("Compiled route pattern %r -> %s", ast.raw, regex_source)
        return compiled

    def _collect_constraints(self, ast: PatternAST) -> Dict[str, str]:
        """Route-wide constraint table; the last declaration of a name wins."""
        constraints: Dict[str, str] = {}
        for segment in ast.walk():
            if isinstance(segment, TokenSegment) and segment.constraint is not None:
                constraints[segment.name] = segment.constraint
        return constraints

    def _build_regex(self, ast: PatternAST, constraints: Dict[str, str]) -> str:
        """
        Translate the AST into an anchored regular expression.

        Groups are built bottom-up: a group's inner expression is finished
        before it is wrapped in ``(?:...)?``. The first occurrence of a
        parameter becomes a named group, later ones back-reference it.
        """
        seen: Set[str] = set()

        def build(segments: List[BaseSegment]) -> str:
            parts = []
            for segment in segments:
                if isinstance(segment, StaticSegment):
                    parts.append(re.escape(segment.value))
                elif isinstance(segment, WildcardSegment):
                    parts.append(WILDCARD_REGEX)
                elif isinstance(segment, TokenSegment):
                    if segment.name in seen:
                        parts.append(f"(?P={segment.name})")
                    else:
                        seen.add(segment.name)
                        constraint = constraints.get(segment.name, DEFAULT_CONSTRAINT)
                        parts.append(f"(?P<{segment.name}>{constraint})")
                elif isinstance(segment, OptionalGroup):
                    parts.append(f"(?:{build(segment.segments)})?")
            return "".join(parts)

        return "^" + build(ast.segments) + "$"
