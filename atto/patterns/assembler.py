"""
URL assembly, the inverse of matching.

Optional groups are resolved innermost first. Inside a group a missing
parameter collapses the whole group to nothing, while a value rejected by
its constraint is an error. Top-level parameters are then required.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple
from urllib.parse import urlencode

from .compiler.compiler import CompiledPattern
from .compiler.ast_nodes import (
    BaseSegment,
    OptionalGroup,
    StaticSegment,
    TokenSegment,
    WildcardSegment,
)
from ..faults import (
    CatchAllAssemblyFault,
    InvalidParameterValueFault,
    MissingRequiredParameterFault,
)

logger = logging.getLogger("atto.patterns")


class _GroupCollapsed(Exception):
    """A parameter inside an optional group has no value."""


class PatternAssembler:
    """Builds concrete URLs from compiled patterns."""

    def assemble(
        self,
        pattern: CompiledPattern,
        parameters: Optional[Mapping[str, Any]] = None,
        query: Optional[Mapping[str, Any]] = None,
        *,
        name: Optional[str] = None,
    ) -> str:
        """
        Assemble a URL for ``pattern``.

        Args:
            pattern: Compiled pattern
            parameters: Values for the pattern's parameters
            query: Query string pairs, appended when non-empty
            name: Route name used in error messages (defaults to the raw pattern)

        Raises:
            CatchAllAssemblyFault: The pattern is nothing but wildcards
            MissingRequiredParameterFault: A top-level parameter has no value
            InvalidParameterValueFault: A value is rejected by its constraint
        """
        route = name if name is not None else pattern.raw
        parameters = parameters or {}

        if pattern.ast.is_catch_all():
            raise CatchAllAssemblyFault(route)

        resolved: Dict[int, str] = {}
        for group in self._groups_inside_out(pattern.ast.segments):
            try:
                resolved[id(group)] = self._render(
                    group.segments, pattern, parameters, resolved, route, optional=True
                )
            except _GroupCollapsed:
                resolved[id(group)] = ""

        url = self._render(
            pattern.ast.segments, pattern, parameters, resolved, route, optional=False
        )

        if query:
            url += "?" + urlencode(query, doseq=True)

        logger.debug("Assembled %r for route %r", url, route)
        return url

    def _groups_inside_out(self, segments: List[BaseSegment]) -> List[OptionalGroup]:
        """
        Every optional group, ordered the way repeated innermost-first
        passes would reach them: by height, then left to right.
        """
        found: List[Tuple[int, int, OptionalGroup]] = []

        def collect(items: List[BaseSegment]):
            for segment in items:
                if isinstance(segment, OptionalGroup):
                    collect(segment.segments)
                    found.append((segment.height, segment.span.start if segment.span else len(found), segment))

        collect(segments)
        found.sort(key=lambda item: (item[0], item[1]))
        return [group for _, _, group in found]

    def _render(
        self,
        segments: List[BaseSegment],
        pattern: CompiledPattern,
        parameters: Mapping[str, Any],
        resolved: Dict[int, str],
        route: str,
        *,
        optional: bool,
    ) -> str:
        parts = []
        for segment in segments:
            if isinstance(segment, StaticSegment):
                parts.append(segment.value)
            elif isinstance(segment, WildcardSegment):
                continue
            elif isinstance(segment, OptionalGroup):
                parts.append(resolved[id(segment)])
            elif isinstance(segment, TokenSegment):
                parts.append(self._value(segment.name, pattern, parameters, route, optional))
        return "".join(parts)

    def _value(
        self,
        param: str,
        pattern: CompiledPattern,
        parameters: Mapping[str, Any],
        route: str,
        optional: bool,
    ) -> str:
        value = parameters.get(param)
        if value is None:
            if optional:
                raise _GroupCollapsed(param)
            raise MissingRequiredParameterFault(param, route)

        value = str(value)
        if pattern.constraint_regex(param).fullmatch(value) is None:
            raise InvalidParameterValueFault(value, param, pattern.constraint_for(param), route)
        return value


_default_assembler = PatternAssembler()


def assemble(
    pattern: CompiledPattern,
    parameters: Optional[Mapping[str, Any]] = None,
    query: Optional[Mapping[str, Any]] = None,
    *,
    name: Optional[str] = None,
) -> str:
    """Assemble a URL with a shared ``PatternAssembler``."""
    return _default_assembler.assemble(pattern, parameters, query, name=name)
