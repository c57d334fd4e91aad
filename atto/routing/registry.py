"""
Ordered route registry.

Routes are matched in registration order and the first match wins.
Registering an existing name again replaces that route in its original
position.
"""

import logging
from typing import Any, Dict, Iterator, Mapping, Optional

from .route import Route, RouteMatch, Handler
from ..patterns import PatternAssembler, PatternCache, get_global_cache, match_pattern, strip_query
from ..faults import RouteNotFoundFault

logger = logging.getLogger("atto.routing")


class RouteRegistry:
    """Name-keyed, insertion-ordered collection of routes."""

    def __init__(self, cache: Optional[PatternCache] = None):
        self._routes: Dict[str, Route] = {}
        self.cache = cache if cache is not None else get_global_cache()
        self._assembler = PatternAssembler()

    def add(
        self,
        name: str,
        pattern: str,
        view: Optional[str] = None,
        callback: Optional[Handler] = None,
    ) -> Route:
        """
        Register a route.

        Raises:
            PatternSyntaxError: The pattern is malformed
        """
        compiled = self.cache.compile_with_cache(pattern)
        route = Route(name=name, pattern=pattern, view=view, callback=callback, compiled=compiled)
        if name in self._routes:
            logger.debug("Replacing route %r with pattern %r", name, pattern)
        else:
            logger.debug("Registered route %r with pattern %r", name, pattern)
        self._routes[name] = route
        return route

    def get(self, name: str) -> Route:
        """Look up a route by name, raising ``RouteNotFoundFault``."""
        try:
            return self._routes[name]
        except KeyError:
            raise RouteNotFoundFault(name) from None

    def has(self, name: str) -> bool:
        return name in self._routes

    def match(self, path: str, method: str) -> Optional[RouteMatch]:
        """First route matching ``path`` and ``method``, or None."""
        path = strip_query(path)
        for route in self._routes.values():
            result = match_pattern(route.compiled, path, method)
            if result is not None:
                logger.debug("Matched %s %s to route %r", method, path, route.name)
                return RouteMatch(route=route, params=result.params)
        logger.debug("No route matches %s %s", method, path)
        return None

    def assemble(
        self,
        name: str,
        parameters: Optional[Mapping[str, Any]] = None,
        query: Optional[Mapping[str, Any]] = None,
    ) -> str:
        """
        Build the URL of a named route.

        Raises:
            RouteNotFoundFault: No route has this name
            MissingRequiredParameterFault: A required parameter is missing
            InvalidParameterValueFault: A value is rejected by its constraint
            CatchAllAssemblyFault: The route is a bare wildcard
        """
        route = self.get(name)
        return self._assembler.assemble(route.compiled, parameters, query, name=name)

    def __iter__(self) -> Iterator[Route]:
        return iter(list(self._routes.values()))

    def __len__(self) -> int:
        return len(self._routes)

    def __contains__(self, name: str) -> bool:
        return name in self._routes
