"""Named routes, registration order matching and URL assembly."""

from .route import Route, RouteMatch, Handler
from .registry import RouteRegistry

__all__ = ["Route", "RouteMatch", "Handler", "RouteRegistry"]
