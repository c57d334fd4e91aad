"""
Route records and match results.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, TYPE_CHECKING

from ..patterns import CompiledPattern, compile_pattern

if TYPE_CHECKING:
    from ..context import HandlerContext

Handler = Callable[["HandlerContext"], Any]


@dataclass(frozen=True)
class Route:
    """A named route: pattern, optional view template and optional callback."""
    name: str
    pattern: str
    view: Optional[str] = None
    callback: Optional[Handler] = None
    compiled: Optional[CompiledPattern] = field(default=None, repr=False, compare=False)

    def __post_init__(self):
        if self.compiled is None:
            object.__setattr__(self, "compiled", compile_pattern(self.pattern))

    @property
    def methods(self):
        return self.compiled.methods

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "pattern": self.pattern,
            "methods": sorted(self.methods),
            "params": list(self.compiled.params),
            "view": self.view,
            "callback": getattr(self.callback, "__qualname__", None),
        }


@dataclass(frozen=True)
class RouteMatch:
    """A route together with the parameters captured from a path."""
    route: Route
    params: Dict[str, str] = field(default_factory=dict)

    @property
    def name(self) -> str:
        return self.route.name
