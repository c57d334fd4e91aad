"""
Handler context passed to every pipeline callback.
"""

from typing import Any, Dict, Mapping, Optional, TYPE_CHECKING
from dataclasses import dataclass, field

if TYPE_CHECKING:
    from .app import Atto
    from .data import DataContainer
    from .response import Response
    from .routing import RouteMatch


@dataclass
class HandlerContext:
    """
    Context provided to start, route, finish and error callbacks.

    Attributes:
        app: The application
        path: Request path (query string included)
        method: Request method, upper-cased
        match: Matched route, None before matching or when nothing matched
        render: Rendered output, set for the finish callback
        error: Exception being handled, set for the error callback
    """

    app: "Atto"
    path: str
    method: str
    match: Optional["RouteMatch"] = None
    render: Optional[str] = None
    error: Optional[BaseException] = None
    state: Dict[str, Any] = field(default_factory=dict)

    @property
    def params(self) -> Dict[str, str]:
        """Parameters captured by the matched route."""
        return dict(self.match.params) if self.match else {}

    def param(self, name: str, default: Optional[str] = None) -> Optional[str]:
        return self.params.get(name, default)

    @property
    def data(self) -> "DataContainer":
        return self.app.data

    def url_for(
        self,
        name: str,
        parameters: Optional[Mapping[str, Any]] = None,
        query: Optional[Mapping[str, Any]] = None,
    ) -> str:
        return self.app.assemble(name, parameters, query)

    def redirect(
        self,
        target: str,
        parameters: Optional[Mapping[str, Any]] = None,
        status: Optional[int] = None,
    ) -> "Response":
        return self.app.redirect(target, parameters, status)
