"""
Atto application - routes, data and templates behind one object.

An application is configured with chained mutators and then dispatches
requests through a fixed pipeline::

    start callback -> route match -> route callback -> view -> layout
    -> finish callback

Any callback returning a truthy value ends the pipeline with that value.
Errors raised anywhere in the pipeline go to the error callback.
"""

import logging
import traceback
from typing import Any, Dict, Iterator, List, Mapping, Optional

from markupsafe import Markup

from .config import AttoConfig, ConfigLoader
from .context import HandlerContext
from .data import DataContainer
from .faults import Fault, FaultContext, Severity
from .logging import configure_logging
from .patterns import PatternCache
from .response import Response
from .routing import Handler, Route, RouteMatch, RouteRegistry
from .templates import TemplateEngine

logger = logging.getLogger("atto.app")

VIEW_DATA_PATH = "atto.view"

_SEVERITY_LEVELS = {
    Severity.INFO: logging.INFO,
    Severity.WARN: logging.WARNING,
    Severity.ERROR: logging.ERROR,
    Severity.FATAL: logging.CRITICAL,
}


class Atto:
    """
    Micro-framework application.

    Args:
        config: Application settings (defaults to ``AttoConfig()``)

    Example:
        app = (
            Atto()
            .set_root("templates")
            .set_layout("layout.html")
            .add_route("blog", "/blog[/:page<\\d+>]", view="blog.html")
        )
        html = app.run("/blog/2", "GET")
    """

    def __init__(self, config: Optional[AttoConfig] = None):
        self.config = config or AttoConfig()
        if self.config.log_level:
            configure_logging(self.config.log_level)

        self.routes = RouteRegistry(PatternCache(self.config.pattern_cache_size))
        self.data = DataContainer()
        self.templates = TemplateEngine(
            self.config.root,
            autoescape=self.config.autoescape,
            globals={"url_for": self.assemble},
        )

        self._view: Optional[str] = self.config.view
        self._layout: Optional[str] = self.config.layout
        self._start: Optional[Handler] = None
        self._finish: Optional[Handler] = None
        self._error: Optional[Handler] = None

    @classmethod
    def from_config(
        cls,
        paths: Optional[List[str]] = None,
        env_prefix: str = "ATTO_",
        env_file: Optional[str] = None,
        overrides: Optional[Dict[str, Any]] = None,
    ) -> "Atto":
        """Create an application from config files, environment and overrides."""
        return cls(ConfigLoader.load(paths, env_prefix, env_file, overrides))

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------

    @property
    def view(self) -> Optional[str]:
        return self._view

    @property
    def layout(self) -> Optional[str]:
        return self._layout

    @property
    def root(self) -> Optional[str]:
        return self.templates.root

    @property
    def start(self) -> Optional[Handler]:
        return self._start

    @property
    def finish(self) -> Optional[Handler]:
        return self._finish

    @property
    def error(self) -> Optional[Handler]:
        return self._error

    def set_view(self, view: Optional[str]) -> "Atto":
        """Default view template, used when the matched route has none."""
        self._view = view
        return self

    def set_layout(self, layout: Optional[str]) -> "Atto":
        """Layout template rendered after the view."""
        self._layout = layout
        return self

    def set_root(self, root: Optional[str]) -> "Atto":
        """Directory template names are looked up in."""
        self.templates.set_root(root)
        return self

    def set_start(self, callback: Optional[Handler]) -> "Atto":
        self._start = callback
        return self

    def set_finish(self, callback: Optional[Handler]) -> "Atto":
        self._finish = callback
        return self

    def set_error(self, callback: Optional[Handler]) -> "Atto":
        self._error = callback
        return self

    # ------------------------------------------------------------------
    # Routing
    # ------------------------------------------------------------------

    def add_route(
        self,
        name: str,
        pattern: str,
        view: Optional[str] = None,
        callback: Optional[Handler] = None,
    ) -> "Atto":
        """
        Register a route.

        Raises:
            PatternSyntaxError: The pattern is malformed
        """
        self.routes.add(name, pattern, view, callback)
        return self

    def get_route(self, name: str) -> Optional[Route]:
        """Route registered under ``name``, or None."""
        return self.routes.get(name) if self.routes.has(name) else None

    def iter_routes(self) -> Iterator[Route]:
        return iter(self.routes)

    def match(self, path: str, method: str) -> Optional[RouteMatch]:
        """First route matching ``path`` and ``method``, or None."""
        return self.routes.match(path, method)

    def assemble(
        self,
        name: str,
        parameters: Optional[Mapping[str, Any]] = None,
        query: Optional[Mapping[str, Any]] = None,
    ) -> str:
        """
        URL of the named route.

        Raises:
            RouteNotFoundFault, MissingRequiredParameterFault,
            InvalidParameterValueFault, CatchAllAssemblyFault
        """
        return self.routes.assemble(name, parameters, query)

    def redirect(
        self,
        target: str,
        parameters: Optional[Mapping[str, Any]] = None,
        status: Optional[int] = None,
    ) -> Response:
        """
        Redirect response to a route (assembled with ``parameters``) or,
        when no route has that name, to ``target`` itself.

        The response does not stop anything by itself; return it from a
        callback to end the pipeline.
        """
        url = self.assemble(target, parameters) if self.routes.has(target) else target
        return Response.redirect(url, status or self.config.redirect_status)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render(
        self,
        template: str,
        context: Optional[Mapping[str, Any]] = None,
        match: Optional[RouteMatch] = None,
    ) -> str:
        """
        Render a template file, or return ``template`` when it names no file.

        Raises:
            TemplateRenderFault: The template failed to compile or render
        """
        variables: Dict[str, Any] = {
            "app": self,
            "data": self.data,
            "route": match,
            "params": dict(match.params) if match else {},
        }
        if context:
            variables.update(context)
        return self.templates.render(template, variables)

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------

    def dispatch(self, path: str, method: str) -> Response:
        """Run the request pipeline and return the response."""
        ctx = HandlerContext(app=self, path=path, method=method.upper())
        logger.debug("Dispatching %s %s", ctx.method, path)

        # View output belongs to a single dispatch
        self.data.remove(VIEW_DATA_PATH)

        try:
            if self._start:
                result = self._start(ctx)
                if result:
                    return Response.coerce(result)

            view = self._view
            match = self.routes.match(path, ctx.method)
            if match:
                ctx.match = match
                if match.route.view:
                    view = match.route.view
                if match.route.callback:
                    result = match.route.callback(ctx)
                    if result:
                        return Response.coerce(result)

            render = ""
            if view:
                render = self.render(view, match=match)
                self.data.set(VIEW_DATA_PATH, Markup(render))

            if self._layout:
                render = self.render(self._layout, {"view": Markup(render)}, match=match)

            if self._finish:
                ctx.render = render
                result = self._finish(ctx)
                if result:
                    return Response.coerce(result)

            return Response(render)
        except Exception as error:
            return self._handle_error(ctx, error)

    def run(self, path: str, method: str) -> str:
        """Run the request pipeline and return the response body."""
        return self.dispatch(path, method).text

    def _handle_error(self, ctx: HandlerContext, error: Exception) -> Response:
        fault_ctx = FaultContext.capture(
            error,
            route=ctx.match.name if ctx.match else None,
            path=ctx.path,
            method=ctx.method,
        )
        logger.log(
            _SEVERITY_LEVELS.get(fault_ctx.fault.severity, logging.ERROR),
            "%s", fault_ctx,
            exc_info=error,
        )

        ctx.error = error
        if self._error:
            try:
                result = self._error(ctx)
                if result:
                    return Response.coerce(result)
            except Exception as nested:
                logger.error("Error callback failed: %s", nested, exc_info=nested)
                return Response(_message(nested), status=500)

        body = fault_ctx.fault.message
        if self.config.debug:
            body += "\n\n" + "".join(
                traceback.format_exception(type(error), error, error.__traceback__)
            )
        return Response(body, status=500)

    def asgi(self):
        """ASGI callable serving this application."""
        from .asgi import ASGIAdapter

        return ASGIAdapter(self)

    def __repr__(self) -> str:
        return f"<Atto routes={len(self.routes)} view={self._view!r} layout={self._layout!r}>"


def _message(error: BaseException) -> str:
    if isinstance(error, Fault):
        return error.message
    return str(error)
