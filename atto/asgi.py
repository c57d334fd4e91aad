"""
ASGI adapter - Bridges the ASGI protocol to ``Atto.dispatch``.

The adapter supplies the request path and method from the connection
scope; the application itself never reads ambient server state.
"""

from __future__ import annotations

from typing import Any, Awaitable, Callable, TYPE_CHECKING
import logging

if TYPE_CHECKING:
    from .app import Atto


class ASGIAdapter:
    """
    ASGI 3 application serving an ``Atto`` instance.

    Example:
        app = Atto().add_route("home", "/", view="home.html")
        asgi_app = ASGIAdapter(app)   # uvicorn module:asgi_app
    """

    __slots__ = ("app", "logger")

    def __init__(self, app: "Atto"):
        self.app = app
        self.logger = logging.getLogger("atto.asgi")

    async def __call__(self, scope: dict, receive: Callable[[], Awaitable[dict]], send: Callable[[dict], Awaitable[None]]):
        scope_type = scope["type"]
        if scope_type == "http":
            await self.handle_http(scope, receive, send)
        elif scope_type == "lifespan":
            await self.handle_lifespan(scope, receive, send)
        elif scope_type == "websocket":
            await self.handle_websocket(scope, receive, send)

    @staticmethod
    def request_target(scope: dict) -> str:
        """Path plus query string, as the pipeline expects it."""
        path = scope.get("path", "/") or "/"
        query_string: Any = scope.get("query_string", b"")
        if isinstance(query_string, bytes):
            query_string = query_string.decode("latin-1")
        return f"{path}?{query_string}" if query_string else path

    async def handle_http(self, scope: dict, receive: Callable, send: Callable):
        """Dispatch one HTTP request and send the response."""
        path = self.request_target(scope)
        method = scope.get("method", "GET")

        response = self.app.dispatch(path, method)
        self.logger.debug("%s %s -> %d", method, path, response.status)

        if method.upper() == "HEAD":
            response.headers["content-length"] = str(len(response.body))
            await send({
                "type": "http.response.start",
                "status": response.status,
                "headers": [
                    (name.encode("latin1"), value.encode("latin1"))
                    for name, value in response.headers.items()
                ],
            })
            await send({"type": "http.response.body", "body": b"", "more_body": False})
            return

        await response.send_asgi(send)

    async def handle_websocket(self, scope: dict, receive: Callable, send: Callable):
        """WebSockets are not served; the handshake is rejected."""
        message = await receive()
        if message["type"] == "websocket.connect":
            await send({"type": "websocket.close", "code": 1000})

    async def handle_lifespan(self, scope: dict, receive: Callable, send: Callable):
        """Acknowledge ASGI lifespan events."""
        while True:
            message = await receive()

            if message["type"] == "lifespan.startup":
                self.logger.debug("Startup complete (%d routes)", len(self.app.routes))
                await send({"type": "lifespan.startup.complete"})

            elif message["type"] == "lifespan.shutdown":
                self.logger.debug("Shutdown complete")
                await send({"type": "lifespan.shutdown.complete"})
                break
