"""
Response - the result of dispatching a request.

Holds a text body, a status code and headers, and can send itself over
ASGI. Redirects are ordinary responses carrying a ``location`` header.
"""

from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional, Tuple
from urllib.parse import quote

# Reserved and already-escaped characters stay as they are in a location
URL_SAFE_CHARS = ":/?#[]@!$&'()*+,;=%~"


class Response:
    """
    HTTP response with a text body.

    Args:
        content: Response body
        status: HTTP status code
        headers: Response headers (names are lower-cased)
        media_type: Content-Type override
        encoding: Text encoding (default utf-8)
    """

    def __init__(
        self,
        content: str = "",
        status: int = 200,
        headers: Optional[Mapping[str, str]] = None,
        media_type: Optional[str] = None,
        *,
        encoding: str = "utf-8",
    ):
        self.status = status
        self.content = "" if content is None else str(content)
        self.encoding = encoding

        self.headers: Dict[str, str] = {}
        for key, value in (headers or {}).items():
            self.set_header(key, value)

        if media_type:
            self.headers["content-type"] = media_type
        elif "content-type" not in self.headers:
            self.headers["content-type"] = f"text/html; charset={encoding}"

    @classmethod
    def redirect(
        cls,
        url: str,
        status: int = 301,
        *,
        headers: Optional[Dict[str, str]] = None,
    ) -> "Response":
        """
        Create a redirect response pointing at ``url``.

        Characters outside the URL character set are percent-encoded as UTF-8.
        """
        redirect_headers = {"location": quote(url, safe=URL_SAFE_CHARS)}
        if headers:
            redirect_headers.update(headers)
        return cls(content="", status=status, headers=redirect_headers)

    @classmethod
    def coerce(cls, value: Any) -> "Response":
        """Wrap a handler return value; responses pass through unchanged."""
        if isinstance(value, Response):
            return value
        return cls(content=str(value))

    def set_header(self, name: str, value: str) -> None:
        if "\r" in value or "\n" in value:
            raise ValueError(f"Header '{name}' contains a line break")
        try:
            value.encode("latin-1")
        except UnicodeEncodeError:
            raise ValueError(f"Header '{name}' is not latin-1 text") from None
        self.headers[name.lower()] = value

    @property
    def text(self) -> str:
        return self.content

    @property
    def body(self) -> bytes:
        return self.content.encode(self.encoding)

    @property
    def location(self) -> Optional[str]:
        return self.headers.get("location")

    @property
    def is_redirect(self) -> bool:
        return 300 <= self.status < 400 and "location" in self.headers

    def _prepare_headers(self, body: bytes) -> List[Tuple[bytes, bytes]]:
        headers = dict(self.headers)
        headers.setdefault("content-length", str(len(body)))
        return [
            (name.encode("latin1"), value.encode("latin1"))
            for name, value in headers.items()
        ]

    async def send_asgi(self, send: Callable[[dict], Awaitable[None]]) -> None:
        """Send the response as ``http.response.start`` and one body message."""
        body = self.body
        await send({
            "type": "http.response.start",
            "status": self.status,
            "headers": self._prepare_headers(body),
        })
        await send({
            "type": "http.response.body",
            "body": body,
            "more_body": False,
        })

    def __str__(self) -> str:
        return self.content

    def __repr__(self) -> str:
        return f"<Response status={self.status} length={len(self.content)}>"
