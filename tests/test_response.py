"""
Tests for Response.
"""

import pytest
from atto.response import Response

from conftest import SendCollector


class TestResponse:

    def test_defaults(self):
        response = Response("<p>hi</p>")
        assert response.status == 200
        assert response.text == "<p>hi</p>"
        assert response.body == b"<p>hi</p>"
        assert response.headers["content-type"] == "text/html; charset=utf-8"
        assert not response.is_redirect
        assert str(response) == "<p>hi</p>"

    def test_none_content(self):
        assert Response(None).text == ""

    def test_media_type(self):
        assert Response("{}", media_type="application/json").headers["content-type"] == "application/json"

    def test_header_names_are_lower_cased(self):
        response = Response("", headers={"X-Custom": "1", "Content-Type": "text/plain"})
        assert response.headers == {"x-custom": "1", "content-type": "text/plain"}

    def test_header_injection_rejected(self):
        with pytest.raises(ValueError):
            Response("", headers={"x-evil": "a\r\nset-cookie: b"})

    def test_redirect(self):
        response = Response.redirect("/login")
        assert response.status == 301
        assert response.location == "/login"
        assert response.is_redirect
        assert response.text == ""

    def test_redirect_percent_encodes_location(self):
        response = Response.redirect("/blog/café☃?q=a b")
        assert response.location == "/blog/caf%C3%A9%E2%98%83?q=a%20b"

    def test_redirect_keeps_reserved_and_escaped_characters(self):
        url = "https://example.com/a%20b?x=1&y=[2]#top"
        assert Response.redirect(url).location == url

    def test_non_latin1_header_rejected(self):
        with pytest.raises(ValueError):
            Response("", headers={"x-name": "☃"})

    def test_redirect_with_status_and_headers(self):
        response = Response.redirect("/login", 302, headers={"cache-control": "no-store"})
        assert response.status == 302
        assert response.headers["cache-control"] == "no-store"

    def test_coerce(self):
        response = Response("x")
        assert Response.coerce(response) is response
        assert Response.coerce("text").text == "text"
        assert Response.coerce(42).text == "42"

    def test_unicode_body(self):
        assert Response("é").body == "é".encode("utf-8")


class TestSendASGI:

    @pytest.mark.asyncio
    async def test_send(self):
        send = SendCollector()
        await Response("hello", status=201).send_asgi(send)

        assert send.messages[0]["type"] == "http.response.start"
        assert send.status == 201
        assert send.headers["content-length"] == "5"
        assert send.headers["content-type"] == "text/html; charset=utf-8"
        assert send.body == b"hello"
        assert send.messages[-1]["more_body"] is False
