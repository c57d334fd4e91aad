"""
Tests for the route registry.
"""

import dataclasses

import pytest
from atto.routing import Route, RouteMatch, RouteRegistry
from atto.patterns import PatternCache, PatternSyntaxError, get_global_cache
from atto.faults import RouteNotFoundFault, MissingRequiredParameterFault, CatchAllAssemblyFault


class TestRoute:

    def test_route_compiles_pattern(self):
        route = Route(name="blog", pattern="POST /blog/:id")
        assert route.compiled.raw == "POST /blog/:id"
        assert route.methods == frozenset({"POST"})

    def test_route_is_immutable(self):
        route = Route(name="blog", pattern="/blog")
        with pytest.raises(dataclasses.FrozenInstanceError):
            route.view = "other.html"

    def test_route_to_dict(self):
        def handler(ctx):
            return None

        data = Route(name="blog", pattern="GET /blog[/:page]", view="blog.html", callback=handler).to_dict()
        assert data == {
            "name": "blog",
            "pattern": "GET /blog[/:page]",
            "methods": ["GET"],
            "params": ["page"],
            "view": "blog.html",
            "callback": handler.__qualname__,
        }


class TestRouteRegistry:

    def setup_method(self):
        self.registry = RouteRegistry()

    def test_add_and_get(self):
        route = self.registry.add("blog", "/blog", view="blog.html")
        assert self.registry.get("blog") is route
        assert self.registry.has("blog")
        assert "blog" in self.registry
        assert len(self.registry) == 1

    def test_registry_compiles_through_its_cache(self):
        cache = PatternCache()
        registry = RouteRegistry(cache)
        registry.add("blog", "/blog/:id")
        assert registry.cache is cache
        assert "/blog/:id" in cache
        assert "/blog/:id" not in get_global_cache()

    def test_registry_defaults_to_global_cache(self):
        assert RouteRegistry().cache is get_global_cache()

    def test_get_unknown_route(self):
        with pytest.raises(RouteNotFoundFault) as exc_info:
            self.registry.get("help")
        assert exc_info.value.route == "help"
        assert exc_info.value.message == (
            'No route found with name "help". Please check the name of the route '
            "or give a new route with the same name."
        )

    def test_invalid_pattern_is_not_registered(self):
        with pytest.raises(PatternSyntaxError):
            self.registry.add("broken", "/blog[")
        assert not self.registry.has("broken")

    def test_match_returns_route_and_params(self):
        self.registry.add("blog", "/blog/:page")
        result = self.registry.match("/blog/4", "GET")
        assert isinstance(result, RouteMatch)
        assert result.name == "blog"
        assert result.params == {"page": "4"}

    def test_match_does_not_annotate_route(self):
        route = self.registry.add("blog", "/blog/:page")
        self.registry.match("/blog/4", "GET")
        assert not hasattr(route, "params")

    def test_first_registered_wins(self):
        self.registry.add("first", "/blog/:slug")
        self.registry.add("second", "/blog/new")
        assert self.registry.match("/blog/new", "GET").name == "first"

    def test_method_mismatch_falls_through(self):
        self.registry.add("blog", "POST|DELETE /blog")
        self.registry.add("blog-post", "/blog/:slug")

        assert self.registry.match("/blog", "GET") is None
        assert self.registry.match("/blog/foo-bar", "POST").name == "blog-post"
        assert self.registry.match("/blog", "POST").name == "blog"
        assert self.registry.match("/blog", "DELETE").name == "blog"

    def test_no_match(self):
        self.registry.add("blog", "/blog")
        assert self.registry.match("/blog/new-post", "GET") is None

    def test_replacing_keeps_position(self):
        self.registry.add("a", "/x")
        self.registry.add("b", "/:any")
        self.registry.add("a", "/y")

        assert [route.name for route in self.registry] == ["a", "b"]
        assert self.registry.get("a").pattern == "/y"
        assert self.registry.match("/x", "GET").name == "b"

    def test_assemble(self):
        self.registry.add("blog", "/blog[/:page]")
        assert self.registry.assemble("blog", {"page": 3}, {"sort": "desc"}) == "/blog/3?sort=desc"

    def test_assemble_unknown_route(self):
        with pytest.raises(RouteNotFoundFault):
            self.registry.assemble("nonexistent", {})

    def test_assemble_names_route_in_errors(self):
        self.registry.add("help", "/help/:subject")
        with pytest.raises(MissingRequiredParameterFault) as exc_info:
            self.registry.assemble("help", {})
        assert exc_info.value.parameter == "subject"
        assert exc_info.value.route == "help"

    def test_assemble_catch_all(self):
        self.registry.add("catch-all", "*")
        with pytest.raises(CatchAllAssemblyFault):
            self.registry.assemble("catch-all")

    def test_iteration_is_a_snapshot(self):
        self.registry.add("a", "/a")
        for route in self.registry:
            self.registry.add("b", "/b")
        assert len(self.registry) == 2
