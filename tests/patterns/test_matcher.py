"""
Unit tests for the pattern matcher.

Tests cover:
- Anchored matching
- Parameter extraction
- Optional groups and wildcards
- Method gating
- Query string stripping
"""

import pytest
from atto.patterns import compile_pattern, match_pattern, strip_query
from atto.faults import ConstraintInvalidFault


def match(source: str, path: str, method: str = "GET"):
    return match_pattern(compile_pattern(source), path, method)


class TestBasicMatching:
    """Test anchored matching of single patterns."""

    def test_match_static_path(self):
        result = match("/users/list", "/users/list")
        assert result is not None
        assert result.params == {}

    def test_no_partial_match(self):
        assert match("/blog", "/blog/new-post") is None
        assert match("/blog/new-post", "/blog") is None

    def test_trailing_slash_is_significant(self):
        assert match("/foo", "/foo/") is None
        assert match("/foo/", "/foo") is None

    def test_case_sensitive(self):
        assert match("/blog", "/Blog") is None

    def test_trailing_newline_does_not_match(self):
        assert match("/foo", "/foo\n") is None

    def test_empty_pattern_matches_empty_path(self):
        assert match("", "") is not None
        assert match("", "/") is None


class TestParameters:
    """Test parameter extraction."""

    def test_required_parameter(self):
        result = match("/blog/:page", "/blog/4")
        assert result.params == {"page": "4"}

    def test_default_constraint_excludes_slash(self):
        assert match("/help/:subject", "/help/a/b") is None

    def test_constraint_enforced(self):
        assert match("/blog/:page<\\d+>", "/blog/a") is None
        assert match("/blog/:page<\\d+>", "/blog/4").params == {"page": "4"}

    def test_constraint_must_match_whole_value(self):
        assert match("/blog/:page<\\d>", "/blog/42") is None

    def test_constraint_in_optional_group(self):
        source = "/blog/:slug<[a-z\\-]+>[/comments/:page<\\d+>]"
        assert match(source, "/blog/foo-bar") is not None
        assert match(source, "/blog/foo-bar/comments/4").params == {"slug": "foo-bar", "page": "4"}
        assert match(source, "/blog/foo+bar/comments/4") is None
        assert match(source, "/blog/foo-bar/comments/4a") is None

    def test_unmatched_optional_parameters_are_omitted(self):
        result = match("/blog[/:page<\\d+>]", "/blog")
        assert result is not None
        assert result.params == {}
        assert "page" not in result.params

    def test_nested_optional_parameters(self):
        source = "/foo[/:bar[/:baz]]"
        assert match(source, "/foo").params == {}
        assert match(source, "/foo/x").params == {"bar": "x"}
        assert match(source, "/foo/x/y").params == {"bar": "x", "baz": "y"}

    def test_repeated_parameter_must_repeat_value(self):
        assert match("/:lang/docs/:lang", "/en/docs/en").params == {"lang": "en"}
        assert match("/:lang/docs/:lang", "/en/docs/nl") is None

    def test_capturing_group_inside_constraint(self):
        result = match("/:lang<(en|nl)>/home", "/nl/home")
        assert result.params == {"lang": "nl"}

    def test_malformed_constraint_raises_when_matched(self):
        with pytest.raises(ConstraintInvalidFault):
            match("/x/:id<[>", "/x/1")


class TestWildcards:
    """Test wildcard matching."""

    @pytest.mark.parametrize("path", ["/foo", "/foobar", "/foo/bar/baz"])
    def test_wildcard_suffix(self, path):
        assert match("/foo*", path) is not None

    def test_wildcard_requires_prefix(self):
        assert match("/foo*", "/fo") is None

    def test_catch_all(self):
        assert match("*", "/blog/new-post") is not None
        assert match("*", "") is not None

    def test_wildcard_captures_nothing(self):
        assert match("/files/*", "/files/a/b.txt").params == {}


class TestMethods:
    """Test HTTP method gating."""

    def test_declared_methods(self):
        source = "POST|DELETE /blog"
        assert match(source, "/blog", "GET") is None
        assert match(source, "/blog", "POST") is not None
        assert match(source, "/blog", "DELETE") is not None

    def test_method_case_insensitive(self):
        assert match("POST /blog", "/blog", "post") is not None

    def test_no_methods_means_any(self):
        for method in ["GET", "POST", "PUT", "OPTIONS"]:
            assert match("/blog", "/blog", method) is not None


class TestQueryString:
    """Test query string handling."""

    def test_strip_query(self):
        assert strip_query("/blog?page=2") == "/blog"
        assert strip_query("/blog") == "/blog"
        assert strip_query("/blog?a=1?b=2") == "/blog"

    def test_query_ignored_when_matching(self):
        result = match("/blog/:page", "/blog/4?sort=desc")
        assert result.params == {"page": "4"}

