"""
Tests for template loading and rendering.
"""

import pytest
from atto.templates import TemplateEngine, TemplateLoader
from atto.faults import TemplateRenderFault


class TestTemplateLoader:

    def test_resolves_existing_file_path(self, tmp_path):
        path = tmp_path / "page.html"
        path.write_text("x")
        assert TemplateLoader().resolve(str(path)) == path

    def test_resolves_relative_to_root(self, tmp_path):
        (tmp_path / "page.html").write_text("x")
        assert TemplateLoader(str(tmp_path)).resolve("page.html") == tmp_path / "page.html"

    def test_directory_is_not_a_template(self, tmp_path):
        assert TemplateLoader(str(tmp_path)).resolve(".") is None

    def test_unknown_name(self, tmp_path):
        assert TemplateLoader(str(tmp_path)).resolve("missing.html") is None
        assert TemplateLoader().resolve("") is None
        assert TemplateLoader().resolve("<h1>not a path\0</h1>") is None

    def test_list_templates(self, tmp_path):
        (tmp_path / "a.html").write_text("a")
        (tmp_path / "sub").mkdir()
        (tmp_path / "sub" / "b.html").write_text("b")
        assert TemplateLoader(str(tmp_path)).list_templates() == ["a.html", "sub/b.html"]


class TestTemplateEngine:

    def test_render_file_with_context(self, tmp_path):
        (tmp_path / "hello.html").write_text("Hello {{ name }}!")
        engine = TemplateEngine(str(tmp_path))
        assert engine.render("hello.html", {"name": "Atto"}) == "Hello Atto!"

    def test_render_absolute_path_without_root(self, tmp_path):
        path = tmp_path / "hello.txt"
        path.write_text("Hello {{ name }}")
        assert TemplateEngine().render(str(path), {"name": "file"}) == "Hello file"

    def test_non_file_is_returned_verbatim(self):
        engine = TemplateEngine()
        assert engine.render("<h1>{{ not rendered }}</h1>") == "<h1>{{ not rendered }}</h1>"

    def test_html_is_autoescaped(self, tmp_path):
        (tmp_path / "page.html").write_text("{{ value }}")
        (tmp_path / "page.txt").write_text("{{ value }}")
        engine = TemplateEngine(str(tmp_path))
        assert engine.render("page.html", {"value": "<b>"}) == "&lt;b&gt;"
        assert engine.render("page.txt", {"value": "<b>"}) == "<b>"

    def test_autoescape_disabled(self, tmp_path):
        (tmp_path / "page.html").write_text("{{ value }}")
        engine = TemplateEngine(str(tmp_path), autoescape=False)
        assert engine.render("page.html", {"value": "<b>"}) == "<b>"

    def test_include_relative_to_root(self, tmp_path):
        (tmp_path / "header.html").write_text("<header/>")
        (tmp_path / "page.html").write_text("{% include 'header.html' %}<main/>")
        assert TemplateEngine(str(tmp_path)).render("page.html") == "<header/><main/>"

    def test_syntax_error_is_a_fault(self, tmp_path):
        (tmp_path / "broken.html").write_text("{% if %}")
        with pytest.raises(TemplateRenderFault) as exc_info:
            TemplateEngine(str(tmp_path)).render("broken.html")
        assert exc_info.value.template == "broken.html"
        assert exc_info.value.code == "TEMPLATE_RENDER_FAILED"

    def test_missing_include_is_a_fault(self, tmp_path):
        (tmp_path / "page.html").write_text("{% include 'missing.html' %}")
        with pytest.raises(TemplateRenderFault, match="missing.html"):
            TemplateEngine(str(tmp_path)).render("page.html")

    def test_errors_from_context_callables_propagate(self, tmp_path):
        (tmp_path / "page.html").write_text("{{ fail() }}")

        def fail():
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError, match="boom"):
            TemplateEngine(str(tmp_path)).render("page.html", {"fail": fail})

    def test_globals_and_filters(self, tmp_path):
        (tmp_path / "page.txt").write_text("{{ site }} {{ 'x' | shout }}")
        engine = TemplateEngine(
            str(tmp_path),
            globals={"site": "atto"},
            filters={"shout": lambda value: value.upper() + "!"},
        )
        assert engine.render("page.txt") == "atto X!"

    def test_set_root(self, tmp_path):
        first = tmp_path / "first"
        second = tmp_path / "second"
        first.mkdir()
        second.mkdir()
        (first / "page.html").write_text("first")
        (second / "page.html").write_text("second")

        engine = TemplateEngine(str(first))
        assert engine.render("page.html") == "first"
        engine.set_root(str(second))
        assert engine.root == str(second)
        assert engine.render("page.html") == "second"

    def test_file_changes_are_picked_up(self, tmp_path):
        path = tmp_path / "page.html"
        path.write_text("one")
        engine = TemplateEngine(str(tmp_path))
        assert engine.render("page.html") == "one"

        path.write_text("two")
        import os
        stat = os.stat(path)
        os.utime(path, (stat.st_atime, stat.st_mtime + 10))
        assert engine.render("page.html") == "two"
