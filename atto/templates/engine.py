"""
Template Engine - synchronous Jinja2 rendering for views and layouts.

``render(name)`` renders the file ``name`` refers to. A name that is not a
file is returned unchanged, so a view or layout may also be given as a
literal string.
"""

import logging
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional

from jinja2 import Environment, TemplateError, TemplateNotFound, select_autoescape

from .loader import TemplateLoader
from ..faults import TemplateRenderFault

logger = logging.getLogger("atto.templates")


class TemplateEngine:
    """
    Jinja2 template engine.

    Args:
        root: Template root directory
        autoescape: Enable HTML autoescaping for .html/.htm/.xml files
        globals: Custom global variables/functions
        filters: Custom filters

    Example:
        engine = TemplateEngine(root="/path/to/templates")
        html = engine.render("profile.html", {"user": user})
    """

    def __init__(
        self,
        root: Optional[str] = None,
        *,
        autoescape: bool = True,
        globals: Optional[Dict[str, Any]] = None,
        filters: Optional[Dict[str, Callable]] = None,
    ):
        self.loader = TemplateLoader(root)
        self.env = Environment(
            loader=self.loader,
            autoescape=select_autoescape(
                enabled_extensions=["html", "htm", "xml"],
                default_for_string=False,
            ) if autoescape else False,
            keep_trailing_newline=True,
        )

        if filters:
            self.env.filters.update(filters)
        if globals:
            self.env.globals.update(globals)

    @property
    def root(self) -> Optional[str]:
        return str(self.loader.root) if self.loader.root is not None else None

    def set_root(self, root: Optional[str]) -> None:
        """Change the template root, dropping templates loaded from the old one."""
        self.loader.root = Path(root) if root else None
        if self.env.cache is not None:
            self.env.cache.clear()

    def exists(self, template_name: str) -> bool:
        """Whether ``template_name`` resolves to a template file."""
        return self.loader.resolve(template_name) is not None

    def render(
        self,
        template_name: str,
        context: Optional[Mapping[str, Any]] = None,
    ) -> str:
        """
        Render a template file, or return ``template_name`` when it is not one.

        Raises:
            TemplateRenderFault: The template has a syntax error, includes a
                missing template or fails while rendering
        """
        if not self.exists(template_name):
            return template_name

        try:
            template = self.env.get_template(template_name)
            return template.render(**dict(context or {}))
        except TemplateNotFound as exc:
            raise TemplateRenderFault(template_name, f"template '{exc.name}' not found") from exc
        except TemplateError as exc:
            logger.error("Template %r failed: %s", template_name, exc)
            raise TemplateRenderFault(template_name, str(exc)) from exc
