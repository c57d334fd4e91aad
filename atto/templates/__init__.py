"""
Atto Templates - Jinja2 rendering of views and layouts.
"""

from .engine import TemplateEngine
from .loader import TemplateLoader

__all__ = ["TemplateEngine", "TemplateLoader"]
