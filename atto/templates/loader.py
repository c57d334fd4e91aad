"""
Template Loader - resolves template names against the filesystem.

A name is tried as a file path first (absolute, or relative to the working
directory) and then relative to the configured template root.
"""

from typing import Any, Callable, List, Optional, Tuple
from pathlib import Path
import os

from jinja2 import BaseLoader, TemplateNotFound


class TemplateLoader(BaseLoader):
    """
    Filesystem loader keyed by file path.

    Args:
        root: Directory used for names that are not existing file paths
        encoding: Source encoding
    """

    def __init__(self, root: Optional[str] = None, encoding: str = "utf-8"):
        self.root = Path(root) if root else None
        self.encoding = encoding

    def resolve(self, template: str) -> Optional[Path]:
        """Path of the file a template name refers to, or None."""
        if not template or "\0" in template:
            return None

        candidates = [Path(template)]
        if self.root is not None:
            candidates.append(self.root / template)

        for candidate in candidates:
            try:
                if candidate.is_file():
                    return candidate
            except OSError:
                continue
        return None

    def get_source(
        self,
        environment: Any,
        template: str,
    ) -> Tuple[str, Optional[str], Optional[Callable[[], bool]]]:
        """
        Load template source.

        Returns:
            Tuple of (source, filename, uptodate_func)

        Raises:
            TemplateNotFound: If no file matches the name
        """
        path = self.resolve(template)
        if path is None:
            raise TemplateNotFound(template)

        source = path.read_text(encoding=self.encoding)
        mtime = os.path.getmtime(path)

        def uptodate() -> bool:
            try:
                return os.path.getmtime(path) == mtime
            except OSError:
                return False

        return source, str(path), uptodate

    def list_templates(self) -> List[str]:
        """Template files below the root, relative to it."""
        if self.root is None or not self.root.is_dir():
            return []

        templates = []
        for dirpath, _dirs, files in os.walk(self.root):
            for filename in files:
                full = Path(dirpath) / filename
                templates.append(full.relative_to(self.root).as_posix())
        return sorted(templates)
