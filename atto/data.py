"""
Nested key-value data container.

Values are addressed by paths such as ``user.name``, ``user/name`` or
``user:name``. The three separators are interchangeable; the names
between them consist of ASCII letters and digits.
"""

from __future__ import annotations

import copy
import re
from typing import Any, Dict, Iterator, List, Optional

from .faults import InvalidDataPathFault

PATH_RE = re.compile(r"[a-z0-9]+(?:[:./][a-z0-9]+)*", re.IGNORECASE)
SEPARATOR_RE = re.compile(r"[:./]")

_MISSING = object()


def split_path(path: str) -> List[str]:
    """
    Split a data path into its nodes.

    Raises:
        InvalidDataPathFault: The path is empty or malformed
    """
    if not isinstance(path, str) or PATH_RE.fullmatch(path) is None:
        raise InvalidDataPathFault(str(path))
    return SEPARATOR_RE.split(path)


class DataContainer:
    """Tree of dictionaries addressed by separator-delimited paths."""

    def __init__(self, data: Optional[Dict[str, Any]] = None):
        self._data: Dict[str, Any] = dict(data or {})

    def get(self, path: str, default: Any = None) -> Any:
        """
        Value at ``path``, or ``default`` when any node is missing or a
        node on the way is not a mapping.
        """
        reference: Any = self._data
        for node in split_path(path):
            if isinstance(reference, dict) and node in reference:
                reference = reference[node]
            else:
                return default
        return reference

    def set(self, path: str, value: Any) -> "DataContainer":
        """
        Store ``value`` at ``path``; intermediate nodes that are missing or
        not mappings are replaced by empty ones. Returns the container.
        """
        nodes = split_path(path)
        reference = self._data
        for node in nodes[:-1]:
            if not isinstance(reference.get(node), dict):
                reference[node] = {}
            reference = reference[node]
        reference[nodes[-1]] = value
        return self

    def has(self, path: str) -> bool:
        return self.get(path, _MISSING) is not _MISSING

    def remove(self, path: str) -> "DataContainer":
        """Delete the value at ``path`` if present. Returns the container."""
        *parents, leaf = split_path(path)
        reference: Any = self._data
        for node in parents:
            reference = reference.get(node) if isinstance(reference, dict) else None
        if isinstance(reference, dict):
            reference.pop(leaf, None)
        return self

    def all(self) -> Dict[str, Any]:
        """Deep copy of the whole tree."""
        return copy.deepcopy(self._data)

    def __getitem__(self, path: str) -> Any:
        value = self.get(path, _MISSING)
        if value is _MISSING:
            raise KeyError(path)
        return value

    def __setitem__(self, path: str, value: Any) -> None:
        self.set(path, value)

    def __delitem__(self, path: str) -> None:
        if not self.has(path):
            raise KeyError(path)
        self.remove(path)

    def __contains__(self, path: str) -> bool:
        return self.has(path)

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"DataContainer({self._data!r})"
