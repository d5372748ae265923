from __future__ import annotations

"""
Name Interning.

Bidirectional table between strings and small sequential integers. Entity
identity is built on these indexes, so hashing and comparing graph nodes
never touches the underlying path strings.
"""

from typing import Dict, List

from mkmk.domain.errors import InternalError


class NameTable:
    """Append-only string table; an index is a position in insertion order."""

    def __init__(self) -> None:
        self._names: List[str] = []
        self._indexes: Dict[str, int] = {}

    def insert(self, name: str) -> int:
        """Return the index of `name`, assigning the next one if unseen."""
        index = self._indexes.get(name)
        if index is not None:
            return index
        index = len(self._names)
        self._indexes[name] = index
        self._names.append(name)
        return index

    def lookup(self, index: int) -> str:
        """
        Return the name stored at `index`.

        Raises:
            InternalError: If no name was ever assigned `index`.
        """
        if not 0 <= index < len(self._names):
            raise InternalError(f"name index {index} out of range ({len(self._names)} names)")
        return self._names[index]

    __getitem__ = lookup

    def __contains__(self, name: object) -> bool:
        return name in self._indexes

    def __len__(self) -> int:
        return len(self._names)
