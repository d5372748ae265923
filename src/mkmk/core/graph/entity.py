from __future__ import annotations

"""
Entity Flyweights.

An Entity identifies a file or directory in the build by an interned name
index plus a FileKind. Entities are minted only by an EntityContext, which
owns the name table for one generation run, so the same name shares one slot
across every kind (foo.cpp, foo.hpp, foo.o and the foo executable all point
at index of "foo").
"""

from dataclasses import dataclass, field
from typing import Tuple

from mkmk.core.graph.names import NameTable
from mkmk.domain.config import BuildConfig
from mkmk.domain.models import FileKind

# -----------------------------------------------------------------------------
# ENTITY
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class Entity:
    """
    Immutable (name index, kind) identifier.

    Equality and hashing use only `index` and `kind`; the owning context is
    carried to resolve names. Entities of different contexts must not be mixed.
    """
    context: "EntityContext" = field(compare=False, repr=False)
    index: int
    kind: FileKind

    @property
    def name(self) -> str:
        return self.context.names.lookup(self.index)

    def to(self, kind: FileKind) -> Entity:
        """Reinterpret the same name as another kind."""
        return Entity(self.context, self.index, kind)

    def parent(self) -> Entity:
        """Return the folder containing this entity."""
        return self.context.parent_of(self)

    def sort_key(self) -> Tuple[str, int]:
        return self.name, self.kind.value

    def __repr__(self) -> str:
        return f"Entity({self.name!r}, {self.kind.name})"


# -----------------------------------------------------------------------------
# CONTEXT (FACTORY)
# -----------------------------------------------------------------------------

class EntityContext:
    """Factory and name cache for the entities of one run."""

    def __init__(self, config: BuildConfig) -> None:
        self._separator = config.path_separator
        self.names = NameTable()

    def get(self, name: str, kind: FileKind) -> Entity:
        return Entity(self, self.names.insert(name), kind)

    def parent_of(self, child: Entity) -> Entity:
        name = child.name
        last = name.rfind(self._separator)
        return self.get(name[:last] if last >= 0 else "", FileKind.FOLDER)
