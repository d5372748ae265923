from __future__ import annotations

"""
Makefile Rule Rendering.

Formats already-computed entities and dependency sets as make rules. No
graph logic lives here: callers decide which rules exist and in which order.
"""

from typing import Iterable, TextIO

from mkmk.core.graph.entity import Entity
from mkmk.domain.config import BuildConfig
from mkmk.domain.models import FileKind


class RulePrinter:
    """Writes make rules for entities to a text stream."""

    def __init__(self, out: TextIO, config: BuildConfig) -> None:
        self._config = config
        self._out = out
        self._indent = " " * config.indent_width

    # -------------------------------------------------------------------------
    # PATHS
    # -------------------------------------------------------------------------

    def path(self, ent: Entity) -> str:
        """Return the path under which `ent` appears in a rule."""
        c = self._config
        kind = ent.kind
        if kind is FileKind.CORPUS:
            return c.source_prefix + ent.name + c.corpus_ext
        if kind is FileKind.HEADER:
            return c.source_prefix + ent.name + c.header_ext
        if kind is FileKind.FOLDER:
            return c.object_prefix + ent.name
        if kind is FileKind.LINKED:
            return c.object_prefix + ent.name + c.linked_ext
        return c.object_prefix + ent.name + c.object_ext

    def _continued(self, ent: Entity) -> str:
        return f" \\\n{self._indent}{self.path(ent)}"

    # -------------------------------------------------------------------------
    # RULES
    # -------------------------------------------------------------------------

    def preamble(self) -> None:
        self._out.write(self._config.preamble + "\n")

    def all(self, targets: Iterable[Entity]) -> None:
        self._out.write(".PHONY: all\nall:")
        for dep in targets:
            self._out.write(self._continued(dep))
        self._out.write("\n")

    def clean(self) -> None:
        self._out.write("\n.PHONY: clean\nclean:\n\t$(RMDIR) $(OBJDIR)\n")

    def compile(self, source: Entity, headers: Iterable[Entity]) -> None:
        """Object rule: source plus headers, with an order-only folder prerequisite."""
        target = source.to(FileKind.OBJECT)
        parts = ["\n", self.path(target), ":", self._continued(source)]
        parts.extend(self._continued(dep) for dep in headers)
        # '|' marks an order-only prerequisite
        parts.append(f"  \\\n{self._indent}| {self.path(target.parent())}")
        parts.append(f"\n\t{self._config.compile_command}\n")
        self._out.write("".join(parts))

    def link(self, target: Entity, objects: Iterable[Entity]) -> None:
        parts = ["\n", self.path(target), ":"]
        parts.extend(self._continued(dep) for dep in objects)
        parts.append(f"\n\t{self._config.link_command}\n")
        self._out.write("".join(parts))

    def mkdir(self, folder: Entity) -> None:
        self._out.write(f"\n{self.path(folder)}:\n\t$(MKDIR) $@\n")
