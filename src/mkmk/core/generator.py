from __future__ import annotations

"""
Makefile Generator.

Reads root sources and everything they include, records which translation
units define an entry point, derives per-executable object sets from the
include graph, and hands the results to the RulePrinter.

Usage is strictly sequential: read_files, then evaluate, then print.
"""

import logging
import os
from typing import Iterable, List, Optional, Set, TextIO

from mkmk.core.graph.dependencies import DependencyGraph
from mkmk.core.graph.entity import Entity, EntityContext
from mkmk.core.printer import RulePrinter
from mkmk.core.scanner import LineScanner
from mkmk.domain.config import BuildConfig
from mkmk.domain.errors import (
    CircularDependencyError,
    ConfigurationError,
    CyclicIncludeError,
    InternalError,
    SourceReadError,
    UnrecognizedSourceError,
)
from mkmk.domain.models import FileKind

logger = logging.getLogger(__name__)


class Generator:
    """
    Builds the include graph, entry-point set and linkage map of a project.

    Args:
        config: Project configuration, shared with the printer.
        base_dir: Directory that source names are relative to.
        scanner: Line matcher; the default recognizes '#include "' and 'int main('.

    Raises:
        ConfigurationError: If corpus files cannot be told apart from headers.
    """

    def __init__(
            self,
            config: BuildConfig,
            base_dir: str = "",
            scanner: Optional[LineScanner] = None,
    ) -> None:
        if not config.corpus_ext:
            raise ConfigurationError("extensionless body files are not supported: "
                                     "corpus files cannot be told apart from headers")
        self._config = config
        self._base_dir = base_dir
        self._scanner = scanner or LineScanner()
        self._entities = EntityContext(config)
        self._includes = DependencyGraph()   # {source: {headers}}
        self._linkages = DependencyGraph()   # {linked: {objects}}
        self._mains: Set[Entity] = set()     # corpus files defining main

    # ==========================================================================
    # ACCESSORS
    # ==========================================================================

    @property
    def entities(self) -> EntityContext:
        return self._entities

    @property
    def includes(self) -> DependencyGraph:
        return self._includes

    @property
    def linkages(self) -> DependencyGraph:
        return self._linkages

    @property
    def entry_points(self) -> Set[Entity]:
        return self._mains

    # ==========================================================================
    # PHASES
    # ==========================================================================

    def read_files(self, roots: Iterable[str]) -> None:
        """
        Scan each root and, transitively, every local file it includes.

        A file is read at most once, however many roots reach it.

        Args:
            roots: Source paths relative to the base directory; a leading
                   './' is ignored.

        Raises:
            UnrecognizedSourceError: A path has neither source extension.
            SourceReadError: A file cannot be opened.
            MalformedIncludeError: An include directive is unterminated.
            CyclicIncludeError: Files include each other.
        """
        current_dir = "." + self._config.path_separator
        for src in roots:
            if src.startswith(current_dir):
                src = src[len(current_dir):]
            root = self.source_to_entity(src)
            logger.debug(f"Reading root {src}")
            try:
                self._includes.walk(root, self._read_once)
            except CircularDependencyError as e:
                raise CyclicIncludeError(e.entity, e.path, self._cycle_message(e)) from e

        logger.info(f"Scanned {len(self._includes)} sources, "
                    f"{len(self._mains)} define an entry point")

    def evaluate(self) -> None:
        """
        Compute linkages and close the include graph.

        Raises:
            CircularDependencyError: Components depend on each other at link time.
        """
        # Transitive component dependencies, one object per source name.
        objects = DependencyGraph()
        for source, incs in self._includes.items():
            key = source.to(FileKind.OBJECT)
            deps = objects[key]
            for inc in incs:
                obj = inc.to(FileKind.OBJECT)
                if obj != key:
                    deps.add(obj)

        objects.extrapolate()

        # Each main links its own object plus every reachable object that has a body.
        for src in self._mains:
            obj = src.to(FileKind.OBJECT)
            deps = self._linkages[src.to(FileKind.LINKED)]
            deps.add(obj)
            deps.update(dep for dep in objects[obj] if self._has_corpus(dep))

        self._includes.extrapolate()

    def print(self, out: TextIO) -> None:
        """Render all rules to `out`."""
        printer = RulePrinter(out, self._config)
        printer.preamble()

        sources = sorted(
            (src for src in self._includes if src.kind is FileKind.CORPUS),
            key=Entity.sort_key,
        )
        executables = sorted(self._linkages, key=Entity.sort_key)

        targets: List[Entity] = list(executables)
        targets.extend(src.to(FileKind.OBJECT) for src in sources)
        printer.all(targets)
        printer.clean()

        folders: Set[Entity] = set()
        for src in sources:
            printer.compile(src, sorted(self._includes[src], key=Entity.sort_key))
            folders.add(src.parent())
        for exe in executables:
            printer.link(exe, sorted(self._linkages[exe], key=Entity.sort_key))
            folders.add(exe.parent())
        for folder in sorted(folders, key=Entity.sort_key):
            printer.mkdir(folder)

    # ==========================================================================
    # NAME MAPPING
    # ==========================================================================

    def source_to_entity(self, source: str) -> Entity:
        """
        Recognize corpus and header file names.

        Raises:
            UnrecognizedSourceError: The name carries neither extension.
        """
        for ext, kind in ((self._config.corpus_ext, FileKind.CORPUS),
                          (self._config.header_ext, FileKind.HEADER)):
            if source.endswith(ext):
                return self._entities.get(source[:len(source) - len(ext)], kind)
        raise UnrecognizedSourceError(source)

    def entity_to_source(self, ent: Entity) -> str:
        """
        Return the file name of a source entity.

        Raises:
            InternalError: `ent` is not a corpus or header entity.
        """
        if not ent.kind.is_source:
            raise InternalError(f"{ent.name}: entity is not of source type")
        if ent.kind is FileKind.CORPUS:
            return ent.name + self._config.corpus_ext
        return ent.name + self._config.header_ext

    # ==========================================================================
    # PRIVATE HELPERS
    # ==========================================================================

    def _read_once(self, node: Entity) -> bool:
        """Walk visitor: scan `node` unless it is already in the include graph."""
        if node in self._includes:
            return False

        incs = self._includes[node]
        file = self.entity_to_source(node)
        path = os.path.join(self._base_dir, file) if self._base_dir else file
        try:
            with open(path, "r", encoding="utf-8", errors="replace") as f:
                for line in f:
                    line = line.rstrip("\r\n")
                    header = self._scanner.include_target(line)
                    if header is not None:
                        incs.add(self.source_to_entity(header))
                    elif self._scanner.defines_entry_point(line):
                        self._mains.add(node)
        except OSError as e:
            raise SourceReadError(file, e.strerror or "") from e

        logger.debug(f"Read {file}: {len(incs)} includes")
        return True

    def _has_corpus(self, obj: Entity) -> bool:
        return obj.to(FileKind.CORPUS) in self._includes

    def _cycle_message(self, error: CircularDependencyError) -> str:
        """Describe an include cycle down to the repeated file."""
        node = error.entity
        lines = [f"cyclic include in {self.entity_to_source(node)}"]
        for p in reversed(error.path):
            lines.append(f"    included by {self.entity_to_source(p)}")
            if p == node:
                break
        return "\n".join(lines)
