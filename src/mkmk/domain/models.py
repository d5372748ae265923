from __future__ import annotations

"""
Build Graph Domain Models.

Defines the closed set of file categories that appear in generated rules.
Source kinds are read from disk; target kinds only exist in the output.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List

# -----------------------------------------------------------------------------
# FILE CATEGORIES
# -----------------------------------------------------------------------------

class FileKind(Enum):
    """
    Identifies the kind of file an entity stands for.

    Attributes:
        CORPUS: Translation-unit body (e.g. foo.cpp).
        HEADER: Interface file (e.g. foo.hpp).
        FOLDER: Directory holding build targets.
        LINKED: Executable program file.
        OBJECT: Compiled object file (e.g. foo.o).
    """
    # sources
    CORPUS = 0
    HEADER = 1

    # targets
    FOLDER = 2
    LINKED = 3
    OBJECT = 4

    @property
    def is_source(self) -> bool:
        return self in (FileKind.CORPUS, FileKind.HEADER)


# -----------------------------------------------------------------------------
# RUN RESULTS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class GenerationResult:
    """
    Outcome of one successful generation run.

    Attributes:
        makefile: Complete rendered makefile text.
        sources: Number of source files scanned.
        executables: Names of the linked targets, sorted.
        compile_rules: Number of object rules emitted.
    """
    makefile: str
    sources: int = 0
    executables: List[str] = field(default_factory=list)
    compile_rules: int = 0
