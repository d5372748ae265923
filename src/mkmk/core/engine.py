from __future__ import annotations

"""
Generation Pipeline.

Runs the three generator phases (read, evaluate, print) against an in-memory
buffer, so a failure at any point leaves nothing half-written.
"""

import io
import logging
from typing import Iterable

from mkmk.core.generator import Generator
from mkmk.domain.config import BuildConfig
from mkmk.domain.models import FileKind, GenerationResult

logger = logging.getLogger(__name__)


def generate_makefile(
        roots: Iterable[str],
        config: BuildConfig,
        *,
        base_dir: str = "",
) -> GenerationResult:
    """
    Produce the makefile for a set of root sources.

    Args:
        roots: Root source paths, relative to `base_dir`.
        config: Validated build configuration.
        base_dir: Directory containing the sources (defaults to the cwd).

    Returns:
        GenerationResult: Rendered text and run statistics.

    Raises:
        MkmkError: On any input or configuration problem.
        InternalError: On a broken internal contract.
    """
    roots = list(roots)
    logger.info(f"Generating rules for {len(roots)} root(s)")

    gen = Generator(config, base_dir=base_dir)
    gen.read_files(roots)
    gen.evaluate()

    buffer = io.StringIO()
    gen.print(buffer)

    compile_rules = sum(1 for src in gen.includes if src.kind is FileKind.CORPUS)
    executables = sorted(exe.name for exe in gen.linkages)
    logger.info(f"Emitted {compile_rules} compile rule(s) and {len(executables)} link rule(s)")

    return GenerationResult(
        makefile=buffer.getvalue(),
        sources=len(gen.includes),
        executables=executables,
        compile_rules=compile_rules,
    )
