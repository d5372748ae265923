from __future__ import annotations

"""
Generation Error Taxonomy.

Two families are kept apart: MkmkError covers problems with the user's
project or configuration (exit status 2), InternalError signals a defect in
the tool itself (exit status 1).
"""

from typing import Any, Sequence, Tuple

# -----------------------------------------------------------------------------
# USER-FACING ERRORS
# -----------------------------------------------------------------------------

class MkmkError(Exception):
    """Base class for failures caused by input or configuration."""


class ConfigurationError(MkmkError):
    """The build configuration cannot be used as given."""


class UnrecognizedSourceError(MkmkError):
    """A path carries neither the corpus nor the header extension."""

    def __init__(self, path: str) -> None:
        super().__init__(f"unrecognized source type: {path}")
        self.path = path


class SourceReadError(MkmkError):
    """A source file could not be opened or decoded."""

    def __init__(self, path: str, reason: str = "") -> None:
        message = f"cannot read file: {path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
        self.path = path


class MalformedIncludeError(MkmkError):
    """An include directive has no closing quote."""

    def __init__(self, line: str) -> None:
        super().__init__(f"bad #include: {line}")
        self.line = line


class CircularDependencyError(MkmkError):
    """
    A traversal came back to a node still on its current path.

    Attributes:
        entity: The repeated node.
        path: The traversal path at detection time, outermost first.
    """

    def __init__(self, entity: Any, path: Sequence[Any] = (), message: str = "") -> None:
        super().__init__(message or f"circular dependency: {getattr(entity, 'name', entity)}")
        self.entity = entity
        self.path: Tuple[Any, ...] = tuple(path)


class CyclicIncludeError(CircularDependencyError):
    """A circular dependency found while reading include directives."""


# -----------------------------------------------------------------------------
# TOOL DEFECTS
# -----------------------------------------------------------------------------

class InternalError(Exception):
    """A broken internal contract; never caused by user input."""
