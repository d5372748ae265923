from __future__ import annotations

"""
Source Line Scanner.

Recognizes the two facts the generator needs from a C-family source line:
a local include directive ('#include "path"') and the start of a program
entry point ('int main('). Matching is purely lexical: no preprocessing,
no system includes.
"""

from typing import Optional

from mkmk.domain.errors import MalformedIncludeError

INCLUDE_PREFIX = '#include "'
ENTRY_POINT_PREFIX = "int main("


class LineScanner:
    """Per-line matcher for include directives and entry-point definitions."""

    def __init__(
            self,
            include_prefix: str = INCLUDE_PREFIX,
            entry_point_prefix: str = ENTRY_POINT_PREFIX,
    ) -> None:
        self.include_prefix = include_prefix
        self.entry_point_prefix = entry_point_prefix

    def include_target(self, line: str) -> Optional[str]:
        """
        Extract the quoted path of a local include directive.

        Args:
            line: One source line, without its line terminator.

        Returns:
            Optional[str]: The included path, or None if the line is not a
                           local include.

        Raises:
            MalformedIncludeError: If the directive has no closing quote.
        """
        m = len(self.include_prefix)
        if len(line) <= m or not line.startswith(self.include_prefix):
            return None
        end = line.find('"', m)
        if end < 0:
            raise MalformedIncludeError(line)
        return line[m:end]

    def defines_entry_point(self, line: str) -> bool:
        return line.startswith(self.entry_point_prefix)
