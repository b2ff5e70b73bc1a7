"""Glob matching of entry names using pathspec."""

from __future__ import annotations

import os
import re

import pathspec

from depthwalk.walker.defaults import DEFAULT_NAME_PATTERN


def host_is_case_sensitive() -> bool:
    """True unless the host folds case when normalizing paths (Windows)."""
    return os.path.normcase("A") == "A"


class NameMatcher:
    """
    Matches a single entry name (never a full path) against a glob pattern:
    `*` is any run of characters, `?` any single character, `[...]` a class.

    The pattern is compiled once per walk with gitignore syntax. Characters
    that gitignore reads specially (backslashes, a leading `#` or `!`,
    trailing spaces) are escaped to keep their literal meaning.
    """

    def __init__(self, pattern: str, case_sensitive: bool | None = None) -> None:
        if not pattern:
            pattern = DEFAULT_NAME_PATTERN
        if case_sensitive is None:
            case_sensitive = host_is_case_sensitive()
        self.pattern: str = pattern
        self.case_sensitive: bool = case_sensitive
        self._match_all: bool = pattern == DEFAULT_NAME_PATTERN
        line = _escape_gitignore_line(pattern if case_sensitive else pattern.lower())
        self._spec: pathspec.PathSpec = pathspec.PathSpec.from_lines("gitignore", [line])

    def matches(self, name: str) -> bool:
        if self._match_all:
            return True
        if not self.case_sensitive:
            name = name.lower()
        return self._spec.match_file(name)


def _escape_gitignore_line(pattern: str) -> str:
    line = pattern.replace("\\", "\\\\")
    if line[0] in "#!":
        line = "\\" + line
    # Unescaped trailing spaces are stripped from gitignore lines.
    return re.sub(r" (?= *$)", r"\\ ", line)
