"""Root specifications and filter criteria for traversal."""

from __future__ import annotations

from dataclasses import dataclass

from depthwalk.walker.defaults import DEFAULT_NAME_PATTERN


@dataclass(frozen=True)
class PatternRoot:
    """A root given as a path that may contain wildcards (`*`, `?`, `[...]`)."""

    text: str

    @property
    def mode(self) -> str:
        return "Path"


@dataclass(frozen=True)
class LiteralRoot:
    """A root given as an exact path. Wildcard characters are taken verbatim."""

    text: str

    @property
    def mode(self) -> str:
        return "LiteralPath"


RootSpec = PatternRoot | LiteralRoot


@dataclass(frozen=True)
class WalkFilter:
    """
    Criteria applied to every listed entry.

    `name_pattern` is a glob matched against the entry name only.
    `entries_only` drops containers (directories) from the output; they are
    still descended into.
    `case_sensitive=None` follows the host convention (case-insensitive only
    where `os.path.normcase` folds case, i.e. Windows).
    """

    name_pattern: str = DEFAULT_NAME_PATTERN
    entries_only: bool = False
    case_sensitive: bool | None = None
