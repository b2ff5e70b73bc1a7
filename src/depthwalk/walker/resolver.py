"""
Root resolution: turn a `PatternRoot` or `LiteralRoot` into the concrete,
existing locations a walk starts from.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from depthwalk.walker.defaults import GLOB_CHARS
from depthwalk.walker.errors import RootNotFoundError
from depthwalk.walker.types import LiteralRoot, PatternRoot, RootSpec

log = logging.getLogger(__name__)


def has_glob_chars(text: str) -> bool:
    return any(c in text for c in GLOB_CHARS)


def resolve(spec: RootSpec) -> list[Path]:
    """
    Resolve a root specification into existing locations.

    - `PatternRoot` → wildcards expanded against the filesystem (zero or more
      matches, sorted, deduplicated)
    - `LiteralRoot` → the exact text, if it exists (never expanded)

    Raises `RootNotFoundError` when nothing exists. Errors other than
    non-existence (e.g. `ValueError` for an unusable glob) propagate unchanged.
    """
    if isinstance(spec, PatternRoot):
        roots = _expand_pattern(spec.text)
    elif isinstance(spec, LiteralRoot):
        roots = _check_literal(spec.text)
    else:
        raise TypeError(f"Not a root specification: {spec!r}")

    if not roots:
        raise RootNotFoundError(spec)
    log.debug("%s %r resolved to %d root(s)", spec.mode, spec.text, len(roots))
    return roots


def _check_literal(text: str) -> list[Path]:
    path = Path(text)
    if os.path.lexists(path):
        return [path]
    return []


def _expand_pattern(pattern: str) -> list[Path]:
    """Expand a glob pattern relative to its longest literal prefix."""
    if not has_glob_chars(pattern):
        return _check_literal(pattern)

    # Determine the root for globbing
    parts = Path(pattern).parts
    root = Path(".")
    glob_part = pattern
    for i, part in enumerate(parts):
        if has_glob_chars(part):
            root = Path(*parts[:i]) if i > 0 else Path(".")
            glob_part = str(Path(*parts[i:]))
            break

    if not root.is_dir():
        return []
    return sorted(set(root.glob(glob_part)))
