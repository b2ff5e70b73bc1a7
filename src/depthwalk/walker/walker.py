"""
Depth-limited traversal.

Lists the children of a root with `os.scandir`, yields the ones that pass the
filter, and descends into containers while the depth of the children about to
be listed stays within the limit. Everything is lazy: no directory is listed
until the consumer pulls far enough to reach it.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Iterator
from pathlib import Path

from depthwalk.walker.defaults import MAX_DEPTH, MIN_DEPTH
from depthwalk.walker.matching import NameMatcher
from depthwalk.walker.resolver import resolve
from depthwalk.walker.types import RootSpec, WalkFilter

log = logging.getLogger(__name__)

StrPath = str | os.PathLike[str]


def check_depth(depth: int) -> int:
    """Return `depth` unchanged, or raise `ValueError` if it is outside 0..255."""
    if isinstance(depth, bool) or not isinstance(depth, int):
        raise ValueError(f"Depth must be an integer, got {depth!r}")
    if not MIN_DEPTH <= depth <= MAX_DEPTH:
        raise ValueError(f"Depth must be between {MIN_DEPTH} and {MAX_DEPTH}, got {depth}")
    return depth


def walk(
    root: StrPath,
    depth: int,
    walk_filter: WalkFilter | None = None,
    current_depth: int = 0,
) -> Iterator[os.DirEntry[str]]:
    """
    Yield entries below `root`, at most `depth` levels of directories down.

    Depth 0 yields only the root's immediate children. A matching container
    is yielded before its own children; a container whose children would lie
    beyond the limit is still yielded, but never listed.

    `OSError` from listing a directory propagates as raised by `os.scandir`;
    entries yielded before the failure remain valid.
    """
    check_depth(depth)
    if current_depth < 0:
        raise ValueError(f"Current depth must not be negative, got {current_depth}")
    walk_filter = walk_filter or WalkFilter()
    matcher = NameMatcher(walk_filter.name_pattern, walk_filter.case_sensitive)
    return _walk(os.fspath(root), depth, matcher, walk_filter.entries_only, current_depth)


def _walk(
    location: str,
    depth: int,
    matcher: NameMatcher,
    entries_only: bool,
    current_depth: int,
) -> Iterator[os.DirEntry[str]]:
    working_depth = current_depth + 1

    with os.scandir(location) as children:
        for child in children:
            is_container = child.is_dir()

            if matcher.matches(child.name) and not (entries_only and is_container):
                yield child

            if not is_container:
                continue
            if working_depth <= depth:
                yield from _walk(child.path, depth, matcher, entries_only, working_depth)
            else:
                log.debug(
                    "Skipping %s: depth %d exceeds limit %d", child.path, working_depth, depth
                )


def _non_container_entry(path: Path) -> os.DirEntry[str] | None:
    """Find the `os.DirEntry` for a non-directory root by listing its parent."""
    parent = os.fspath(path.parent)
    with os.scandir(parent) as siblings:
        for sibling in siblings:
            if sibling.name == path.name:
                return sibling
    return None


def _walk_resolved(
    roots: list[Path],
    depth: int,
    walk_filter: WalkFilter,
) -> Iterator[os.DirEntry[str]]:
    matcher = NameMatcher(walk_filter.name_pattern, walk_filter.case_sensitive)
    for root in roots:
        if root.is_dir():
            yield from walk(root, depth, walk_filter)
            continue
        # A file root is output as itself, subject to the name filter.
        if not matcher.matches(root.name):
            continue
        entry = _non_container_entry(root)
        if entry is not None:
            yield entry


def walk_roots(
    specs: Iterable[RootSpec],
    depth: int,
    walk_filter: WalkFilter | None = None,
) -> Iterator[os.DirEntry[str]]:
    """
    Resolve every root specification, then walk every location they resolve
    to, in order. Directory roots are walked; a root that is not a directory
    is yielded as a single entry when its name passes the filter.

    All specifications are resolved before anything is listed, so a
    specification that resolves to nothing raises `RootNotFoundError` from
    this call, with no output produced.
    """
    check_depth(depth)
    roots = [root for spec in specs for root in resolve(spec)]
    return _walk_resolved(roots, depth, walk_filter or WalkFilter())
