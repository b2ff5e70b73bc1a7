"""
Depth-limited directory traversal with glob name filtering.

No imports from `depthwalk` outside this package.

Usage::

    from depthwalk.walker import LiteralRoot, WalkFilter, walk_roots

    for entry in walk_roots([LiteralRoot("docs")], depth=2, walk_filter=WalkFilter("*.md")):
        print(entry.path)
"""

from depthwalk.walker.defaults import DEFAULT_NAME_PATTERN, MAX_DEPTH, MIN_DEPTH
from depthwalk.walker.errors import RootNotFoundError
from depthwalk.walker.matching import NameMatcher
from depthwalk.walker.resolver import resolve
from depthwalk.walker.types import LiteralRoot, PatternRoot, RootSpec, WalkFilter
from depthwalk.walker.walker import check_depth, walk, walk_roots

__all__ = [
    "DEFAULT_NAME_PATTERN",
    "MAX_DEPTH",
    "MIN_DEPTH",
    "LiteralRoot",
    "NameMatcher",
    "PatternRoot",
    "RootNotFoundError",
    "RootSpec",
    "WalkFilter",
    "check_depth",
    "resolve",
    "walk",
    "walk_roots",
]
