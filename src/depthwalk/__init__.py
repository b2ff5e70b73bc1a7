"""
depthwalk: depth-limited recursive directory listing.
"""

from depthwalk.walker import (
    LiteralRoot,
    PatternRoot,
    RootNotFoundError,
    WalkFilter,
    resolve,
    walk,
    walk_roots,
)

__all__ = [
    "LiteralRoot",
    "PatternRoot",
    "RootNotFoundError",
    "WalkFilter",
    "resolve",
    "walk",
    "walk_roots",
]
