"""
Default filter values and depth bounds for traversal.
"""

from __future__ import annotations

# Name pattern that matches every entry.
DEFAULT_NAME_PATTERN: str = "*"

# Depth 0 lists only the root's immediate children.
MIN_DEPTH: int = 0
MAX_DEPTH: int = 255

# Characters that indicate a path is a glob pattern rather than a literal path.
GLOB_CHARS = frozenset("*?[")
