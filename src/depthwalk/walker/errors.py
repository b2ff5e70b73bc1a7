"""Errors raised while resolving roots."""

from __future__ import annotations

import errno

from depthwalk.walker.types import RootSpec


class RootNotFoundError(FileNotFoundError):
    """
    No existing location matched a root specification. The message names the
    mode the root was given in and its original text.
    """

    def __init__(self, spec: RootSpec) -> None:
        self.spec: RootSpec = spec
        self.message: str = f"{spec.mode} not found: '{spec.text}'"
        super().__init__(errno.ENOENT, self.message, spec.text)

    def __str__(self) -> str:
        return self.message
