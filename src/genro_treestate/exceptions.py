# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""TreeState exceptions."""

from __future__ import annotations


class TreeStateError(Exception):
    """Base exception for TreeState errors."""

    pass


class PathTraversalError(TreeStateError, KeyError):
    """Raised when a dotted path would address into a list.

    Lists are always read and replaced as a whole; a path segment
    cannot select a list element.
    """

    def __init__(self, path: tuple[str, ...], position: int) -> None:
        self.path = path
        self.position = position
        super().__init__(
            f"'{'.'.join(path[:position])}' is a list, "
            f"cannot access '{'.'.join(path[position:])}'"
        )

    def __str__(self) -> str:
        # KeyError quotes its argument
        return self.args[0]


class InvalidChangeError(TreeStateError, TypeError):
    """Raised when an update call has a shape that cannot be dispatched."""

    pass
