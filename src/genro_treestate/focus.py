# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Focused handles - views on a sub-path of a TreeState.

A Lens is the pure part of a focus: the key path from the root. It reads
the sub-value out of a tree and composes with another lens by path
concatenation, so a lens of a lens is the lens of the joined path.

A FocusedState pairs a lens with its root. Its value is read from the
root's current tree on every access; its updates are rewritten as
updates on the root at ``lens.path + change path``, and go through the
same merge and transform as a direct root update.

Example:
    >>> state = TreeState({})
    >>> nest = state.focus('nest')
    >>> nest.value
    {}
    >>> nest.update('some', 'foo')
    >>> state.value
    {'nest': {'some': 'foo'}}
    >>> state.value['nest'] is nest.value
    True
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING

from .exceptions import PathTraversalError
from .merge import UpdateMode
from .paths import Path, read
from .store.core import StateHandle

if TYPE_CHECKING:
    from .store import TreeState


@dataclass(frozen=True)
class Lens:
    """Key path from the root to a focused location."""

    path: Path = ()

    def get(self, tree: Any, default: Any = None) -> Any:
        """Read the focused value out of tree."""
        return read(tree, self.path, default)

    def compose(self, other: Lens) -> Lens:
        """Lens focusing on other, relative to this lens."""
        return Lens(self.path + other.path)

    def __truediv__(self, other: Lens) -> Lens:
        return self.compose(other)


class FocusedState(StateHandle):
    """Handle on the value at a path of a TreeState.

    Missing or None values read as an empty dict, so nested reads on a
    branch that was never written do not fail.
    """

    __slots__ = ('_root', 'lens')

    def __init__(self, root: TreeState, lens: Lens) -> None:
        self._root = root
        self.lens = lens

    def __repr__(self) -> str:
        return f"FocusedState({self._label()!r}, {self.value!r})"

    @property
    def value(self) -> Any:
        try:
            result = self.lens.get(self._root.value)
        except PathTraversalError:
            if self._root.raise_on_error:
                raise
            result = None
        return {} if result is None else result

    @property
    def path(self) -> Path:
        return self.lens.path

    @property
    def root(self) -> TreeState:
        return self._root

    def _dispatch(self, path: Path, payload: Any, mode: UpdateMode) -> None:
        self._root._dispatch(self.lens.path + path, payload, mode)
