# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""List handles - add, remove and edit list items by identity.

Lists are leaves for path purposes: a path never selects an element.
Elements are located with an identity function mapping an item to a
comparable key (``lambda todo: todo['id']``; ``lambda tag: tag`` for
lists of scalars). Each operation builds a new list and replaces the
whole list at its path; untouched elements are reused as they are.

The pure operations (add_item, remove_item, update_item) work on any
sequence. ListState wraps them around a list inside a TreeState.

Example:
    >>> state = TreeState({'todos': [{'id': 1, 'name': 'foo'}]})
    >>> todos = state.focus_list('todos', lambda t: t['id'])
    >>> todos.add({'id': 2, 'name': 'bar'})
    >>> todos.update({'id': 1}, {'name': 'baz'})
    >>> todos.items
    [{'id': 1, 'name': 'baz'}, {'id': 2, 'name': 'bar'}]
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Callable, Iterator, Sequence, TYPE_CHECKING

from .dispatch import MISSING, build_request, resolve_request
from .exceptions import PathTraversalError
from .merge import UpdateMode, assign_in, deep_merge
from .paths import Path, write_singleton

if TYPE_CHECKING:
    from .focus import Lens
    from .store import TreeState

logger = logging.getLogger(__name__)

Identity = Callable[[Any], Any]


def _index_of(items: Sequence[Any], item: Any, identity: Identity) -> int:
    """Position of the first element with the same identity as item, or -1."""
    key = identity(item)
    for i, current in enumerate(items):
        if identity(current) == key:
            return i
    return -1


def add_item(items: Sequence[Any], item: Any) -> list[Any]:
    """Return a new list with item appended. Duplicates are allowed."""
    return [*items, item]


def remove_item(items: Sequence[Any], item: Any, identity: Identity) -> Sequence[Any]:
    """Return items without the first element matching item's identity.

    If nothing matches, items itself is returned.
    """
    idx = _index_of(items, item, identity)
    if idx < 0:
        return items
    return [*items[:idx], *items[idx + 1:]]


def edit_item(
    element: Any,
    delta: Any,
    mode: UpdateMode = UpdateMode.MERGE,
    path: Path = (),
) -> Any:
    """Apply a change to a single element.

    Scalar elements are replaced by the change outright. Mapping elements
    are deep-merged, or replaced in REPLACE mode. A non-empty path locates
    the change inside a mapping element.
    """
    if not isinstance(element, Mapping):
        return write_singleton(path, delta)
    if mode is UpdateMode.REPLACE:
        return assign_in(element, path, delta)
    return deep_merge(element, write_singleton(path, delta))


def update_item(
    items: Sequence[Any],
    item: Any,
    delta: Any,
    identity: Identity,
    mode: UpdateMode = UpdateMode.MERGE,
    path: Path = (),
) -> Sequence[Any]:
    """Return items with the element matching item's identity changed.

    Args:
        items: The current list.
        item: Any value with the identity of the element to change.
        delta: The change, see edit_item().
        identity: Maps an item to its comparable key.
        mode: MERGE or REPLACE.
        path: Location of the change inside the element.

    Returns:
        A new list, or items itself if nothing matches.
    """
    idx = _index_of(items, item, identity)
    if idx < 0:
        return items
    result = list(items)
    result[idx] = edit_item(items[idx], delta, mode, path)
    return result


class ListState:
    """Handle on a list inside a TreeState.

    Attributes:
        lens: Location of the list from the root.
        identity: Maps an item to the key used to find it again.
    """

    __slots__ = ('_root', 'lens', 'identity')

    def __init__(self, root: TreeState, lens: Lens, identity: Identity) -> None:
        self._root = root
        self.lens = lens
        self.identity = identity

    def __repr__(self) -> str:
        return f"ListState({self._root._label_for(self.lens.path)!r}, {self.items!r})"

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.items)

    def __getitem__(self, index: int) -> Any:
        return self.items[index]

    @property
    def items(self) -> Sequence[Any]:
        """The current list; an empty list if it does not exist yet."""
        try:
            result = self.lens.get(self._root.value)
        except PathTraversalError:
            if self._root.raise_on_error:
                raise
            result = None
        return [] if result is None else result

    def add(self, item: Any) -> None:
        """Append item to the list, creating the list if needed."""
        self._publish(add_item(self.items, item))

    def remove(self, item: Any) -> None:
        """Remove the first element with item's identity. No-op if absent."""
        items = self.items
        self._publish(remove_item(items, item, self.identity), items)

    def update(
        self,
        item: Any,
        change: Any,
        value: Any = MISSING,
        replace: bool = False,
    ) -> None:
        """Change the element with item's identity. No-op if absent.

        Accepts the same call shapes as StateHandle.update(), relative to
        the element, plus scalar values for lists of scalars:

            >>> todos.update(todo, {'name': 'bar'})
            >>> todos.update(todo, {'id': 42}, True)
            >>> todos.update(todo, 'name', 'bar')
            >>> tags.update('a', 'z')

        A string followed by a value is read as a path call; pass
        ``replace`` by keyword when replacing a scalar with a string.
        """
        request = build_request(change, value, replace, scalar_delta=True)
        if request is None:
            return
        path, payload, mode = resolve_request(request, self._root.separator)
        items = self.items
        self._publish(
            update_item(items, item, payload, self.identity, mode, path), items
        )

    def _publish(self, updated: Sequence[Any], original: Any = None) -> None:
        if updated is original:
            logger.debug("No item matched in '%s'", self._root._label_for(self.lens.path))
            return
        self._root._dispatch(self.lens.path, updated, UpdateMode.REPLACE)
