# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""TreeState - the root handle on an immutable nested state tree.

A handle is a (value, update) pair. The root handle, TreeState, owns the
transform and the holder of the current tree; every other handle
(FocusedState, ListState) is a view derived from it that routes its
updates back to the root with its own path prepended.

Update call shapes (see dispatch.py):
    - ``update(delta)``: deep-merge delta into the tree
    - ``update(delta, True)``: replace the tree with delta
    - ``update('config.host', 'localhost')``: set a value at a path
    - ``update('config', {'host': 'x'}, replace=True)``: replace at a path
    - ``update(ChangeEvent('flag', checked=True, type='checkbox'))``
    - ``update(None, True)``: clear the state

Every effective update computes a new tree, runs the transform on it
once and publishes the result. The old tree is never touched; untouched
branches are shared between the two.

Example:
    >>> state = TreeState({'config': {'debug': False}})
    >>> state.update('config.database.host', 'localhost')
    >>> state.value
    {'config': {'debug': False, 'database': {'host': 'localhost'}}}
    >>> db = state.focus('config.database')
    >>> db.update({'port': 5432})
    >>> state['config.database.port']
    5432
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Sequence, TYPE_CHECKING

from ..dispatch import MISSING, build_request, resolve_request
from ..exceptions import PathTraversalError
from ..merge import Transform, UpdateMode, apply_update, identity
from ..paths import DEFAULT_SEPARATOR, Path, check_path, read, split_path
from .holder import MemoryHolder, StateHolder

if TYPE_CHECKING:
    from ..focus import FocusedState
    from ..lists import ListState

logger = logging.getLogger(__name__)


class StateHandle:
    """Behaviour shared by the root and the derived handles.

    Subclasses provide ``value``, ``path``, ``root`` and ``_dispatch``.
    """

    __slots__ = ()

    @property
    def value(self) -> Any:
        raise NotImplementedError

    @property
    def path(self) -> Path:
        raise NotImplementedError

    @property
    def root(self) -> TreeState:
        raise NotImplementedError

    def _dispatch(self, path: Path, payload: Any, mode: UpdateMode) -> None:
        raise NotImplementedError

    def update(
        self,
        change: Any,
        value: Any = MISSING,
        replace: bool = False,
    ) -> None:
        """Apply a change to this handle's value.

        Args:
            change: ChangeEvent, dotted path, delta mapping, or None.
            value: Value for a path call, or the replace flag for a delta
                call given positionally.
            replace: Replace instead of deep-merging.

        Raises:
            InvalidChangeError: If the call shape cannot be dispatched.
            PathTraversalError: If the target path steps into a list and
                raise_on_error is set.
        """
        request = build_request(change, value, replace)
        if request is None:
            logger.debug("Empty change on '%s' ignored", self._label())
            return
        path, payload, mode = resolve_request(request, self.root.separator)
        self._dispatch(path, payload, mode)

    def get(self, path: str | Sequence[str], default: Any = None) -> Any:
        """Read a value below this handle.

        Args:
            path: Dotted path relative to this handle.
            default: Value returned if the path is missing.
        """
        root = self.root
        try:
            return read(self.value, path, default, root.separator)
        except PathTraversalError:
            if root.raise_on_error:
                raise
            return default

    def __getitem__(self, path: str) -> Any:
        """Read a value below this handle, KeyError if missing."""
        result = self.get(path, MISSING)
        if result is MISSING:
            raise KeyError(path)
        return result

    def focus(self, path: str | Sequence[str]) -> StateHandle:
        """Return the handle focused on path, relative to this handle.

        Focusing twice composes: ``h.focus('a').focus('b')`` is the same
        object as ``h.focus('a.b')``. The empty path returns the root.
        """
        root = self.root
        return root._focused_at(self.path + split_path(path, root.separator))

    def focus_list(
        self,
        path: str | Sequence[str],
        identity: Callable[[Any], Any],
    ) -> ListState:
        """Return a list handle on the list at path, relative to this handle.

        Args:
            path: Dotted path of the list.
            identity: Maps an item to the key used to find it again.
                Must be stable for logically equal items.
        """
        from ..focus import Lens
        from ..lists import ListState

        root = self.root
        lens = Lens(self.path + split_path(path, root.separator))
        return ListState(root, lens, identity)

    def _label(self) -> str:
        return self.root._label_for(self.path)


class TreeState(StateHandle):
    """Root handle: holds the transform and the current tree's holder.

    Attributes:
        separator: Path separator, shared by every derived handle.
        raise_on_error: If True (default), paths that step into a list
            raise PathTraversalError. If False they read as missing and
            writes through them are ignored with a warning.
    """

    __slots__ = ('_holder', '_transform', 'separator', 'raise_on_error', '_focused')

    def __init__(
        self,
        initial: Any = None,
        transform: Transform | None = None,
        holder: StateHolder | None = None,
        separator: str = DEFAULT_SEPARATOR,
        raise_on_error: bool = True,
    ) -> None:
        """Create a root handle and publish the initial tree.

        Args:
            initial: Initial tree, {} if None.
            transform: Applied to the initial tree and to every updated
                tree before it is published. Defaults to identity.
            holder: Where the current tree lives. Defaults to a new
                MemoryHolder.
            separator: Path separator.
            raise_on_error: See class docstring.
        """
        self._transform = transform or identity
        self._holder = holder if holder is not None else MemoryHolder()
        self.separator = separator
        self.raise_on_error = raise_on_error
        self._focused: dict[Path, FocusedState] = {}
        self._holder.publish(self._transform({} if initial is None else initial))

    def __repr__(self) -> str:
        return f"TreeState({self.value!r})"

    @property
    def value(self) -> Any:
        """The current tree, None once cleared."""
        return self._holder.get()

    @property
    def path(self) -> Path:
        return ()

    @property
    def root(self) -> TreeState:
        return self

    @property
    def holder(self) -> StateHolder:
        return self._holder

    def _dispatch(self, path: Path, payload: Any, mode: UpdateMode) -> None:
        current = self._holder.get()
        try:
            check_path(current, path)
        except PathTraversalError:
            if self.raise_on_error:
                raise
            logger.warning("Update at '%s' ignored, path steps into a list",
                           self._label_for(path))
            return

        nxt = apply_update(current, payload, mode, self._transform, path)
        if nxt is current:
            logger.debug("Update at '%s' left the tree unchanged", self._label_for(path))
            return
        logger.debug("Publishing %s update at '%s'", mode.value, self._label_for(path))
        self._holder.publish(nxt)

    def _label_for(self, path: Path) -> str:
        return self.separator.join(path) or '<root>'

    def _focused_at(self, path: Path) -> StateHandle:
        if not path:
            return self
        handle = self._focused.get(path)
        if handle is None:
            from ..focus import FocusedState, Lens
            handle = self._focused[path] = FocusedState(self, Lens(path))
        return handle
