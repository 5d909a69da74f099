# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Genro-TreeState - Immutable nested state with focused handles.

A lightweight, zero-dependency library to update deeply nested state by
delta, by dotted path or by list-item identity, producing a new tree that
shares every untouched branch with the previous one.
"""

from __future__ import annotations

__version__ = "0.1.0"

from typing import Any, Callable, Sequence

from .dispatch import ChangeEvent, DeltaChange, EventChange, PathChange
from .exceptions import (
    InvalidChangeError,
    PathTraversalError,
    TreeStateError,
)
from .focus import FocusedState, Lens
from .lists import ListState, add_item, remove_item, update_item
from .merge import UpdateMode, apply_update, deep_merge
from .paths import read, split_path, write_singleton
from .store import (
    CallbackHolder,
    MemoryHolder,
    StateHandle,
    StateHolder,
    TreeState,
)


def create_root(
    initial: Any = None,
    transform: Callable[[Any], Any] | None = None,
    **kwargs: Any,
) -> TreeState:
    """Create a root handle. Keyword arguments are passed to TreeState."""
    return TreeState(initial, transform, **kwargs)


def focus_handle(handle: StateHandle, path: str | Sequence[str]) -> StateHandle:
    """Return the handle focused on path below handle."""
    return handle.focus(path)


def focus_list(
    handle: StateHandle,
    path: str | Sequence[str],
    identity: Callable[[Any], Any],
) -> ListState:
    """Return the list handle on the list at path below handle."""
    return handle.focus_list(path, identity)


__all__ = [
    # Handles
    "TreeState",
    "StateHandle",
    "FocusedState",
    "ListState",
    "Lens",
    "create_root",
    "focus_handle",
    "focus_list",
    # Holders
    "StateHolder",
    "MemoryHolder",
    "CallbackHolder",
    # Updates
    "ChangeEvent",
    "EventChange",
    "PathChange",
    "DeltaChange",
    "UpdateMode",
    "apply_update",
    "deep_merge",
    "add_item",
    "remove_item",
    "update_item",
    # Paths
    "read",
    "split_path",
    "write_singleton",
    # Exceptions
    "TreeStateError",
    "PathTraversalError",
    "InvalidChangeError",
]
