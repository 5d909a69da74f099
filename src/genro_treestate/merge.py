# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Merge engine - computes the next tree from the current one and a change.

Two modes are supported:

- MERGE: the delta is deep-merged into the current tree. Where both sides
  hold a mapping the merge recurses, anywhere else the delta wins. Keys
  only present in the current tree are kept by reference.
- REPLACE: the current tree is discarded and the delta becomes the next
  tree. A None delta clears the state.

Neither the current tree nor the delta is ever mutated. Untouched
subtrees are shared between the old and the new tree, so identity checks
(``old['a'] is new['a']``) can be used for change detection.

Example:
    >>> current = {'config': {'host': 'localhost', 'port': 5432}, 'debug': False}
    >>> nxt = deep_merge(current, {'config': {'port': 3306}})
    >>> nxt['config']
    {'host': 'localhost', 'port': 3306}
    >>> nxt['debug'] is current['debug']
    True
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from enum import Enum
from typing import Any, Callable

from .paths import Path, write_singleton

logger = logging.getLogger(__name__)

Transform = Callable[[Any], Any]


def identity(tree: Any) -> Any:
    """Default transform: return the tree unchanged."""
    return tree


class UpdateMode(Enum):
    """How a delta is combined with the current tree."""

    MERGE = 'merge'
    REPLACE = 'replace'

    @classmethod
    def from_flag(cls, replace: Any) -> UpdateMode:
        """Map a boolean-ish replace flag to a mode."""
        return cls.REPLACE if replace else cls.MERGE


def deep_merge(current: Any, delta: Any) -> Any:
    """Deep-merge delta into current without mutating either.

    Args:
        current: Existing value.
        delta: Requested change. Wins wherever the two sides are not both
            mappings.

    Returns:
        The merged value. When the delta changes nothing, current itself
        is returned.
    """
    if not isinstance(current, Mapping) or not isinstance(delta, Mapping):
        return delta

    result: dict[str, Any] | None = None
    for key, value in delta.items():
        if key in current:
            old = current[key]
            if old is value:
                continue
            new = deep_merge(old, value)
            if new is old:
                continue
        else:
            new = value
        if result is None:
            result = dict(current)
        result[key] = new

    if result is None:
        return current
    return result


def assign_in(tree: Any, path: Path, value: Any) -> Any:
    """Return a copy of tree with value stored at path.

    Missing or non-mapping intermediates are replaced by fresh dicts.
    Siblings along the path are shared with tree.
    """
    if not path:
        return value
    key, rest = path[0], path[1:]
    is_mapping = isinstance(tree, Mapping)
    old = tree.get(key) if is_mapping else None
    new = assign_in(old, rest, value)
    if is_mapping and key in tree and new is old:
        return tree
    result = dict(tree) if is_mapping else {}
    result[key] = new
    return result


def apply_update(
    current: Any,
    delta: Any,
    mode: UpdateMode = UpdateMode.MERGE,
    transform: Transform = identity,
    path: Path = (),
) -> Any:
    """Compute the next published tree.

    Args:
        current: The current tree, None when the state has been cleared.
        delta: The change to apply at path. None together with REPLACE at
            the empty path clears the state.
        mode: MERGE deep-merges delta at path, REPLACE stores it there
            as-is. Either way the rest of the tree is kept.
        transform: Applied to the computed tree before it is returned.
            Exceptions raised by it propagate unchanged.
        path: Location of the change, () for the whole tree.

    Returns:
        The transformed next tree. Clearing returns None; the transform
        maps trees to trees and is not run. Any other update against a
        cleared state is a no-op and returns current as-is.
    """
    if not path and mode is UpdateMode.REPLACE:
        if delta is None:
            return None
        nxt = delta
    elif current is None:
        logger.debug("Update at '%s' ignored, state is cleared", '.'.join(path))
        return current
    elif mode is UpdateMode.REPLACE:
        nxt = assign_in(current, path, delta)
    else:
        nxt = deep_merge(current, write_singleton(path, delta))

    return transform(nxt)
