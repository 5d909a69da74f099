# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Path resolution over nested mappings.

A path is an ordered sequence of keys. It is usually written as a dotted
string ('config.database.host') and split on the separator; an already
split sequence is accepted as-is.

Reads never fail on missing keys: an absent intermediate or final key
yields the caller's default. A path that would step into a list raises
PathTraversalError, because list elements are addressed by identity
(see lists.py), never by position.

Example:
    >>> tree = {'config': {'database': {'host': 'localhost'}}}
    >>> read(tree, 'config.database.host')
    'localhost'
    >>> read(tree, 'config.cache.enabled', False)
    False
    >>> write_singleton('config.cache.enabled', True)
    {'config': {'cache': {'enabled': True}}}
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Sequence

from .exceptions import PathTraversalError

DEFAULT_SEPARATOR = '.'

Path = tuple[str, ...]


def split_path(path: str | Sequence[str], separator: str = DEFAULT_SEPARATOR) -> Path:
    """Normalize a path to a tuple of keys.

    Args:
        path: Dotted string or sequence of keys. '' and () are the empty path.
        separator: Separator used to split string paths.

    Returns:
        Tuple of keys, empty for the empty path.
    """
    if isinstance(path, str):
        if not path:
            return ()
        return tuple(path.split(separator))
    return tuple(path)


def join_path(path: Path, separator: str = DEFAULT_SEPARATOR) -> str:
    """Inverse of split_path for string keys."""
    return separator.join(path)


def is_list(value: Any) -> bool:
    """True for the sequence kinds treated as lists (list, tuple)."""
    return isinstance(value, (list, tuple))


def read(
    tree: Any,
    path: str | Sequence[str],
    default: Any = None,
    separator: str = DEFAULT_SEPARATOR,
) -> Any:
    """Follow path through nested mappings.

    Args:
        tree: The tree to read from (may be None).
        path: Dotted string or key sequence. The empty path returns tree.
        default: Value returned when any key along the path is missing.
        separator: Separator used to split string paths.

    Returns:
        The value at path, or default.

    Raises:
        PathTraversalError: If a key would be looked up inside a list.
    """
    keys = split_path(path, separator)
    current = tree
    for i, key in enumerate(keys):
        if is_list(current):
            raise PathTraversalError(keys, i)
        if not isinstance(current, Mapping) or key not in current:
            return default
        current = current[key]
    return current


def check_path(tree: Any, path: Path) -> None:
    """Raise PathTraversalError if writing at path would step into a list.

    Only the ancestors of the final key are checked: replacing a whole
    list at its own path is allowed.
    """
    current = tree
    for i, key in enumerate(path):
        if is_list(current):
            raise PathTraversalError(path, i)
        if not isinstance(current, Mapping) or key not in current:
            return
        current = current[key]


def write_singleton(
    path: str | Sequence[str],
    value: Any,
    separator: str = DEFAULT_SEPARATOR,
) -> Any:
    """Build the minimal tree holding value at path.

    Every level is a fresh single-key dict. The empty path returns value
    itself.

    Example:
        >>> write_singleton('nest.some', 'foo')
        {'nest': {'some': 'foo'}}
    """
    result = value
    for key in reversed(split_path(path, separator)):
        result = {key: result}
    return result
