# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Store package - the root handle and the holders of its current tree.

The package is organized into:
- core: StateHandle base class and TreeState, the root handle
- holder: StateHolder protocol, MemoryHolder and CallbackHolder

Example:
    >>> from genro_treestate import TreeState
    >>> state = TreeState()
    >>> state.update('config.name', 'MyApp')
    >>> state['config.name']
    'MyApp'
"""

from .core import StateHandle, TreeState
from .holder import CallbackHolder, MemoryHolder, StateHolder

__all__ = [
    "StateHandle",
    "TreeState",
    "StateHolder",
    "MemoryHolder",
    "CallbackHolder",
]
