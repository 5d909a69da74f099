# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""State holders - where the current tree of a TreeState lives.

A TreeState never stores its tree itself: it asks its holder for the
current tree and hands every new tree back to it. This keeps the engine
free of ambient state and lets a host (a UI binding, a session store)
own the authoritative value.

- MemoryHolder: in-process holder with named subscriptions
- CallbackHolder: adapts a pair of get/publish callables

Example:
    >>> holder = MemoryHolder()
    >>> holder.subscribe('log', lambda old, new: print(old, '->', new))
    >>> holder.publish({'a': 1})
    None -> {'a': 1}
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Protocol

logger = logging.getLogger(__name__)

SubscriberCallback = Callable[[Any, Any], Any]


class StateHolder(Protocol):
    """What a TreeState needs from its host."""

    def get(self) -> Any:
        """Return the current tree (None when cleared)."""
        ...

    def publish(self, tree: Any) -> None:
        """Make tree the current tree."""
        ...


class MemoryHolder:
    """Keeps the current tree in memory and notifies subscribers.

    Subscribers are called as ``callback(previous, current)`` after each
    publish, in subscription order.
    """

    __slots__ = ('_value', '_subscribers')

    def __init__(self, value: Any = None) -> None:
        self._value = value
        self._subscribers: dict[str, SubscriberCallback] = {}

    def __repr__(self) -> str:
        return f"MemoryHolder({self._value!r})"

    def get(self) -> Any:
        return self._value

    def publish(self, tree: Any) -> None:
        previous = self._value
        self._value = tree
        for subscriber_id, callback in list(self._subscribers.items()):
            logger.debug("Notifying subscriber '%s'", subscriber_id)
            callback(previous, tree)

    def subscribe(self, subscriber_id: str, callback: SubscriberCallback) -> None:
        """Register callback under subscriber_id, replacing any previous one.

        Args:
            subscriber_id: Unique name of the subscription.
            callback: Called with (previous, current) after each publish.
        """
        self._subscribers[subscriber_id] = callback

    def unsubscribe(self, subscriber_id: str) -> None:
        """Remove a subscription. Unknown ids are ignored."""
        self._subscribers.pop(subscriber_id, None)


class CallbackHolder:
    """Holder backed by two host callables.

    Example:
        >>> box = {}
        >>> holder = CallbackHolder(lambda: box.get('tree'),
        ...                         lambda tree: box.update(tree=tree))
    """

    __slots__ = ('_get', '_publish')

    def __init__(
        self,
        get: Callable[[], Any],
        publish: Callable[[Any], Any],
    ) -> None:
        self._get = get
        self._publish = publish

    def get(self) -> Any:
        return self._get()

    def publish(self, tree: Any) -> None:
        self._publish(tree)
