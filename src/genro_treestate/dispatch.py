# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Update dispatcher - turns the accepted call shapes into one request.

Every handle exposes a single ``update(change, value, replace)`` entry
point. The first argument decides how the call is read:

- a ChangeEvent: the event's field name is a path, its value is set there
- a string: a path, with ``value`` as the value to set
- a mapping: a delta; a positional second argument is the replace flag
- None: no-op, unless replace is requested, which clears the state

build_request() inspects the call and returns one of the request types
below (or None for a no-op). resolve_request() turns a request into the
``(path, payload, mode)`` triple consumed by the merge engine.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Union

from .exceptions import InvalidChangeError
from .merge import UpdateMode
from .paths import DEFAULT_SEPARATOR, Path, split_path


class _Missing:
    """Marker for an argument that was not passed."""

    __slots__ = ()

    def __repr__(self) -> str:
        return 'MISSING'

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


@dataclass(frozen=True)
class ChangeEvent:
    """A change notification coming from an input-like control.

    Attributes:
        name: The field name, read as a dotted path.
        value: The raw value of the control.
        checked: The checked state, used when type is 'checkbox'.
        type: The control type.

    Example:
        >>> ChangeEvent('flag', checked=True, type='checkbox').field_value
        True
        >>> ChangeEvent('user.name', 'Alice').field_value
        'Alice'
    """

    name: str
    value: Any = None
    checked: bool = False
    type: str = 'text'

    @property
    def field_value(self) -> Any:
        """The value carried by the event: checked for checkboxes, value otherwise."""
        if self.type == 'checkbox':
            return self.checked
        return self.value

    @classmethod
    def from_target(cls, target: Any) -> ChangeEvent:
        """Build an event from any object exposing name, type, value and checked.

        Missing attributes fall back to the field defaults.
        """
        return cls(
            name=target.name,
            value=getattr(target, 'value', None),
            checked=bool(getattr(target, 'checked', False)),
            type=getattr(target, 'type', None) or 'text',
        )


@dataclass(frozen=True)
class EventChange:
    """Request built from a ChangeEvent."""

    event: ChangeEvent


@dataclass(frozen=True)
class PathChange:
    """Request setting value at a path."""

    path: str | tuple[str, ...]
    value: Any
    mode: UpdateMode = UpdateMode.MERGE


@dataclass(frozen=True)
class DeltaChange:
    """Request combining a delta with the whole target value.

    A None delta with REPLACE mode clears the target.
    """

    delta: Any
    mode: UpdateMode = UpdateMode.MERGE


UpdateRequest = Union[EventChange, PathChange, DeltaChange]


def build_request(
    change: Any,
    value: Any = MISSING,
    replace: bool = False,
    scalar_delta: bool = False,
) -> UpdateRequest | None:
    """Inspect an update call and build the matching request.

    Args:
        change: ChangeEvent, path string, delta mapping, or None.
        value: For path calls, the value to set. For delta calls, a
            positional replace flag (``update(delta, True)``).
        replace: Replace flag passed by keyword.
        scalar_delta: Accept non-mapping deltas, and read a string without
            a value as a delta. Used for list items, which may be scalars.

    Returns:
        The request, or None when the call is a no-op.

    Raises:
        InvalidChangeError: If a path is given without a value, or the
            delta is not a mapping (unless scalar_delta).
    """
    if change is None:
        if replace or value is True:
            return DeltaChange(None, UpdateMode.REPLACE)
        return None

    if isinstance(change, ChangeEvent):
        return EventChange(change)

    if isinstance(change, str) and not (scalar_delta and value is MISSING):
        if not change:
            return None
        if value is MISSING:
            raise InvalidChangeError(f"Path update '{change}' requires a value")
        return PathChange(change, value, UpdateMode.from_flag(replace))

    if not scalar_delta and not isinstance(change, Mapping):
        raise InvalidChangeError(
            f"delta must be a mapping, not {type(change).__name__}"
        )
    flag = replace or (value is not MISSING and bool(value))
    return DeltaChange(change, UpdateMode.from_flag(flag))


def resolve_request(
    request: UpdateRequest,
    separator: str = DEFAULT_SEPARATOR,
) -> tuple[Path, Any, UpdateMode]:
    """Reduce a request to the location, payload and mode to apply.

    Args:
        request: A request built by build_request().
        separator: Separator used to split path strings.

    Returns:
        Tuple (path, payload, mode) where path is relative to the handle
        the request was made on and payload is the value for that path.
    """
    if isinstance(request, EventChange):
        event = request.event
        return split_path(event.name, separator), event.field_value, UpdateMode.MERGE
    if isinstance(request, PathChange):
        return split_path(request.path, separator), request.value, request.mode
    if isinstance(request, DeltaChange):
        return (), request.delta, request.mode
    raise TypeError(f"Unknown update request: {type(request).__name__}")
