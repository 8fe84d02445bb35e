# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""DataSnapshot - an immutable read result."""

from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import Any

from .path import split_path


class DataSnapshot:
    """The value found at a path at the time of a read or an event.

    val() always returns a fresh copy, so callers may mutate it freely.

    Example:
        >>> snapshot = DataSnapshot('u1', {'name': 'Ann'})
        >>> snapshot.val()
        {'name': 'Ann'}
        >>> snapshot.child('name').val()
        'Ann'
    """

    __slots__ = ('key', '_value')

    def __init__(self, key: str | None, value: Any) -> None:
        self.key = key
        self._value = value

    def __repr__(self) -> str:
        return f"DataSnapshot({self.key!r}, value={self._value!r})"

    def val(self) -> Any:
        """Return the value, or None if nothing exists at the path."""
        return copy.deepcopy(self._value)

    def exists(self) -> bool:
        return self._value is not None

    def has_children(self) -> bool:
        return isinstance(self._value, Mapping) and bool(self._value)

    def num_children(self) -> int:
        return len(self._value) if isinstance(self._value, Mapping) else 0

    def child(self, path: str) -> DataSnapshot:
        """Snapshot of a descendant, relative to this one."""
        segments = split_path(path)
        value = self._value
        for segment in segments:
            if not isinstance(value, Mapping):
                value = None
                break
            value = value.get(segment)
        key = segments[-1] if segments else self.key
        return DataSnapshot(key, value)
