# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Single-field equality queries.

A QueryShape is the (field, value) pair built by
``ref.order_by_child(field).equal_to(value)``. apply_filter() is the only
place a shape is evaluated, and is shared by one-shot reads and by event
dispatch so both always see the same children.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from numbers import Number
from typing import Any


@dataclass(frozen=True)
class QueryShape:
    """An equality filter on one field of each child record."""

    field: str
    value: Any

    def matches(self, record: Any) -> bool:
        """True if record is a mapping whose field strictly equals value."""
        if not isinstance(record, Mapping) or self.field not in record:
            return False
        return strict_equal(record[self.field], self.value)


def strict_equal(left: Any, right: Any) -> bool:
    """Compare without type coercion.

    Booleans only equal booleans, numbers compare by value across
    int and float, anything else must share its type.

    Example:
        >>> strict_equal(1, 1.0)
        True
        >>> strict_equal(1, True)
        False
        >>> strict_equal('1', 1)
        False
    """
    if isinstance(left, bool) or isinstance(right, bool):
        return type(left) is type(right) and left == right
    if isinstance(left, Number) and isinstance(right, Number):
        return left == right
    return type(left) is type(right) and left == right


def apply_filter(value: Any, shape: QueryShape | None) -> Any:
    """Filter a mapping of children by shape.

    Args:
        value: The value read at the queried path.
        shape: The active filter, or None for no filtering.

    Returns:
        A new dict with the matching entries in their original order.
        value itself when shape is None or value is not a mapping.
    """
    if shape is None or not isinstance(value, Mapping):
        return value
    return {key: child for key, child in value.items() if shape.matches(child)}


def strict_deep_equal(left: Any, right: Any) -> bool:
    """strict_equal applied through nested mappings and lists.

    Example:
        >>> strict_deep_equal({'a': [1, {'b': 'x'}]}, {'a': [1.0, {'b': 'x'}]})
        True
        >>> strict_deep_equal({'flag': 1}, {'flag': True})
        False
    """
    if isinstance(left, Mapping) and isinstance(right, Mapping):
        if left.keys() != right.keys():
            return False
        return all(strict_deep_equal(left[key], right[key]) for key in left)
    if isinstance(left, Mapping) or isinstance(right, Mapping):
        return False
    if isinstance(left, (list, tuple)) and isinstance(right, (list, tuple)):
        if type(left) is not type(right) or len(left) != len(right):
            return False
        return all(strict_deep_equal(a, b) for a, b in zip(left, right))
    if isinstance(left, (list, tuple)) or isinstance(right, (list, tuple)):
        return False
    return strict_equal(left, right)
