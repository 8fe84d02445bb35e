# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Loading functions for PathTree.

Convert plain Python data into PathTree nodes. Mappings become branches,
everything else becomes a deep-copied leaf, so the tree never shares
mutable state with the caller.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import Any, TYPE_CHECKING

from ..exceptions import InvalidPathError
from ..node import StoreNode
from ..path import SEPARATOR

if TYPE_CHECKING:
    from .core import PathTree


def check_label(key: Any) -> str:
    """Return key as a node label.

    Raises:
        InvalidPathError: If the label is empty or contains the separator,
            since no path could address it.
    """
    label = str(key)
    if not label or SEPARATOR in label:
        raise InvalidPathError(f"invalid key {label!r} in written data")
    return label


def make_value(value: Any) -> Any:
    """Build the stored form of value.

    Returns:
        A PathTree for mappings, a deep copy for anything else,
        or None if nothing would be stored (None or an empty mapping).
    """
    from .core import PathTree

    if value is None:
        return None
    if isinstance(value, Mapping):
        branch = PathTree()
        load_from_mapping(branch, value)
        return branch if len(branch) else None
    return copy.deepcopy(value)


def load_from_mapping(store: PathTree, data: Mapping[str, Any]) -> None:
    """Load a nested mapping into store.

    Keys are converted to strings. None values and empty mappings
    are skipped.

    Args:
        store: The PathTree to populate.
        data: Mapping to load.

    Example:
        >>> store = PathTree()
        >>> load_from_mapping(store, {'users': {'u1': {'name': 'Ann'}}})
        >>> store.read('users/u1/name')
        'Ann'

    Raises:
        InvalidPathError: If a key is empty or contains the separator.
    """
    for key, value in data.items():
        label = check_label(key)
        stored = make_value(value)
        if stored is None:
            continue
        node = StoreNode(label, stored, parent=store)
        if node.is_branch:
            stored.parent = node
        store._nodes[label] = node


def export_value(value: Any) -> Any:
    """Convert a stored value back into plain Python data."""
    from .core import PathTree

    if isinstance(value, PathTree):
        return value.as_dict()
    return copy.deepcopy(value)
