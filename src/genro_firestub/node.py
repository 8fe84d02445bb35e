# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""PathTree node class."""

from __future__ import annotations

from typing import Any, TYPE_CHECKING

if TYPE_CHECKING:
    from .store import PathTree


class StoreNode:
    """A node in a PathTree hierarchy.

    Each node has:
    - label: The node's key within its parent
    - value: Either a scalar/record value or a PathTree (for children)
    - parent: Reference to the containing PathTree

    Example:
        >>> node = StoreNode('name', 'Alice')
        >>> node.label
        'name'
        >>> node.value
        'Alice'
    """

    __slots__ = ('label', 'value', 'parent')

    def __init__(
        self,
        label: str,
        value: Any = None,
        parent: PathTree | None = None,
    ) -> None:
        self.label = label
        self.value = value
        self.parent = parent

    def __repr__(self) -> str:
        from .store import PathTree
        value_repr = (
            f"PathTree({len(self.value)})"
            if isinstance(self.value, PathTree)
            else repr(self.value)
        )
        return f"StoreNode({self.label!r}, value={value_repr})"

    @property
    def is_branch(self) -> bool:
        """True if this node contains a PathTree (has children)."""
        from .store import PathTree
        return isinstance(self.value, PathTree)

    @property
    def is_leaf(self) -> bool:
        """True if this node contains a scalar value."""
        return not self.is_branch
