# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""PathTree - the in-memory hierarchical store.

Data is held as nested StoreNode instances addressed by slash-separated
paths. Every level is a dict, so traversal is O(depth) and children keep
their insertion order.

Rules:
    - None is never stored. Writing None or an empty mapping removes the
      node, and a branch left without children is pruned.
    - Values are deep-copied on the way in and on the way out.
    - Reading a missing path returns None rather than raising.

Example:
    >>> tree = PathTree({'users': {'u1': {'name': 'Ann'}}})
    >>> tree.read('/users/u1')
    {'name': 'Ann'}
    >>> tree.merge('users/u1', {'age': 30})
    >>> tree.read('users/u1')
    {'name': 'Ann', 'age': 30}
    >>> tree.delete('users/u1')
    True
    >>> tree.read('users') is None
    True
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Iterator

from ..node import StoreNode
from ..path import split_path
from .loading import export_value, load_from_mapping, make_value

logger = logging.getLogger(__name__)


class PathTree:
    """A hierarchical data container addressed by slash paths.

    PathTree provides:
    - read(path): plain copy of the value at path, or None
    - write(path, value): replace the subtree at path
    - merge(path, partial): shallow-merge a record at path
    - delete(path): remove the node at path

    Attributes:
        parent: The StoreNode that contains this tree as its value,
            or None if this is the root.
    """

    __slots__ = ('_nodes', 'parent')

    def __init__(
        self,
        source: Mapping[str, Any] | None = None,
        parent: StoreNode | None = None,
    ) -> None:
        self._nodes: dict[str, StoreNode] = {}
        self.parent = parent
        if source is not None:
            self.load(source)

    # ==================== Special Methods ====================

    def __repr__(self) -> str:
        return f"PathTree({list(self._nodes.keys())})"

    def __len__(self) -> int:
        """Return the number of direct children."""
        return len(self._nodes)

    def __iter__(self) -> Iterator[StoreNode]:
        """Iterate over direct child nodes in insertion order."""
        return iter(self._nodes.values())

    def __contains__(self, path: str) -> bool:
        try:
            self.get_node(path)
            return True
        except KeyError:
            return False

    # ==================== Traversal ====================

    def _htraverse(
        self, segments: tuple[str, ...], autocreate: bool = False
    ) -> tuple[PathTree, str]:
        """Walk to the parent of the last segment.

        Args:
            segments: Non-empty tuple of path segments.
            autocreate: If True, create missing branches and turn leaves
                found along the way into branches.

        Returns:
            Tuple of (parent_tree, final_label).

        Raises:
            KeyError: If a segment is missing and autocreate is False.
        """
        current = self
        for i, segment in enumerate(segments[:-1]):
            node = current._nodes.get(segment)
            if node is None:
                if not autocreate:
                    raise KeyError(f"Path segment '{segment}' not found")
                branch = PathTree()
                node = StoreNode(segment, branch, parent=current)
                branch.parent = node
                current._nodes[segment] = node
            elif not node.is_branch:
                if not autocreate:
                    remaining = '/'.join(segments[i + 1:])
                    raise KeyError(
                        f"'{segment}' is a leaf, cannot access '{remaining}'"
                    )
                branch = PathTree(parent=node)
                node.value = branch
            current = node.value
        return current, segments[-1]

    def get_node(self, path: str) -> StoreNode:
        """Get node at the given path.

        Raises:
            KeyError: If path is empty or not found.
        """
        segments = split_path(path)
        if not segments:
            raise KeyError("Empty path")
        parent, label = self._htraverse(segments)
        return parent._nodes[label]

    # ==================== Core API ====================

    def read(self, path: str = '') -> Any:
        """Return a plain copy of the value at path, or None if absent."""
        if not split_path(path):
            return self.as_dict() if self._nodes else None
        try:
            node = self.get_node(path)
        except KeyError:
            return None
        return export_value(node.value)

    def write(self, path: str, value: Any) -> None:
        """Replace the subtree at path with a deep copy of value.

        Writing None or an empty mapping deletes the node instead.
        """
        segments = split_path(path)
        if not segments:
            self.load(value or {})
            return
        stored = make_value(value)
        if stored is None:
            self.delete(path)
            return
        parent, label = self._htraverse(segments, autocreate=True)
        node = parent._nodes.get(label)
        if node is None:
            node = StoreNode(label, stored, parent=parent)
            parent._nodes[label] = node
        else:
            node.value = stored
        if node.is_branch:
            stored.parent = node
        logger.debug("write %r", '/'.join(segments))

    def merge(self, path: str, partial: Any) -> None:
        """Merge partial's fields into the record at path.

        Keys mapped to None are removed. A non-mapping partial replaces
        the value at path, exactly as write() does.
        """
        if not isinstance(partial, Mapping):
            self.write(path, partial)
            return
        existing = self.read(path)
        merged = dict(existing) if isinstance(existing, dict) else {}
        merged.update(partial)
        self.write(path, merged)

    def delete(self, path: str) -> bool:
        """Remove the node at path, pruning branches left empty.

        Returns:
            True if a node was removed, False if path was absent.
        """
        segments = split_path(path)
        if not segments:
            self.clear()
            return True
        try:
            parent, label = self._htraverse(segments)
        except KeyError:
            return False
        if parent._nodes.pop(label, None) is None:
            return False
        parent._prune()
        logger.debug("delete %r", '/'.join(segments))
        return True

    def _prune(self) -> None:
        """Detach this tree from its parent while it has no children."""
        current = self
        while not current._nodes and current.parent is not None:
            holder = current.parent.parent
            if holder is None:
                break
            holder._nodes.pop(current.parent.label, None)
            current = holder

    def load(self, source: Mapping[str, Any]) -> None:
        """Replace the whole content of this tree with source.

        The current content is kept if source cannot be loaded.

        Raises:
            TypeError: If source is not a mapping.
            InvalidPathError: If source holds an unaddressable key.
        """
        if not isinstance(source, Mapping):
            raise TypeError(
                f"source must be a mapping, not {type(source).__name__}"
            )
        staged = PathTree()
        load_from_mapping(staged, source)
        self.clear()
        for node in staged:
            node.parent = self
            self._nodes[node.label] = node

    def clear(self) -> None:
        """Remove all nodes from this tree."""
        self._nodes.clear()

    # ==================== Conversion ====================

    def keys(self) -> list[str]:
        """Return labels at this level in insertion order."""
        return list(self._nodes.keys())

    def as_dict(self) -> dict[str, Any]:
        """Convert to a plain nested dict (recursive copy)."""
        return {
            label: export_value(node.value)
            for label, node in self._nodes.items()
        }
