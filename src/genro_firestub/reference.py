# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Reference - a handle on one path of a Database.

References compare equal when they address the same normalized path of the
same database, and share a stable per-path ``uuid``. The query set with
order_by_child()/equal_to() belongs to the instance only: every call to
``Database.ref(path)`` starts without a query.

Example:
    >>> ref = db.ref('resumes').order_by_child('user').equal_to('u1')
    >>> snapshot = await ref.once('value')
    >>> unsubscribe = ref.on('child_removed', print)
    >>> await db.ref('resumes/r1').remove()
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, TYPE_CHECKING

from .exceptions import InvalidPathError, InvalidQueryError
from .path import join_path, split_path
from .query import QueryShape, apply_filter
from .snapshot import DataSnapshot
from .store.subscription import (
    EVENT_VALUE,
    ErrorCallback,
    SubscriberCallback,
    check_event,
)

if TYPE_CHECKING:
    from typing import Callable

    from .database import Database

logger = logging.getLogger(__name__)

_QUERY_VALUE_TYPES = (str, int, float, bool, type(None))


class Reference:
    """A path in a Database plus an optional equality query.

    Attributes:
        database: The owning Database.
        path: Normalized path string, without leading slash.
        uuid: Identifier shared by all references to the same path.
        order_by_child_path: Field set by order_by_child(), or None.
    """

    __slots__ = ('database', 'path', 'uuid', 'order_by_child_path', '_shape')

    def __init__(self, database: Database, path: str) -> None:
        """Initialize a Reference.

        Raises:
            InvalidPathError: If path is not a string or has no segments.
        """
        segments = split_path(path)
        if not segments:
            raise InvalidPathError(f"path {path!r} has no segments")
        self.database = database
        self.path = '/'.join(segments)
        self.uuid = database.reference_uuid(self.path)
        self.order_by_child_path: str | None = None
        self._shape: QueryShape | None = None

    def __repr__(self) -> str:
        query = f", query={self._shape!r}" if self._shape else ''
        return f"Reference({self.path!r}{query})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Reference):
            return NotImplemented
        return (self.database.uuid, self.path) == (other.database.uuid, other.path)

    def __hash__(self) -> int:
        return hash((self.database.uuid, self.path))

    @property
    def key(self) -> str:
        """Last segment of the path."""
        return self.path.rsplit('/', 1)[-1]

    @property
    def shape(self) -> QueryShape | None:
        """The active filter, or None until equal_to() has been called."""
        return self._shape

    @property
    def equal_to_value(self) -> Any:
        return self._shape.value if self._shape is not None else None

    def child(self, path: str) -> Reference:
        """Return a new Reference for path below this one."""
        return Reference(self.database, join_path(self.path, path))

    # ==================== Query ====================

    def order_by_child(self, field: str) -> Reference:
        """Select the child field the next equal_to() compares.

        Calling it again replaces the field and drops any equal_to() value.
        """
        if not isinstance(field, str) or not field:
            raise InvalidQueryError("order_by_child() needs a field name")
        self.order_by_child_path = field
        self._shape = None
        return self

    def equal_to(self, value: Any) -> Reference:
        """Keep only children whose ordering field equals value.

        Raises:
            InvalidQueryError: If order_by_child() was not called first,
                or value is not a string, number, boolean or None.
        """
        if self.order_by_child_path is None:
            raise InvalidQueryError("equal_to() requires order_by_child() first")
        if not isinstance(value, _QUERY_VALUE_TYPES):
            raise InvalidQueryError(
                f"equal_to() value must be a primitive, not {type(value).__name__}"
            )
        self._shape = QueryShape(self.order_by_child_path, value)
        return self

    # ==================== Reads and listeners ====================

    async def once(self, event: str = EVENT_VALUE) -> DataSnapshot:
        """Read the current (filtered) value at this path."""
        check_event(event)
        await asyncio.sleep(0)
        value = apply_filter(self.database.tree.read(self.path), self._shape)
        return DataSnapshot(self.key, value)

    def on(
        self,
        event: str,
        callback: SubscriberCallback,
        error_callback: ErrorCallback | None = None,
    ) -> Callable[[], None]:
        """Listen for event at this path with the current query.

        Returns:
            A callable that removes this listener.
        """
        return self.database.listeners.subscribe(
            self.path, self._shape, event, callback, error_callback
        )

    def off(self) -> None:
        """Remove every listener registered at this path."""
        removed = self.database.listeners.unsubscribe_all(self.path)
        logger.debug("off %r removed %d listeners", self.path, removed)

    # ==================== Writes ====================

    async def set(self, value: Any) -> None:
        """Replace the data at this path."""
        self.database.tree.write(self.path, value)
        await self._settle()

    async def update(self, partial: Any) -> None:
        """Merge partial into the record at this path."""
        self.database.tree.merge(self.path, partial)
        await self._settle()

    async def remove(self) -> None:
        """Delete the data at this path."""
        self.database.tree.delete(self.path)
        await self._settle()

    async def _settle(self) -> None:
        self.database.listeners.notify(self.path)
        await asyncio.sleep(0)
