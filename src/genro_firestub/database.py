# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Database - the store handle.

Holds the PathTree, its ListenerRegistry and the per-path reference ids.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Mapping
from typing import Any
from uuid import uuid4

from .reference import Reference
from .store import ListenerRegistry, PathTree

logger = logging.getLogger(__name__)


class _ServerTimestamp:
    """Evaluates to the current time in milliseconds on every access."""

    def __get__(self, instance: Any, owner: type | None = None) -> int:
        return time.time_ns() // 1_000_000


class ServerValue:
    """Placeholder values resolved by the server.

    Example:
        >>> ServerValue.TIMESTAMP  # doctest: +SKIP
        1760788800000
    """

    TIMESTAMP = _ServerTimestamp()


class Database:
    """The in-memory realtime database.

    Args:
        seed: Optional initial data, loaded with initialize().
        uuid: Optional fixed identifier, random when omitted.

    Example:
        >>> db = Database({'users': {'u1': {'name': 'Ann'}}})
        >>> db.ref('/users/u1') == db.ref('users/u1')
        True
    """

    ServerValue = ServerValue

    def __init__(
        self,
        seed: Mapping[str, Any] | None = None,
        uuid: str | None = None,
    ) -> None:
        self.uuid = uuid or uuid4().hex
        self.tree = PathTree()
        self.listeners = ListenerRegistry(self.tree)
        self._reference_ids: dict[str, str] = {}
        if seed is not None:
            self.initialize(seed)

    def __repr__(self) -> str:
        return f"Database({self.uuid!r})"

    def initialize(self, seed: Mapping[str, Any] | None = None) -> None:
        """Replace all data with seed and drop every listener.

        Args:
            seed: Nested mapping to load. Defaults to the fixture data
                from genro_firestub.fixtures.

        Raises:
            InvalidPathError: If seed holds an unaddressable key. Data
                and listeners are then left untouched.
        """
        if seed is None:
            from .fixtures import default_seed
            seed = default_seed()
        self.tree.load(seed)
        self.listeners.clear()
        logger.debug("database %s initialized with %s", self.uuid, list(seed))

    def ref(self, path: str) -> Reference:
        """Return a Reference to path, without any query."""
        return Reference(self, path)

    def reference_uuid(self, path: str) -> str:
        """Return the stable identifier of the normalized path.

        Ids live as long as the Database and survive initialize(), so the
        table holds one entry per distinct path ever referenced.
        """
        return self._reference_ids.setdefault(path, uuid4().hex)
