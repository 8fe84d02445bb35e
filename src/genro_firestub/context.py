# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""FireStub context - owner of the Database and Auth handles.

Code under test receives a FireStub (or its handles) explicitly. For code
that expects global accessors, the module keeps one default context with
init()/reset() to control its lifetime:

    >>> stub = init()            # fresh context, default seed loaded
    >>> database() is stub.database()
    True
    >>> reset()                  # next access builds a new context
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .auth import Auth
from .database import Database


class FireStub:
    """Lazily builds and keeps one Database and one Auth.

    Args:
        seed: Initial data for the database, None for an empty one.
        **auth_options: Keyword arguments forwarded to Auth.
    """

    def __init__(
        self,
        seed: Mapping[str, Any] | None = None,
        **auth_options: Any,
    ) -> None:
        self._seed = seed
        self._auth_options = auth_options
        self._database: Database | None = None
        self._auth: Auth | None = None

    def database(self) -> Database:
        if self._database is None:
            self._database = Database(self._seed)
        return self._database

    def auth(self) -> Auth:
        if self._auth is None:
            self._auth = Auth(**self._auth_options)
        return self._auth

    def reset(self) -> None:
        """Drop both handles. Listeners of the old database stop firing."""
        if self._database is not None:
            self._database.listeners.clear()
        self._database = None
        self._auth = None


_default_stub: FireStub | None = None


def get_stub() -> FireStub:
    """Return the default context, creating it on first use."""
    global _default_stub
    if _default_stub is None:
        _default_stub = FireStub()
    return _default_stub


def init(seed: Mapping[str, Any] | None = None, **auth_options: Any) -> FireStub:
    """Replace the default context with a fresh one holding seed.

    Args:
        seed: Data to load. Defaults to the fixture data.
    """
    global _default_stub
    reset()
    _default_stub = FireStub(**auth_options)
    _default_stub.database().initialize(seed)
    return _default_stub


def reset() -> None:
    """Discard the default context."""
    global _default_stub
    if _default_stub is not None:
        _default_stub.reset()
    _default_stub = None


def database() -> Database:
    """Database of the default context."""
    return get_stub().database()


def auth() -> Auth:
    """Auth of the default context."""
    return get_stub().auth()
