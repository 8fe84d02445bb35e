# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Genro-FireStub - In-process emulator of a realtime database and auth.

A lightweight, zero-dependency library letting client code run against a
fake backend: path-addressed data, one-shot reads, live listeners and
single-field equality queries, all in memory.
"""

__version__ = "0.1.0"

from .auth import Auth
from .context import FireStub, get_stub, init, reset
from .database import Database, ServerValue
from .exceptions import (
    AuthError,
    FireStubError,
    InvalidEventError,
    InvalidPathError,
    InvalidQueryError,
    NoEventLoopError,
)
from .fixtures import AuthConstants, DatabaseConstants
from .query import QueryShape, apply_filter
from .reference import Reference
from .snapshot import DataSnapshot
from .store import ListenerRegistry, PathTree
from .store.subscription import EVENT_TYPES

__all__ = [
    # Context
    "FireStub",
    "init",
    "reset",
    "get_stub",
    # Handles
    "Database",
    "Auth",
    "ServerValue",
    "Reference",
    "DataSnapshot",
    # Store
    "PathTree",
    "ListenerRegistry",
    "QueryShape",
    "apply_filter",
    "EVENT_TYPES",
    # Fixtures
    "AuthConstants",
    "DatabaseConstants",
    # Exceptions
    "FireStubError",
    "InvalidPathError",
    "InvalidQueryError",
    "InvalidEventError",
    "NoEventLoopError",
    "AuthError",
]
