# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""FireStub exceptions."""

from __future__ import annotations


class FireStubError(Exception):
    """Base exception for FireStub errors."""

    pass


class InvalidPathError(FireStubError, ValueError):
    """Raised when a path is not a string or resolves to no segments."""

    pass


class InvalidQueryError(FireStubError):
    """Raised when a query is built in an unsupported way."""

    pass


class InvalidEventError(FireStubError, ValueError):
    """Raised when an unknown event type is requested."""

    pass


class AuthError(FireStubError):
    """Raised when a sign-in attempt fails."""

    pass


class NoEventLoopError(FireStubError, RuntimeError):
    """Raised when listeners are used without a running asyncio loop."""

    pass
