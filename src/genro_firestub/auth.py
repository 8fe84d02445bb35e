# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Auth - anonymous-only authentication handle."""

from __future__ import annotations

import asyncio
import copy
import logging
from typing import Any, Callable
from uuid import uuid4

from .exceptions import AuthError

logger = logging.getLogger(__name__)

AuthObserver = Callable[[Any], Any]
AuthErrorObserver = Callable[[Exception], Any]


class Auth:
    """Tracks the signed-in user and notifies state observers.

    Args:
        anonymous_user: Record returned by sign_in_anonymously().
            Defaults to AuthConstants.anonymous_user1.
        sign_in_error: If set, sign-in fails with this message, error
            observers are called and AuthError is raised.
        uuid: Optional fixed identifier, random when omitted.
    """

    def __init__(
        self,
        anonymous_user: dict[str, Any] | None = None,
        sign_in_error: str | None = None,
        uuid: str | None = None,
    ) -> None:
        if anonymous_user is None:
            from .fixtures import AuthConstants
            anonymous_user = AuthConstants.anonymous_user1
        self.uuid = uuid or uuid4().hex
        self.anonymous_user = copy.deepcopy(anonymous_user)
        self.sign_in_error = sign_in_error
        self.current_user: dict[str, Any] | None = None
        self._registrations: list[tuple[AuthObserver, AuthErrorObserver | None]] = []

    @property
    def observers(self) -> list[AuthObserver]:
        """Registered state observers, in registration order."""
        return [observer for observer, _ in self._registrations]

    def on_auth_state_changed(
        self,
        observer: AuthObserver,
        error_observer: AuthErrorObserver | None = None,
    ) -> Callable[[], None]:
        """Register observer for sign-in and sign-out.

        Returns:
            A callable removing the registration. Safe to call twice.
        """
        registration = (observer, error_observer)
        self._registrations.append(registration)

        def unsubscribe() -> None:
            if registration in self._registrations:
                self._registrations.remove(registration)

        return unsubscribe

    async def sign_in_anonymously(self) -> dict[str, Any]:
        """Sign in as the anonymous user and return its record.

        Raises:
            AuthError: If the handle was built with sign_in_error.
        """
        await asyncio.sleep(0)
        if self.sign_in_error is not None:
            error = AuthError(self.sign_in_error)
            self._notify_error(error)
            raise error
        self.current_user = copy.deepcopy(self.anonymous_user)
        self._notify(self.current_user)
        return copy.deepcopy(self.current_user)

    async def sign_out(self) -> None:
        await asyncio.sleep(0)
        self.current_user = None
        self._notify(None)

    def _notify(self, user: dict[str, Any] | None) -> None:
        for observer, _ in list(self._registrations):
            try:
                observer(copy.deepcopy(user))
            except Exception:
                logger.exception("auth state observer %r raised", observer)

    def _notify_error(self, error: Exception) -> None:
        for _, error_observer in list(self._registrations):
            if error_observer is None:
                continue
            try:
                error_observer(error)
            except Exception:
                logger.exception("auth error observer %r raised", error_observer)
