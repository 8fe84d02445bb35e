# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Subscription registry and event dispatch for PathTree.

Listeners are registered per (path, query shape, event type). After each
mutation, notify() computes every affected payload from the post-mutation
tree right away and schedules the callbacks on the running asyncio loop,
so no callback ever runs inside the mutating call.

Event types:
    - value: the whole (filtered) value at the path, once per mutation
    - child_added: one event per child entering the filtered set
    - child_removed: one event per child leaving it, with its last value
    - child_changed: one event per child whose value changed
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, TYPE_CHECKING

from ..exceptions import InvalidEventError, NoEventLoopError
from ..path import is_related, normalize_path, split_path
from ..query import QueryShape, apply_filter, strict_deep_equal
from ..snapshot import DataSnapshot

if TYPE_CHECKING:
    from .core import PathTree

logger = logging.getLogger(__name__)

EVENT_VALUE = 'value'
EVENT_CHILD_ADDED = 'child_added'
EVENT_CHILD_REMOVED = 'child_removed'
EVENT_CHILD_CHANGED = 'child_changed'
EVENT_TYPES = (
    EVENT_VALUE,
    EVENT_CHILD_ADDED,
    EVENT_CHILD_REMOVED,
    EVENT_CHILD_CHANGED,
)

SubscriberCallback = Callable[[DataSnapshot], Any]
ErrorCallback = Callable[[Exception], Any]


def check_event(event: str) -> str:
    """Return event if it is a known event type.

    Raises:
        InvalidEventError: For any other name.
    """
    if event not in EVENT_TYPES:
        raise InvalidEventError(
            f"Unknown event type {event!r}, expected one of {EVENT_TYPES}"
        )
    return event


@dataclass(eq=False)
class Subscription:
    """One live registration.

    children holds the filtered children seen at the last delivery, used
    to work out which child events a mutation produces.
    """

    path: str
    shape: QueryShape | None
    event: str
    callback: SubscriberCallback
    error_callback: ErrorCallback | None = None
    active: bool = True
    children: dict[str, Any] = field(default_factory=dict)

    @property
    def key(self) -> str | None:
        segments = split_path(self.path)
        return segments[-1] if segments else None


def _children_of(value: Any) -> dict[str, Any]:
    return dict(value) if isinstance(value, dict) else {}


def _running_loop() -> asyncio.AbstractEventLoop:
    try:
        return asyncio.get_running_loop()
    except RuntimeError:
        raise NoEventLoopError(
            "listeners deliver on the running asyncio loop; "
            "call on() and mutations from inside a coroutine"
        ) from None


class ListenerRegistry:
    """Active subscriptions on one PathTree.

    Example:
        >>> registry = ListenerRegistry(tree)
        >>> unsubscribe = registry.subscribe('users', None, 'value', print)
        >>> tree.write('users/u1', {'name': 'Ann'})
        >>> registry.notify('users/u1')
        >>> unsubscribe()
    """

    def __init__(self, tree: PathTree) -> None:
        self._tree = tree
        self._subscriptions: dict[
            str, dict[tuple[QueryShape | None, str], list[Subscription]]
        ] = {}

    def __len__(self) -> int:
        return len(self.subscriptions())

    def subscriptions(self, path: str | None = None) -> list[Subscription]:
        """Return active subscriptions, all or only those at path."""
        if path is not None:
            buckets = [self._subscriptions.get(normalize_path(path), {})]
        else:
            buckets = list(self._subscriptions.values())
        return [
            subscription
            for bucket in buckets
            for group in bucket.values()
            for subscription in group
        ]

    # ==================== Registration ====================

    def subscribe(
        self,
        path: str,
        shape: QueryShape | None,
        event: str,
        callback: SubscriberCallback,
        error_callback: ErrorCallback | None = None,
    ) -> Callable[[], None]:
        """Register callback and schedule its initial delivery.

        A value listener receives the current value, a child_added
        listener receives every current child. Must be called while an
        asyncio event loop is running.

        Returns:
            A callable removing this subscription only. Calling it more
            than once has no further effect.

        Raises:
            NoEventLoopError: If no asyncio event loop is running.
        """
        check_event(event)
        loop = _running_loop()
        subscription = Subscription(
            normalize_path(path), shape, event, callback, error_callback
        )
        current = self._current_value(subscription)
        subscription.children = _children_of(current)
        bucket = self._subscriptions.setdefault(subscription.path, {})
        bucket.setdefault((shape, event), []).append(subscription)
        logger.debug("subscribe %s on %r", event, subscription.path)

        if event == EVENT_VALUE:
            self._schedule(
                loop, subscription, DataSnapshot(subscription.key, current)
            )
        elif event == EVENT_CHILD_ADDED:
            for key, child in subscription.children.items():
                self._schedule(loop, subscription, DataSnapshot(key, child))

        def unsubscribe() -> None:
            self._remove(subscription)

        return unsubscribe

    def _remove(self, subscription: Subscription) -> None:
        if not subscription.active:
            return
        subscription.active = False
        bucket = self._subscriptions.get(subscription.path)
        if bucket is None:
            return
        group_key = (subscription.shape, subscription.event)
        group = bucket.get(group_key, [])
        if subscription in group:
            group.remove(subscription)
        if not group:
            bucket.pop(group_key, None)
        if not bucket:
            del self._subscriptions[subscription.path]

    def unsubscribe_all(self, path: str) -> int:
        """Remove every subscription registered at exactly path.

        Returns:
            Number of subscriptions removed.
        """
        bucket = self._subscriptions.pop(normalize_path(path), {})
        removed = 0
        for group in bucket.values():
            for subscription in group:
                subscription.active = False
                removed += 1
        return removed

    def clear(self) -> None:
        """Remove all subscriptions."""
        for subscription in self.subscriptions():
            subscription.active = False
        self._subscriptions.clear()

    # ==================== Dispatch ====================

    def notify(self, path: str) -> None:
        """Schedule events for every subscription path could affect."""
        changed = split_path(path)
        affected = [
            subscription
            for sub_path, bucket in self._subscriptions.items()
            if is_related(split_path(sub_path), changed)
            for group in bucket.values()
            for subscription in group
        ]
        if not affected:
            return
        loop = _running_loop()
        for subscription in affected:
            self._dispatch(loop, subscription)

    def _current_value(self, subscription: Subscription) -> Any:
        return apply_filter(self._tree.read(subscription.path), subscription.shape)

    def _dispatch(
        self, loop: asyncio.AbstractEventLoop, subscription: Subscription
    ) -> None:
        current = self._current_value(subscription)
        previous = subscription.children
        children = _children_of(current)
        subscription.children = children

        if subscription.event == EVENT_VALUE:
            self._schedule(
                loop, subscription, DataSnapshot(subscription.key, current)
            )
        elif subscription.event == EVENT_CHILD_ADDED:
            for key, child in children.items():
                if key not in previous:
                    self._schedule(loop, subscription, DataSnapshot(key, child))
        elif subscription.event == EVENT_CHILD_REMOVED:
            for key, child in previous.items():
                if key not in children:
                    self._schedule(loop, subscription, DataSnapshot(key, child))
        elif subscription.event == EVENT_CHILD_CHANGED:
            for key, child in children.items():
                if key in previous and not strict_deep_equal(previous[key], child):
                    self._schedule(loop, subscription, DataSnapshot(key, child))

    def _schedule(
        self,
        loop: asyncio.AbstractEventLoop,
        subscription: Subscription,
        snapshot: DataSnapshot,
    ) -> None:
        loop.call_soon(self._deliver, subscription, snapshot)

    def _deliver(self, subscription: Subscription, snapshot: DataSnapshot) -> None:
        """Invoke one callback, keeping its failure away from the others."""
        if not subscription.active:
            return
        try:
            subscription.callback(snapshot)
        except Exception as exc:
            if subscription.error_callback is None:
                logger.exception(
                    "%s listener on %r raised", subscription.event, subscription.path
                )
                return
            try:
                subscription.error_callback(exc)
            except Exception:
                logger.exception(
                    "error callback for %s listener on %r raised",
                    subscription.event,
                    subscription.path,
                )
