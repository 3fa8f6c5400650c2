# src/claude_workbench/core/events.py

from __future__ import annotations

import itertools
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(slots=True, eq=False)
class Subscription:
    """Handle returned by SubscriberRegistry.subscribe(); call unsubscribe() to stop receiving."""

    token: int
    _registry: SubscriberRegistry | None = field(default=None, repr=False)

    @property
    def active(self) -> bool:
        return self._registry is not None and self._registry.has(self)

    def unsubscribe(self) -> None:
        if self._registry is not None:
            self._registry.unsubscribe(self)
            self._registry = None


class SubscriberRegistry(Generic[T]):
    """
    Observer registry: subscription handle -> callback.

    notify() calls every callback synchronously, in registration order.
    A failing callback is logged and does not stop the others.
    """

    def __init__(self, name: str = "subscribers") -> None:
        self._name = name
        self._callbacks: dict[int, Callable[[T], None]] = {}
        self._ids = itertools.count(1)

    def __len__(self) -> int:
        return len(self._callbacks)

    def has(self, subscription: Subscription) -> bool:
        return subscription.token in self._callbacks

    def subscribe(self, callback: Callable[[T], None]) -> Subscription:
        token = next(self._ids)
        self._callbacks[token] = callback
        return Subscription(token=token, _registry=self)

    def unsubscribe(self, subscription: Subscription) -> None:
        self._callbacks.pop(subscription.token, None)

    def clear(self) -> None:
        self._callbacks.clear()

    def notify(self, value: T) -> None:
        # Copy: a callback may unsubscribe itself.
        for token, callback in list(self._callbacks.items()):
            try:
                callback(value)
            except Exception:
                logger.exception("%s callback failed token=%s", self._name, token)
