"""Notification buses that receive chain-completion events."""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Callable
from typing import Any, Protocol

logger = logging.getLogger(__name__)

CHAIN_COMPLETE_TOPIC = "hook-chain-complete"

Subscriber = Callable[[str, Any], None]


def chain_complete_topic(session_id: str) -> str:
    return f"{CHAIN_COMPLETE_TOPIC}:{session_id}"


class EventBus(Protocol):
    """Fire-and-forget publisher for UI notifications."""

    def publish(self, topic: str, payload: Any) -> None: ...


class LoggingEventBus:
    """Bus that only writes notifications to the log."""

    def publish(self, topic: str, payload: Any) -> None:
        count = len(payload) if isinstance(payload, list) else 1
        logger.info("[%s] %d result(s)", topic, count)


class InMemoryEventBus:
    """In-process pub/sub bus.

    Subscribers registered for an exact topic or for ``"*"`` are called
    synchronously. Every publication is also kept in :attr:`published`.
    """

    def __init__(self) -> None:
        self._subscribers: dict[str, list[Subscriber]] = defaultdict(list)
        self.published: list[tuple[str, Any]] = []

    def subscribe(self, topic: str, callback: Subscriber) -> None:
        self._subscribers[topic].append(callback)

    def unsubscribe(self, topic: str, callback: Subscriber) -> None:
        subs = self._subscribers.get(topic, [])
        if callback in subs:
            subs.remove(callback)

    def publish(self, topic: str, payload: Any) -> None:
        self.published.append((topic, payload))
        for callback in [*self._subscribers.get(topic, []), *self._subscribers.get("*", [])]:
            callback(topic, payload)
