# Copyright 2025-2026 Dimensional Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Publish/subscribe interface and the in-process bus the bridge runs on."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections import defaultdict
from collections.abc import Callable
from dataclasses import dataclass
import threading
from typing import Any, Generic, TypeVar

from ihmc_bridge.utils.logging_config import setup_logger

logger = setup_logger()

MsgT = TypeVar("MsgT")
TopicT = TypeVar("TopicT")


class PubSub(ABC, Generic[TopicT, MsgT]):
    """Abstract base class for pub/sub implementations with sugar methods."""

    @abstractmethod
    def publish(self, topic: TopicT, message: MsgT) -> None:
        """Publish a message to a topic."""
        ...

    @abstractmethod
    def subscribe(
        self, topic: TopicT, callback: Callable[[MsgT, TopicT], None]
    ) -> Callable[[], None]:
        """Subscribe to a topic with a callback. returns unsubscribe function"""
        ...

    @dataclass(slots=True)
    class _Subscription:
        _bus: PubSub[Any, Any]
        _topic: Any
        _cb: Callable[[Any, Any], None]
        _unsubscribe_fn: Callable[[], None]

        def unsubscribe(self) -> None:
            self._unsubscribe_fn()

        def __enter__(self):  # type: ignore[no-untyped-def]
            return self

        def __exit__(self, *exc) -> None:  # type: ignore[no-untyped-def]
            self.unsubscribe()

    # public helper: returns disposable object
    def sub(self, topic: TopicT, cb: Callable[[MsgT, TopicT], None]) -> PubSub._Subscription:
        unsubscribe_fn = self.subscribe(topic, cb)
        return self._Subscription(self, topic, cb, unsubscribe_fn)


class Memory(PubSub[str, Any]):
    """Synchronous in-process bus keyed by topic name.

    ``publish`` runs every subscriber callback on the caller's thread before
    returning. A callback that raises is logged and the remaining callbacks
    still run.
    """

    def __init__(self) -> None:
        self._subscribers: defaultdict[str, list[Callable[[Any, str], None]]] = defaultdict(list)
        self._lock = threading.Lock()

    def publish(self, topic: str, message: Any) -> None:
        with self._lock:
            callbacks = list(self._subscribers.get(topic, ()))
        for callback in callbacks:
            try:
                callback(message, topic)
            except Exception:
                logger.exception("Subscriber callback failed", topic=topic)

    def subscribe(
        self, topic: str, callback: Callable[[Any, str], None]
    ) -> Callable[[], None]:
        with self._lock:
            self._subscribers[topic].append(callback)

        def unsubscribe() -> None:
            with self._lock:
                callbacks = self._subscribers.get(topic)
                if callbacks and callback in callbacks:
                    callbacks.remove(callback)
                if not callbacks:
                    self._subscribers.pop(topic, None)

        return unsubscribe

    def topics(self) -> list[str]:
        """Topics that currently have at least one subscriber."""
        with self._lock:
            return sorted(self._subscribers)


__all__ = ["Memory", "MsgT", "PubSub", "TopicT"]
