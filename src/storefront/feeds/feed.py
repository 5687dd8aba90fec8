"""In-process change feed: push snapshots to subscribed screens.

A subscription watches one topic (``cart``, ``orders``, ...) for one user, or
for every user when ``user_id`` is None. Publishing a change on a topic makes
each matching subscription rebuild its snapshot through its own loader and
hand it to its callback. Subscriptions must be closed by the screen that
opened them; opening a second subscription under the same screen key closes
the first.
"""

import threading
from collections.abc import Callable
from typing import Any

import structlog

logger = structlog.get_logger(__name__)

Loader = Callable[[], Any]
Callback = Callable[[Any], None]


class Subscription:
    def __init__(self, feed: "ChangeFeed", topic: str, user_id: str | None, loader: Loader, callback: Callback, key):
        self._feed = feed
        self.topic = topic
        self.user_id = user_id
        self.key = key
        self._loader = loader
        self._callback = callback
        self.active = True

    def matches(self, topic: str, user_id: str | None) -> bool:
        if not self.active or topic != self.topic:
            return False
        return self.user_id is None or self.user_id == user_id

    def deliver(self) -> None:
        """Load the current snapshot and hand it to the callback."""
        if self.active:
            self._callback(self._loader())

    def close(self) -> None:
        """Stop receiving updates. Safe to call more than once."""
        if self.active:
            self.active = False
            self._feed._discard(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()


class ChangeFeed:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._subscriptions: list[Subscription] = []

    def subscribe(
        self,
        topic: str,
        user_id: str | None,
        loader: Loader,
        callback: Callback,
        screen: str | None = None,
    ) -> Subscription:
        """Register a subscription and return its handle.

        ``screen`` names the consuming screen; a live subscription with the
        same topic, user and screen is closed and replaced.
        """
        key = (topic, user_id, screen) if screen is not None else None
        subscription = Subscription(self, topic, user_id, loader, callback, key)

        with self._lock:
            if key is not None:
                for existing in [s for s in self._subscriptions if s.key == key]:
                    existing.active = False
                    self._subscriptions.remove(existing)
                    logger.debug("Replaced duplicate subscription", topic=topic, user_id=user_id, screen=screen)
            self._subscriptions.append(subscription)

        return subscription

    def publish(self, topic: str, user_id: str | None) -> int:
        """Notify every subscription interested in ``topic`` for ``user_id``.

        Returns the number of subscriptions notified. A failing callback is
        logged and does not stop delivery to the others.
        """
        with self._lock:
            targets = [s for s in self._subscriptions if s.matches(topic, user_id)]

        for subscription in targets:
            try:
                subscription.deliver()
            except Exception:
                logger.exception("Subscriber callback failed", topic=topic, user_id=user_id)

        return len(targets)

    def active_subscriptions(self, topic: str | None = None) -> list[Subscription]:
        with self._lock:
            return [s for s in self._subscriptions if topic is None or s.topic == topic]

    def close_all(self) -> None:
        with self._lock:
            for subscription in self._subscriptions:
                subscription.active = False
            self._subscriptions.clear()

    def _discard(self, subscription: Subscription) -> None:
        with self._lock:
            if subscription in self._subscriptions:
                self._subscriptions.remove(subscription)
