"""Utility helpers to wake realtime subscribers after notifications are committed."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Coroutine, Iterable
from concurrent.futures import Future as ThreadFuture
from typing import Any

from .manager import NotificationConnectionManager, notification_manager

logger = logging.getLogger(__name__)


class NotificationPublisher:
    """Schedule deliveries on the event loop that owns the subscriptions.

    Callers may be request handlers running in a worker thread or coroutines on
    the loop itself. Recipients without a live subscription are skipped: their
    notifications are already in the store and arrive on the next connect.
    """

    def __init__(self, manager: NotificationConnectionManager) -> None:
        self._manager = manager
        self._in_flight: set[asyncio.Future[None] | ThreadFuture[None]] = set()

    def dispatch(self, recipient_ids: Iterable[int | None]) -> None:
        """Schedule delivery of pending notifications to ``recipient_ids``."""

        for recipient_id in sorted({r for r in recipient_ids if r}):
            if not self._manager.is_connected(recipient_id):
                continue
            self._schedule(self._manager.deliver_pending(recipient_id))

    def dispatch_read(self, recipient_id: int, flipped: int) -> None:
        """Propagate a read-flag change to the recipient's cached unread counter."""

        if flipped <= 0 or not self._manager.is_connected(recipient_id):
            return
        self._schedule(self._manager.record_read(recipient_id, flipped))

    def _schedule(self, coroutine: Coroutine[Any, Any, None]) -> None:
        target_loop = self._manager.loop
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            loop = None

        if loop is not None and loop is target_loop:
            self._track(loop.create_task(coroutine))
            return
        if target_loop is None or target_loop.is_closed():
            coroutine.close()
            logger.warning("No event loop available to deliver realtime notifications")
            return
        self._track(asyncio.run_coroutine_threadsafe(coroutine, target_loop))

    def _track(self, future: asyncio.Future[None] | ThreadFuture[None]) -> None:
        self._in_flight.add(future)
        future.add_done_callback(self._finished)

    def _finished(self, future: asyncio.Future[None] | ThreadFuture[None]) -> None:
        self._in_flight.discard(future)
        if future.cancelled():
            return
        error = future.exception()
        if error is not None:
            logger.error("Realtime notification delivery failed", exc_info=error)


notification_publisher = NotificationPublisher(notification_manager)


def dispatch_notifications(recipient_ids: Iterable[int | None]) -> None:
    """Public helper that delegates to the shared publisher instance."""

    notification_publisher.dispatch(recipient_ids)


def dispatch_read_receipt(recipient_id: int, flipped: int) -> None:
    """Public helper that delegates read-counter updates to the shared publisher."""

    notification_publisher.dispatch_read(recipient_id, flipped)


__all__ = [
    "NotificationPublisher",
    "dispatch_notifications",
    "dispatch_read_receipt",
    "notification_publisher",
]
