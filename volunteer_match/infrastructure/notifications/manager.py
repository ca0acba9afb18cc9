"""Connection management for realtime notification subscribers."""

from __future__ import annotations

import asyncio
import logging
from collections import defaultdict
from collections.abc import AsyncIterator, Callable, Sequence
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any, DefaultDict, Protocol

from anyio import to_thread

from volunteer_match.config import get_settings
from volunteer_match.domain.entities import Notification
from volunteer_match.infrastructure.database import SessionLocal
from volunteer_match.infrastructure.repositories import NotificationRepository

from .serialization import serialize_notification

logger = logging.getLogger(__name__)


class Channel(Protocol):
    """Anything able to receive JSON frames (a websocket, an in-process stream)."""

    async def send_json(self, data: Any) -> None: ...


@dataclass
class Snapshot:
    """What a subscriber must see when it connects."""

    unread: Sequence[Notification]
    unread_count: int
    latest_id: int


class NotificationLoader:
    """Read notifications straight from the store; the store is the only queue."""

    def __init__(
        self,
        session_factory: Callable[[], Any] = SessionLocal,
        *,
        backlog_limit: int | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._backlog_limit = backlog_limit or get_settings().notification_list_limit

    def snapshot(self, recipient_id: int) -> Snapshot:
        session = self._session_factory()
        try:
            repository = NotificationRepository(session)
            return Snapshot(
                unread=repository.list_unread_for_recipient(
                    recipient_id, limit=self._backlog_limit
                ),
                unread_count=repository.count_unread(recipient_id),
                latest_id=repository.latest_id(recipient_id),
            )
        finally:
            session.close()

    def after(self, recipient_id: int, after_id: int) -> Sequence[Notification]:
        session = self._session_factory()
        try:
            return NotificationRepository(session).list_after(recipient_id, after_id=after_id)
        finally:
            session.close()


@dataclass(eq=False)
class _Subscription:
    channel: Channel
    last_delivered_id: int


class NotificationConnectionManager:
    """Manage active subscriptions grouped by recipient.

    Deliveries for one recipient run under that recipient's lock and always read
    ``id > last_delivered_id`` from the store, so every subscription sees each
    notification once and in creation order. Pushes are only a wake-up signal;
    nothing is buffered here.
    """

    def __init__(self, loader: NotificationLoader | None = None) -> None:
        self._loader = loader or NotificationLoader()
        self._subscriptions: DefaultDict[int, list[_Subscription]] = defaultdict(list)
        self._locks: DefaultDict[int, asyncio.Lock] = defaultdict(asyncio.Lock)
        self._unread: dict[int, int] = {}
        self.loop: asyncio.AbstractEventLoop | None = None

    def is_connected(self, recipient_id: int) -> bool:
        return bool(self._subscriptions.get(recipient_id))

    def unread_count(self, recipient_id: int) -> int | None:
        """Return the cached unread counter while ``recipient_id`` is connected."""

        return self._unread.get(recipient_id)

    async def connect(self, recipient_id: int, channel: Channel) -> None:
        """Register ``channel`` and send it the unread backlog as an ``init`` frame."""

        loop = asyncio.get_running_loop()
        if self.loop is not loop:
            # Locks bind to the loop that first waits on them.
            self._locks.clear()
            self.loop = loop
        async with self._locks[recipient_id]:
            snapshot = await to_thread.run_sync(self._loader.snapshot, recipient_id)
            subscription = _Subscription(channel=channel, last_delivered_id=snapshot.latest_id)
            self._subscriptions[recipient_id].append(subscription)
            self._unread[recipient_id] = snapshot.unread_count
            await channel.send_json(
                {
                    "type": "init",
                    "data": [serialize_notification(n) for n in snapshot.unread],
                    "unread_count": snapshot.unread_count,
                }
            )
        # Catch notifications committed between the snapshot and the registration.
        await self.deliver_pending(recipient_id)

    def disconnect(self, recipient_id: int, channel: Channel) -> None:
        """Remove ``channel`` from the pool for ``recipient_id``."""

        subscriptions = self._subscriptions.get(recipient_id)
        if subscriptions is None:
            return
        subscriptions[:] = [s for s in subscriptions if s.channel is not channel]
        if not subscriptions:
            self._subscriptions.pop(recipient_id, None)
            self._unread.pop(recipient_id, None)

    async def deliver_pending(self, recipient_id: int) -> None:
        """Send every stored notification the recipient's subscribers have not seen."""

        async with self._locks[recipient_id]:
            subscriptions = list(self._subscriptions.get(recipient_id, ()))
            if not subscriptions:
                return
            floor = min(s.last_delivered_id for s in subscriptions)
            fresh = await to_thread.run_sync(self._loader.after, recipient_id, floor)
            if not fresh:
                return

            newest_id = subscriptions[0].last_delivered_id
            for subscription in subscriptions:
                newest_id = max(newest_id, subscription.last_delivered_id)
            unread = self._unread.get(recipient_id, 0)
            unread += sum(1 for n in fresh if n.id > newest_id and not n.is_read)
            self._unread[recipient_id] = unread

            for subscription in subscriptions:
                for notification in fresh:
                    if notification.id <= subscription.last_delivered_id:
                        continue
                    sent = await self._send(
                        recipient_id,
                        subscription,
                        {
                            "type": "notification",
                            "data": serialize_notification(notification),
                            "unread_count": unread,
                        },
                    )
                    if not sent:
                        break
                    subscription.last_delivered_id = notification.id

    async def record_read(self, recipient_id: int, flipped: int) -> None:
        """Decrement the cached counter by the number of flags actually flipped."""

        if flipped <= 0:
            return
        async with self._locks[recipient_id]:
            if recipient_id not in self._unread:
                return
            self._unread[recipient_id] = max(self._unread[recipient_id] - flipped, 0)
            message = {"type": "unread", "unread_count": self._unread[recipient_id]}
            for subscription in list(self._subscriptions.get(recipient_id, ())):
                await self._send(recipient_id, subscription, message)

    @asynccontextmanager
    async def subscribe(self, recipient_id: int) -> AsyncIterator["NotificationStream"]:
        """Yield an in-process stream of notifications for ``recipient_id``."""

        stream = NotificationStream()
        await self.connect(recipient_id, stream)
        try:
            yield stream
        finally:
            self.disconnect(recipient_id, stream)

    async def _send(
        self, recipient_id: int, subscription: _Subscription, message: dict[str, Any]
    ) -> bool:
        try:
            await subscription.channel.send_json(message)
        except Exception:
            logger.warning(
                "Dropping disconnected notification subscriber for user %s", recipient_id
            )
            self.disconnect(recipient_id, subscription.channel)
            return False
        return True


class NotificationStream:
    """Async iterator over notification payloads delivered to one subscriber."""

    def __init__(self) -> None:
        self._queue: asyncio.Queue[dict[str, Any]] = asyncio.Queue()
        self.unread_count: int | None = None

    async def send_json(self, data: Any) -> None:
        self.unread_count = data.get("unread_count", self.unread_count)
        if data.get("type") == "init":
            for item in data.get("data", []):
                self._queue.put_nowait(item)
        elif data.get("type") == "notification":
            self._queue.put_nowait(data["data"])

    def __aiter__(self) -> "NotificationStream":
        return self

    async def __anext__(self) -> dict[str, Any]:
        return await self._queue.get()


notification_manager = NotificationConnectionManager()


__all__ = [
    "Channel",
    "NotificationConnectionManager",
    "NotificationLoader",
    "NotificationStream",
    "Snapshot",
    "notification_manager",
]
