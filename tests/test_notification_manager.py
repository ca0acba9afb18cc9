"""Realtime delivery through the connection manager and publisher."""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone

from volunteer_match.domain.entities import Notification
from volunteer_match.infrastructure.notifications import (
    NotificationConnectionManager,
    NotificationLoader,
    NotificationPublisher,
    Snapshot,
)


class MemoryLoader:
    """Loader reading from an in-memory list instead of the store."""

    def __init__(self) -> None:
        self.rows: list[Notification] = []

    def add(self, recipient_id: int, message: str, *, is_read: bool = False) -> Notification:
        notification = Notification(
            id=len(self.rows) + 1,
            recipient_id=recipient_id,
            event_id=len(self.rows) + 1,
            kind="ApplicationDecided",
            message=message,
            link_to=None,
            is_read=is_read,
            created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
        )
        self.rows.append(notification)
        return notification

    def _mine(self, recipient_id):
        return [n for n in self.rows if n.recipient_id == recipient_id]

    def snapshot(self, recipient_id: int) -> Snapshot:
        mine = self._mine(recipient_id)
        unread = [n for n in mine if not n.is_read]
        return Snapshot(
            unread=unread,
            unread_count=len(unread),
            latest_id=max((n.id for n in mine), default=0),
        )

    def after(self, recipient_id: int, after_id: int):
        return [n for n in self._mine(recipient_id) if n.id > after_id]


class RecordingChannel:
    def __init__(self) -> None:
        self.frames: list[dict] = []

    async def send_json(self, data) -> None:
        self.frames.append(data)


class ClosingChannel(RecordingChannel):
    """Accepts the init frame, then behaves like a closed socket."""

    async def send_json(self, data) -> None:
        if self.frames:
            raise RuntimeError("socket closed")
        await super().send_json(data)


def test_connect_sends_unread_backlog():
    loader = MemoryLoader()
    loader.add(7, "old", is_read=True)
    loader.add(7, "waiting")
    manager = NotificationConnectionManager(loader=loader)
    channel = RecordingChannel()

    asyncio.run(manager.connect(7, channel))

    assert channel.frames == [
        {
            "type": "init",
            "data": [
                {
                    "id": 2,
                    "recipient_id": 7,
                    "event_id": 2,
                    "kind": "ApplicationDecided",
                    "message": "waiting",
                    "link_to": None,
                    "is_read": False,
                    "created_at": "2024-01-01T00:00:00+00:00",
                }
            ],
            "unread_count": 1,
        }
    ]
    assert manager.unread_count(7) == 1


def test_each_subscription_receives_each_notification_once_in_order():
    loader = MemoryLoader()
    manager = NotificationConnectionManager(loader=loader)
    first, second = RecordingChannel(), RecordingChannel()

    async def scenario():
        await manager.connect(3, first)
        loader.add(3, "one")
        await manager.deliver_pending(3)
        await manager.connect(3, second)
        loader.add(3, "two")
        loader.add(3, "three")
        await asyncio.gather(manager.deliver_pending(3), manager.deliver_pending(3))

    asyncio.run(scenario())

    def messages(channel):
        return [f["data"]["message"] for f in channel.frames if f["type"] == "notification"]

    assert messages(first) == ["one", "two", "three"]
    assert messages(second) == ["two", "three"]
    assert manager.unread_count(3) == 3


def test_record_read_only_counts_flipped_flags():
    loader = MemoryLoader()
    loader.add(4, "a")
    loader.add(4, "b")
    manager = NotificationConnectionManager(loader=loader)
    channel = RecordingChannel()

    async def scenario():
        await manager.connect(4, channel)
        await manager.record_read(4, 1)
        await manager.record_read(4, 0)

    asyncio.run(scenario())

    assert manager.unread_count(4) == 1
    assert channel.frames[-1] == {"type": "unread", "unread_count": 1}


def test_broken_subscriber_is_dropped_without_error():
    loader = MemoryLoader()
    manager = NotificationConnectionManager(loader=loader)

    async def scenario():
        await manager.connect(5, ClosingChannel())
        loader.add(5, "lost")
        await manager.deliver_pending(5)

    asyncio.run(scenario())

    assert manager.is_connected(5) is False


def test_subscribe_stream_yields_backlog_then_live_notifications():
    loader = MemoryLoader()
    loader.add(9, "backlog")
    manager = NotificationConnectionManager(loader=loader)
    publisher = NotificationPublisher(manager)

    async def scenario():
        received = []
        async with manager.subscribe(9) as stream:
            received.append(await stream.__anext__())
            loader.add(9, "live")
            publisher.dispatch([9])
            received.append(await asyncio.wait_for(stream.__anext__(), timeout=5))
            assert stream.unread_count == 2
        return received

    received = asyncio.run(scenario())

    assert [item["message"] for item in received] == ["backlog", "live"]
    assert manager.is_connected(9) is False


def test_notification_committed_during_connect_is_delivered():
    class RacingLoader(MemoryLoader):
        """Commits a notification right after the snapshot is read."""

        publisher = None

        def snapshot(self, recipient_id):
            snapshot = super().snapshot(recipient_id)
            self.add(recipient_id, "raced")
            self.publisher.dispatch([recipient_id])
            return snapshot

    loader = RacingLoader()
    manager = NotificationConnectionManager(loader=loader)
    loader.publisher = NotificationPublisher(manager)
    channel = RecordingChannel()

    asyncio.run(manager.connect(6, channel))

    assert [f["type"] for f in channel.frames] == ["init", "notification"]
    assert channel.frames[0]["data"] == []
    assert channel.frames[1]["data"]["message"] == "raced"
    assert channel.frames[1]["unread_count"] == 1
    assert manager.unread_count(6) == 1


def test_failed_delivery_is_logged(caplog):
    class BrokenStoreLoader(MemoryLoader):
        broken = False

        def after(self, recipient_id, after_id):
            if self.broken:
                raise RuntimeError("store went away")
            return super().after(recipient_id, after_id)

    loader = BrokenStoreLoader()
    manager = NotificationConnectionManager(loader=loader)
    publisher = NotificationPublisher(manager)

    async def scenario():
        await manager.connect(2, RecordingChannel())
        loader.broken = True
        publisher.dispatch([2])
        for _ in range(100):
            if not publisher._in_flight:
                break
            await asyncio.sleep(0.01)

    with caplog.at_level("ERROR"):
        asyncio.run(scenario())

    assert publisher._in_flight == set()
    failures = [
        r for r in caplog.records if r.getMessage() == "Realtime notification delivery failed"
    ]
    assert len(failures) == 1
    assert str(failures[0].exc_info[1]) == "store went away"


def test_publisher_skips_recipients_without_subscription():
    manager = NotificationConnectionManager(loader=MemoryLoader())
    publisher = NotificationPublisher(manager)

    publisher.dispatch([1, None, 2])
    publisher.dispatch_read(1, 3)

    assert manager.loop is None


def test_store_loader_reads_committed_notifications(session, accounts):
    from volunteer_match.application.use_cases.applications import submit_application

    staff = accounts.organization_member()
    opportunity = accounts.opportunity(staff)
    submit_application(
        session, volunteer_id=accounts.volunteer().id, opportunity_id=opportunity.id
    )

    loader = NotificationLoader(backlog_limit=10)
    snapshot = loader.snapshot(staff.id)

    assert snapshot.unread_count == 1
    assert snapshot.latest_id == snapshot.unread[0].id
    assert loader.after(staff.id, snapshot.latest_id) == []
