"""Background sweep that re-delivers committed but undelivered domain events."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Any

from anyio import to_thread

from volunteer_match.application.use_cases.notifications import relay_pending_events
from volunteer_match.config import get_settings
from volunteer_match.domain.errors import StoreUnavailable
from volunteer_match.infrastructure.database import SessionLocal

logger = logging.getLogger(__name__)


def run_once(
    *, session_factory: Callable[[], Any] = SessionLocal, limit: int = 100
) -> int:
    """Relay one batch of pending events. Safe to call from any thread."""

    session = session_factory()
    try:
        return relay_pending_events(session, limit=limit)
    except StoreUnavailable:
        logger.warning("Store unavailable; pending events stay queued")
        return 0
    finally:
        session.close()


class EventRelayWorker:
    """Run :func:`run_once` every ``interval`` seconds on the running event loop."""

    def __init__(
        self,
        *,
        interval: float | None = None,
        session_factory: Callable[[], Any] = SessionLocal,
    ) -> None:
        self.interval = interval or get_settings().event_relay_interval_seconds
        self._session_factory = session_factory
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run())

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            try:
                await to_thread.run_sync(self._sweep)
            except Exception:
                logger.exception("Event relay sweep failed")

    def _sweep(self) -> int:
        return run_once(session_factory=self._session_factory)


__all__ = ["EventRelayWorker", "run_once"]
