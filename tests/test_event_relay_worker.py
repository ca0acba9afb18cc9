"""Pending events are re-delivered while the application keeps running."""

from __future__ import annotations

import asyncio

from volunteer_match.application.use_cases.applications import (
    decide_application,
    submit_application,
)
from volunteer_match.application.use_cases.notifications import (
    emitter,
    list_notifications,
)
from volunteer_match.domain.errors import StoreUnavailable
from volunteer_match.infrastructure.repositories import EventRepository
from volunteer_match.workers import EventRelayWorker, run_once


def _decide_with_failed_fan_out(session, accounts, monkeypatch):
    staff = accounts.organization_member()
    volunteer = accounts.volunteer()
    opportunity = accounts.opportunity(staff)
    application = submit_application(
        session, volunteer_id=volunteer.id, opportunity_id=opportunity.id
    )

    real_fan_out = emitter.fan_out_event
    calls = []

    def flaky_fan_out(db, event):
        calls.append(event.id)
        if len(calls) == 1:
            raise StoreUnavailable()
        return real_fan_out(db, event)

    monkeypatch.setattr(emitter, "fan_out_event", flaky_fan_out)
    outcome = decide_application(
        session, application_id=application.id, decision="approve", actor_id=staff.id
    )
    return volunteer, outcome


def _delivered_event_ids(session, volunteer_id):
    return {n.event_id for n in list_notifications(session, recipient_id=volunteer_id)}


def test_failed_fan_out_leaves_event_pending(session, accounts, monkeypatch):
    volunteer, outcome = _decide_with_failed_fan_out(session, accounts, monkeypatch)

    assert outcome.application.status == "approved"
    assert [e.id for e in EventRepository(session).list_pending()] == [outcome.event.id]
    assert outcome.event.id not in _delivered_event_ids(session, volunteer.id)


def test_run_once_delivers_pending_event(session, accounts, monkeypatch):
    volunteer, outcome = _decide_with_failed_fan_out(session, accounts, monkeypatch)

    assert run_once() == 1
    assert run_once() == 0
    assert outcome.event.id in _delivered_event_ids(session, volunteer.id)


def test_running_worker_delivers_without_restart(session, accounts, monkeypatch):
    volunteer, outcome = _decide_with_failed_fan_out(session, accounts, monkeypatch)

    async def scenario():
        worker = EventRelayWorker(interval=0.05)
        worker.start()
        assert worker.running
        try:
            for _ in range(100):
                pending = await asyncio.to_thread(run_pending_count)
                if not pending:
                    break
                await asyncio.sleep(0.05)
        finally:
            await worker.stop()
        assert worker.running is False

    def run_pending_count():
        from volunteer_match.infrastructure.database import SessionLocal

        db = SessionLocal()
        try:
            return len(list(EventRepository(db).list_pending()))
        finally:
            db.rollback()
            db.close()

    asyncio.run(scenario())

    assert outcome.event.id in _delivered_event_ids(session, volunteer.id)


def test_worker_keeps_running_after_a_failed_sweep(monkeypatch):
    sweeps = []

    def failing_sweep(*, session_factory):
        sweeps.append(session_factory)
        raise RuntimeError("boom")

    monkeypatch.setattr("volunteer_match.workers.event_relay.run_once", failing_sweep)

    async def scenario():
        worker = EventRelayWorker(interval=0.01)
        worker.start()
        for _ in range(100):
            if len(sweeps) >= 2:
                break
            await asyncio.sleep(0.01)
        still_running = worker.running
        await worker.stop()
        return still_running

    assert asyncio.run(scenario()) is True
    assert len(sweeps) >= 2
