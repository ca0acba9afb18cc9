"""Background workers started with the application."""

from .event_relay import EventRelayWorker, run_once

__all__ = ["EventRelayWorker", "run_once"]
