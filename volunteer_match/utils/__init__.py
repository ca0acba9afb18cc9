"""Utility helpers for reusable functionality."""

from .datetime import as_utc, naive_utc_now, to_naive_utc, utc_now

__all__ = ["as_utc", "naive_utc_now", "to_naive_utc", "utc_now"]
