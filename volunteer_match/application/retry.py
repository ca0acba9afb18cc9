"""Caller-side retry for transient store failures."""

from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass
from typing import Callable, TypeVar

from volunteer_match.domain.errors import StoreUnavailable

T = TypeVar("T")

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RetryPolicy:
    max_attempts: int = 3
    base_delay_s: float = 0.05
    max_delay_s: float = 1.0


def _backoff_delay(policy: RetryPolicy, attempt: int) -> float:
    # Full jitter exponential backoff.
    exp = min(policy.max_delay_s, policy.base_delay_s * (2 ** max(0, attempt - 1)))
    return random.random() * exp


def retry_on_store_unavailable(
    operation: Callable[[], T],
    *,
    policy: RetryPolicy = RetryPolicy(),
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """Run ``operation`` again from scratch while it raises :class:`StoreUnavailable`.

    Domain errors propagate on the first attempt. ``operation`` must re-run its
    checks on every call; retrying a submission or a decision is safe because both
    are deduplicated by the store.
    """

    attempt = 1
    while True:
        try:
            return operation()
        except StoreUnavailable:
            if attempt >= policy.max_attempts:
                raise
            delay = _backoff_delay(policy, attempt)
            logger.warning(
                "Store unavailable (attempt %s/%s); retrying in %.3fs",
                attempt,
                policy.max_attempts,
                delay,
            )
            sleep(delay)
            attempt += 1


__all__ = ["RetryPolicy", "retry_on_store_unavailable"]
