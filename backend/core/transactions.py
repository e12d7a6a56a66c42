from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional, TypeVar

from django.conf import settings
from django.db import DatabaseError, transaction

from .db_errors import is_transient, map_database_error

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class RetryPolicy:
    max_retries: int = 3
    base_delay_ms: int = 1000
    max_delay_ms: int = 5000

    @classmethod
    def from_settings(cls) -> "RetryPolicy":
        return cls(
            max_retries=getattr(settings, "TX_RETRY_MAX_RETRIES", 3),
            base_delay_ms=getattr(settings, "TX_RETRY_BASE_DELAY_MS", 1000),
            max_delay_ms=getattr(settings, "TX_RETRY_MAX_DELAY_MS", 5000),
        )

    def delay_for(self, attempt: int) -> float:
        """Backoff in seconds before retry number ``attempt`` (0-based)."""
        delay_ms = min(self.base_delay_ms * (2 ** attempt), self.max_delay_ms)
        return delay_ms / 1000.0


def run_with_retry(
    operation: Callable[[], T],
    policy: Optional[RetryPolicy] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """
    Run ``operation`` inside ``transaction.atomic()``, retrying transient
    store errors (lock/timeout) with exponential backoff.

    Non-transient errors propagate on the first failure. Once retries are
    exhausted the last transient error is raised as ``TransientStoreError``.
    """
    policy = policy or RetryPolicy.from_settings()
    attempt = 0
    while True:
        try:
            with transaction.atomic():
                return operation()
        except Exception as exc:
            if not is_transient(exc):
                raise
            if attempt >= policy.max_retries:
                if isinstance(exc, DatabaseError):
                    raise map_database_error(exc) from exc
                raise
            delay = policy.delay_for(attempt)
            logger.warning(
                "Transaction timeout, retrying (%s/%s) in %.2fs: %s",
                attempt + 1,
                policy.max_retries,
                delay,
                exc,
            )
            sleep(delay)
            attempt += 1
