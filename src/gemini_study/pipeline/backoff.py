"""Generic retry executor with exponential backoff and jitter.

The executor knows nothing about what it wraps. Callers supply a zero-arg
coroutine factory and a ``RetryPolicy``; rate-limit failures are retried,
everything else propagates on first sight.
"""

from __future__ import annotations

import asyncio
import logging
import random
from typing import TYPE_CHECKING

from gemini_study.pipeline.error_classifier import is_rate_limited
from gemini_study.telemetry import TelemetryContext

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from gemini_study.core.types import RetryPolicy
    from gemini_study.telemetry import TelemetryContextProtocol

log = logging.getLogger(__name__)

T_BACKOFF_RETRY = "backoff.retry"
T_BACKOFF_EXHAUSTED = "backoff.exhausted"


def compute_backoff_delay(
    attempt: int,
    base_delay_ms: int,
    rand: Callable[[], float] = random.random,
) -> float:
    """Delay in milliseconds before retrying after failed ``attempt`` (0-based).

    The result lies within ``[base * 2**attempt * 0.5, base * 2**attempt]``.
    """
    jitter = 0.5 + rand() * 0.5  # noqa: S311
    return base_delay_ms * (2**attempt) * jitter


class BackoffExecutor:
    """Runs an async operation under a bounded retry policy.

    Attempts are strictly sequential. The pause between attempts is an
    ``asyncio`` suspension and never blocks other tasks.
    """

    def __init__(
        self,
        *,
        is_retryable: Callable[[BaseException], bool] = is_rate_limited,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        rand: Callable[[], float] = random.random,
        telemetry: TelemetryContextProtocol | None = None,
    ) -> None:
        self._is_retryable = is_retryable
        self._sleep = sleep
        self._rand = rand
        self._telemetry: TelemetryContextProtocol = telemetry or TelemetryContext()

    async def execute[T](
        self,
        operation: Callable[[], Awaitable[T]],
        policy: RetryPolicy,
        *,
        cancel_event: asyncio.Event | None = None,
        label: str = "operation",
    ) -> T:
        """Run ``operation`` until it succeeds or the policy gives up.

        Raises:
            Exception: The last error observed, unchanged, once it is not
                retryable or ``policy.max_attempts`` attempts were made.
            asyncio.CancelledError: If ``cancel_event`` is set while waiting
                between attempts.
        """
        for attempt in range(policy.max_attempts):
            try:
                return await operation()
            except Exception as e:
                if not self._is_retryable(e):
                    raise
                if attempt + 1 >= policy.max_attempts:
                    self._telemetry.count(T_BACKOFF_EXHAUSTED, label=label)
                    log.warning(
                        "%s still rate limited after %d attempts; giving up",
                        label,
                        policy.max_attempts,
                    )
                    raise
                delay_ms = compute_backoff_delay(
                    attempt, policy.base_delay_ms, self._rand
                )
                self._telemetry.count(T_BACKOFF_RETRY, label=label, attempt=attempt + 1)
                log.warning(
                    "Rate limit hit for %s, retrying in %.0fms (attempt %d/%d)",
                    label,
                    delay_ms,
                    attempt + 1,
                    policy.max_attempts - 1,
                )
                await self._pause(delay_ms / 1000, cancel_event)
        # range() above always runs at least once and every path returns or raises
        raise AssertionError("unreachable")  # pragma: no cover

    async def _pause(self, seconds: float, cancel_event: asyncio.Event | None) -> None:
        if cancel_event is None:
            await self._sleep(seconds)
            return
        if not cancel_event.is_set():
            # Whichever finishes first ends the pause
            sleeper = asyncio.ensure_future(self._sleep(seconds))
            waiter = asyncio.ensure_future(cancel_event.wait())
            try:
                await asyncio.wait(
                    {sleeper, waiter}, return_when=asyncio.FIRST_COMPLETED
                )
            finally:
                for task in (sleeper, waiter):
                    if not task.done():
                        task.cancel()
            if not cancel_event.is_set():
                # Surfaces an error raised by the injected sleep
                sleeper.result()
                return
        raise asyncio.CancelledError("retry sequence abandoned by caller")
