from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, TypeVar

from wair.core.errors import ApiError

T = TypeVar("T")

logger = logging.getLogger("wair.llm")


def is_retryable_api_error(exc: BaseException) -> bool:
    return isinstance(exc, ApiError) and exc.retryable


def linear_backoff(step_ms: int) -> Callable[[int], float]:
    """Delay in seconds before retry number ``attempt`` (1-based)."""

    def _delay(attempt: int) -> float:
        return attempt * step_ms / 1000.0

    return _delay


@dataclass(frozen=True)
class RetryPolicy:
    max_attempts: int
    backoff: Callable[[int], float]
    is_retryable: Callable[[BaseException], bool] = is_retryable_api_error

    @classmethod
    def linear(cls, retries: int, step_ms: int = 1000) -> "RetryPolicy":
        return cls(max_attempts=max(retries, 0) + 1, backoff=linear_backoff(step_ms))


async def run_with_retry(
    call: Callable[[], Awaitable[T]],
    policy: RetryPolicy,
    *,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> T:
    """Run ``call`` until it succeeds or the policy gives up.

    Attempts are strictly sequential. Errors the policy does not consider
    retryable, and the error of the last attempt, propagate unchanged.
    """
    attempt = 0
    while True:
        attempt += 1
        try:
            return await call()
        except Exception as exc:
            if attempt >= policy.max_attempts or not policy.is_retryable(exc):
                raise
            delay = policy.backoff(attempt)
            logger.warning(
                "llm:retry attempt=%s/%s delay_s=%.1f error=%r",
                attempt, policy.max_attempts, delay, exc,
            )
            await sleep(delay)
