"""Bounded fixed-delay retry loop."""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass

Sleeper = Callable[[float], None]
FailureHook = Callable[[int, Exception], None]


@dataclass(frozen=True)
class RetryPolicy:
    """Attempt budget and the fixed pause between attempts."""

    max_attempts: int = 3
    delay_seconds: float = 1.0

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1.")
        if self.delay_seconds < 0:
            raise ValueError("delay_seconds must not be negative.")

    @classmethod
    def from_milliseconds(cls, max_attempts: int, delay_ms: int) -> RetryPolicy:
        return cls(max_attempts=max_attempts, delay_seconds=delay_ms / 1000)


@dataclass(frozen=True)
class RetryOutcome:
    """Whether the operation eventually succeeded, and after how many attempts."""

    succeeded: bool
    attempts: int
    last_error: Exception | None = None


def send_with_retry(
    operation: Callable[[], None],
    policy: RetryPolicy,
    *,
    sleep: Sleeper = time.sleep,
    on_failure: FailureHook | None = None,
) -> RetryOutcome:
    """Run ``operation`` until it succeeds or the attempt budget is spent.

    ``on_failure`` receives the 1-based attempt number and the error of every
    failed attempt. The delay is applied between attempts only, never after
    the last one.
    """
    last_error: Exception | None = None
    for attempt in range(1, policy.max_attempts + 1):
        try:
            operation()
        except Exception as exc:  # pylint: disable=broad-exception-caught
            last_error = exc
            if on_failure is not None:
                on_failure(attempt, exc)
            if attempt < policy.max_attempts:
                sleep(policy.delay_seconds)
            continue
        return RetryOutcome(succeeded=True, attempts=attempt)
    return RetryOutcome(succeeded=False, attempts=policy.max_attempts, last_error=last_error)
