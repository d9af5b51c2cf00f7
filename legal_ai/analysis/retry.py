"""Exponential backoff retry for transient completion errors."""

import random
import time
from collections.abc import Callable
from typing import TypeVar

from legal_ai.analysis.client_base import BaseCompletionClient
from legal_ai.analysis.exceptions import UpstreamError
from legal_ai.logging.logger import Log

T = TypeVar("T")


def with_retry(
    call: Callable[[], T],
    *,
    max_attempts: int,
    base_delay: float,
    max_delay: float,
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """Run ``call`` retrying only rate-limited and timed-out upstream errors.

    Any other exception, or the last retryable one, propagates unchanged.
    """
    attempts = max(1, max_attempts)
    for attempt in range(attempts):
        try:
            return call()
        except UpstreamError as exc:
            if not exc.retryable or attempt == attempts - 1:
                raise
            delay = min(base_delay * (2 ** attempt) + random.random(), max_delay)
            Log.warning(
                f"Retry {attempt + 1}/{attempts - 1} after {delay:.1f}s: {exc.kind.value}: {exc}"
            )
            sleep(delay)
    raise AssertionError("unreachable")


class RetryingCompletionClient(BaseCompletionClient):
    """Wraps another client with bounded retry on transient upstream errors."""

    def __init__(
        self,
        inner: BaseCompletionClient,
        *,
        max_attempts: int,
        base_delay: float = 1.0,
        max_delay: float = 20.0,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._inner = inner
        self._max_attempts = max_attempts
        self._base_delay = base_delay
        self._max_delay = max_delay
        self._sleep = sleep

    def complete(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
        max_tokens: int | None = None,
        json_mode: bool = False,
    ) -> str:
        return with_retry(
            lambda: self._inner.complete(
                model=model,
                temperature=temperature,
                system_prompt=system_prompt,
                user_prompt=user_prompt,
                max_tokens=max_tokens,
                json_mode=json_mode,
            ),
            max_attempts=self._max_attempts,
            base_delay=self._base_delay,
            max_delay=self._max_delay,
            sleep=self._sleep,
        )
