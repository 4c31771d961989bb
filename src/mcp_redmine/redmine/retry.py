"""Retry policy for outbound Redmine calls."""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TypeVar

from ..exceptions import RedmineApiError, RedmineNetworkError

logger = logging.getLogger("mcp-redmine.redmine.retry")

T = TypeVar("T")

SAFE_METHODS = frozenset({"GET", "HEAD", "OPTIONS"})


def is_transient_error(error: BaseException) -> bool:
    """Network failures and 5xx answers are worth another attempt."""
    if isinstance(error, RedmineNetworkError):
        return True
    if isinstance(error, RedmineApiError):
        return error.status_code is not None and error.status_code >= 500
    return False


@dataclass
class RetryState:
    """Attempt bookkeeping for a single outbound call."""

    max_retries: int
    attempt: int = 0

    @property
    def exhausted(self) -> bool:
        return self.attempt >= self.max_retries


@dataclass
class RetryPolicy:
    """Exponential backoff for transient failures.

    The first attempt is followed by at most `max_retries` retries. Before
    retry n the policy sleeps `backoff_base ** n` seconds. Each retry calls
    the same function again, so the request is resent unchanged.
    """

    max_retries: int = 3
    backoff_base: float = 2.0
    retry_writes: bool = False
    is_retryable: Callable[[BaseException], bool] = is_transient_error
    sleep: Callable[[float], None] = field(default=time.sleep, repr=False)

    def delay_for(self, attempt: int) -> float:
        return self.backoff_base**attempt

    def applies_to(self, method: str) -> bool:
        """Whether requests with this HTTP method are retried at all."""
        return self.retry_writes or method.upper() in SAFE_METHODS

    def call(self, func: Callable[[], T], description: str = "request") -> T:
        """Run `func`, retrying transient failures.

        Raises:
            Exception: The last error once retries are exhausted, or the
                first non-retryable error unchanged.
        """
        state = RetryState(max_retries=self.max_retries)
        while True:
            try:
                return func()
            except Exception as e:
                if state.exhausted or not self.is_retryable(e):
                    if state.attempt:
                        logger.error(
                            f"{description} failed after {state.attempt + 1} attempt(s): {e}"
                        )
                    raise
                state.attempt += 1
                delay = self.delay_for(state.attempt)
                logger.warning(
                    f"{description} failed ({e}); retry {state.attempt}/"
                    f"{state.max_retries} in {delay:g}s"
                )
                self.sleep(delay)
