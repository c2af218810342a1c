from __future__ import annotations

import logging
from functools import wraps
from typing import Any, Callable, TypeVar

import httpx
import tenacity
from pydantic import ValidationError

from labgit.settings import retry_max_attempts, retry_max_interval

logger = logging.getLogger(__name__)

T = TypeVar("T")


def with_retry(func: Callable[..., T]) -> Callable[..., T]:
    """
    Decorator that applies configurable retry logic to a function.

    Attempts and backoff come from `labgit.settings` at call time, so
    environment overrides apply without re-decorating.
    """

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> T:
        retry = tenacity.Retrying(
            stop=tenacity.stop_after_attempt(retry_max_attempts()),
            wait=tenacity.wait_exponential_jitter(initial=1, max=retry_max_interval()),
            retry=tenacity.retry_if_exception(_is_retryable_exception),
            before_sleep=_log_retry,
            retry_error_callback=_log_failure,
            reraise=True,
        )
        return retry(func, *args, **kwargs)

    return wrapper


def _is_retryable_exception(e: BaseException) -> bool:
    # Don't retry pydantic validation errors
    if isinstance(e, ValidationError):
        return False

    # Don't retry on HTTP 4xx (except 429); a 404 means the extension is absent
    if isinstance(e, httpx.HTTPStatusError):
        code_class = e.response.status_code // 100
        if code_class == 4 and e.response.status_code != 429:
            return False

    # Otherwise, retry: 5xx, timeouts, connection errors, OSError, etc...
    return isinstance(e, (httpx.HTTPError, OSError))


def _log_retry(retry_state: tenacity.RetryCallState) -> None:
    exception = retry_state.outcome.exception() if retry_state.outcome else None
    if isinstance(exception, httpx.HTTPStatusError):
        logger.debug(
            f"HTTP {exception.response.status_code} error (attempt {retry_state.attempt_number}). Retrying..."
        )
    else:
        logger.info(
            "retry_attempt",
            extra={
                "fn": retry_state.fn,
                "attempt_number": retry_state.attempt_number,
                "exception": str(exception),
            },
        )


def _log_failure(retry_state: tenacity.RetryCallState) -> Any:
    exception = retry_state.outcome.exception() if retry_state.outcome else None
    if isinstance(exception, httpx.HTTPStatusError):
        logger.warning(
            f"HTTP {exception.response.status_code} error after {retry_state.attempt_number} attempts."
        )
    else:
        logger.info(
            "retry_failed",
            extra={
                "fn": retry_state.fn,
                "attempt_number": retry_state.attempt_number,
                "exception": str(exception),
            },
        )
    return retry_state.outcome.result() if retry_state.outcome else None
