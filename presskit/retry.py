"""Retry policy for summarization calls using tenacity."""

from collections.abc import Callable
from functools import wraps
from typing import Any, TypeVar

import litellm
from loguru import logger
from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from .exceptions import SummarizationError

F = TypeVar("F", bound=Callable[..., Any])

# litellm.Timeout derives from litellm.APIConnectionError, not the builtins
TRANSIENT_ERRORS: tuple[type[BaseException], ...] = (
    litellm.Timeout,
    litellm.APIConnectionError,
    TimeoutError,
    ConnectionError,
)


def _log_retry(provider_name: str) -> Callable[[RetryCallState], None]:
    def before_sleep(retry_state: RetryCallState) -> None:
        error = retry_state.outcome.exception() if retry_state.outcome else None
        logger.warning(
            f"{provider_name} attempt {retry_state.attempt_number} failed, retrying: {error}"
        )

    return before_sleep


def with_summarizer_retry(
    provider_name: str,
    max_attempts: int = 3,
) -> Callable[[F], F]:
    """Retry transient inference failures, then surface SummarizationError.

    Timeouts and connection failures (litellm's or the builtins) are retried
    with exponential backoff. Anything else, or a transient failure that
    outlives max_attempts, is raised as SummarizationError.
    """

    def decorator(func: F) -> F:
        @retry(
            retry=retry_if_exception_type(TRANSIENT_ERRORS),
            stop=stop_after_attempt(max_attempts),
            wait=wait_exponential(multiplier=1, min=1, max=10),
            reraise=True,
            before_sleep=_log_retry(provider_name),
        )
        async def attempt(*args: Any, **kwargs: Any) -> Any:
            return await func(*args, **kwargs)

        @wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return await attempt(*args, **kwargs)
            except SummarizationError:
                raise
            except Exception as e:
                logger.error(f"{provider_name} summarization failed: {e}")
                raise SummarizationError(f"{provider_name} API error: {e}") from e

        wrapper.retry = attempt.retry  # type: ignore[attr-defined]
        return wrapper  # type: ignore[return-value]

    return decorator
