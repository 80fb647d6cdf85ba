"""Retry logic with exponential backoff for Confluence API rate limits.

Only HTTP 429 responses are retried. Waits double on every attempt
(1s, 2s, 4s with the defaults); every other error is re-raised at once.
"""

import time
import logging
from typing import Callable, TypeVar

from .errors import APIAccessError, ConfluenceError

logger = logging.getLogger(__name__)

T = TypeVar('T')

DEFAULT_MAX_RETRIES = 3


def retry_on_rate_limit(
    func: Callable[..., T],
    *args,
    max_retries: int = DEFAULT_MAX_RETRIES,
    **kwargs
) -> T:
    """Call ``func`` and retry it while the server answers 429.

    Args:
        func: The function to execute
        *args: Positional arguments for ``func``
        max_retries: Retries after the first attempt
        **kwargs: Keyword arguments for ``func``

    Returns:
        The return value of ``func``

    Raises:
        APIAccessError: If the rate limit persists after all retries
    """
    attempt = 0
    while True:
        try:
            return func(*args, **kwargs)
        except Exception as e:
            if not _is_rate_limit_error(e):
                raise
            if attempt >= max_retries:
                logger.error(f"Rate limit persisted after {max_retries} retries, giving up")
                raise APIAccessError(
                    f"Confluence API failure (after {max_retries} retries)",
                    status_code=429,
                ) from e

            wait_time = 2 ** attempt
            attempt += 1
            logger.info(
                f"Rate limited, retrying in {wait_time}s (retry {attempt}/{max_retries})"
            )
            time.sleep(wait_time)


def _status_code_of(exception: Exception):
    status_code = getattr(exception, 'status_code', None)
    if status_code is None:
        response = getattr(exception, 'response', None)
        status_code = getattr(response, 'status_code', None)
    return status_code


def _is_rate_limit_error(exception: Exception) -> bool:
    """Check if an exception represents a rate limit (429) error."""
    status_code = _status_code_of(exception)
    if status_code is not None:
        return status_code == 429
    if isinstance(exception, ConfluenceError):
        # Already translated; only a 429 status counts
        return False

    error_msg = str(exception).lower()
    return any(pattern in error_msg for pattern in (
        '429',
        'too many requests',
        'rate limit exceeded',
        'rate limited',
    ))
