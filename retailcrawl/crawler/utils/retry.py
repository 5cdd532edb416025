"""Retry decorators with exponential backoff.

Nothing inside the crawl core retries. The runner layer applies these
decorators when it decides a failed crawl start is worth repeating.
"""

import logging

from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
    before_sleep_log,
)
import structlog

from retailcrawl.core.exceptions import StartPageUnavailable


logger = structlog.get_logger(__name__)


def crawl_retry(attempts: int = 3, min_wait: float = 2, max_wait: float = 60):
    """Build a retry decorator for the first page of a crawl run.

    Only StartPageUnavailable is retried: once a crawl has produced records,
    running it again would re-emit them.

    Args:
        attempts: Maximum number of attempts
        min_wait: Minimum backoff in seconds
        max_wait: Maximum backoff in seconds
    """
    return retry(
        stop=stop_after_attempt(max(1, attempts)),
        wait=wait_exponential(multiplier=1, min=min_wait, max=max_wait),
        retry=retry_if_exception_type(StartPageUnavailable),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )
