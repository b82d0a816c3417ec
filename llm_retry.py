"""
LLM Retry wrapper for the article generator.

Handles retryable HTTP errors from OpenAI and Anthropic: 429 (rate limit),
503 (unavailable), 529 (overloaded). Non-retryable errors (400, 401, 403,
404) propagate immediately. Errors without a status code (connection reset,
timeout) are retried with the regular delays.
"""

import time
import logging

from article_config import (
    LLM_RETRYABLE_CODES,
    LLM_RETRY_MAX,
    LLM_RETRY_DELAYS,
    LLM_529_DELAYS,
)

logger = logging.getLogger(__name__)


def _status_code(error: Exception):
    # openai.APIStatusError / anthropic.APIStatusError store it in .status_code
    return getattr(error, "status_code", None) or getattr(error, "status", None)


def llm_call_with_retry(fn, *args, max_retries=None, delays=None, sleep=time.sleep, **kwargs):
    """
    Retry wrapper for LLM API calls.

    Args:
        fn: callable to execute
        *args, **kwargs: passed to fn
        max_retries: override default retry count (optional)
        delays: override the delay schedule in seconds (optional)
        sleep: sleep function, replaceable in tests

    Returns:
        Result from fn(*args, **kwargs)

    Raises:
        Last exception if all retries exhausted, or non-retryable error immediately.
    """
    retries = max_retries if max_retries is not None else LLM_RETRY_MAX
    regular_delays = delays or LLM_RETRY_DELAYS

    for attempt in range(retries + 1):
        try:
            return fn(*args, **kwargs)
        except Exception as e:
            status_code = _status_code(e)

            if status_code is not None and status_code not in LLM_RETRYABLE_CODES:
                logger.error(f"[LLM_RETRY] Non-retryable error {status_code}: {e}")
                raise

            # 529: overloaded, fail fast with shorter schedule
            is_529 = status_code == 529
            max_r = min(2, retries) if is_529 else retries
            schedule = (delays or LLM_529_DELAYS) if is_529 else regular_delays

            if attempt >= max_r:
                logger.error(
                    f"[LLM_RETRY] {status_code or type(e).__name__} exhausted "
                    f"after {attempt + 1} attempts"
                )
                raise

            delay = schedule[min(attempt, len(schedule) - 1)]
            logger.warning(
                f"[LLM_RETRY] {status_code or type(e).__name__} attempt "
                f"{attempt + 1}/{max_r + 1}, waiting {delay}s..."
            )
            sleep(delay)
