# src/core/retry.py - v3
"""Retry policy with exponential backoff for outbound calls.

Shared by the LLM extractor and the geocoder. Only transient failures
(rate limits, timeouts, 5xx) are retried; everything else fails at once.
"""

from __future__ import annotations

import asyncio
import logging
import random
import re
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

logger = logging.getLogger(__name__)


class RetryExhausted(Exception):
    """All retries exhausted (or error not retryable) for an outbound call."""

    def __init__(self, operation: str, error_type: str, attempts: int, last_error: Exception):
        self.operation = operation
        self.error_type = error_type
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(
            f"Operation '{operation}' failed after {attempts} attempts ({error_type}): {last_error}"
        )


@dataclass(frozen=True)
class RetryConfig:
    """Retry configuration for a specific error type."""

    max_retries: int
    base_delay_s: float
    backoff_factor: float = 2.0
    jitter: bool = True


def build_retry_configs(max_retries: int, base_delay_s: float = 1.0) -> dict[str, RetryConfig]:
    """Retry table for transient error types with a common retry count."""
    return {
        "rate_limit": RetryConfig(max_retries=max_retries, base_delay_s=base_delay_s * 2),
        "timeout": RetryConfig(
            max_retries=max_retries, base_delay_s=base_delay_s, backoff_factor=1.0
        ),
        "server_error": RetryConfig(max_retries=max_retries, base_delay_s=base_delay_s * 2),
    }


DEFAULT_RETRY_CONFIGS: dict[str, RetryConfig] = build_retry_configs(max_retries=1)


# HTTP status as SDKs and our own errors word it: "(503)", "HTTP 503",
# "Error code: 503", "status 503", or a leading "503 Service Unavailable".
_STATUS_IN_MESSAGE = re.compile(
    r"\((\d{3})\)(?!\s*\d)"
    r"|\b(?:http|error code|status(?: code)?)[:\s]+(\d{3})\b"
    r"|^(\d{3})\s+[a-z]",
    re.IGNORECASE,
)

_SERVER_STATUSES = frozenset({500, 502, 503, 504})


def _status_code(error: Exception) -> int | None:
    """HTTP status carried by the error, from ``status_code`` or its message."""
    status = getattr(error, "status_code", None)
    if isinstance(status, int) and not isinstance(status, bool):
        return status
    match = _STATUS_IN_MESSAGE.search(str(error))
    if match:
        return int(next(g for g in match.groups() if g))
    return None


def classify_error(error: Exception) -> str:
    """Classify an exception into a retry error type."""
    msg = str(error).lower()
    name = type(error).__name__.lower()
    status = _status_code(error)

    if "timeout" in name or "timeout" in msg or "timed out" in msg:
        return "timeout"
    if status == 429 or "ratelimit" in name or "rate limit" in msg:
        return "rate_limit"
    if status in _SERVER_STATUSES or "server error" in msg:
        return "server_error"
    if "connect" in name or "connection" in msg:
        return "server_error"
    return "unknown"


def _compute_delay(config: RetryConfig, attempt: int) -> float:
    """Compute delay for a given attempt (0-based)."""
    delay = config.base_delay_s * (config.backoff_factor ** attempt)
    if config.jitter:
        delay *= 0.5 + random.random()  # noqa: S311
    return delay


async def with_retry(
    fn: Callable[..., Awaitable[Any]],
    *args: Any,
    operation: str = "unknown",
    retry_configs: dict[str, RetryConfig] | None = None,
    **kwargs: Any,
) -> Any:
    """Execute an async function with retry logic.

    Raises:
        RetryExhausted: If the error is not retryable or retries run out.
    """
    configs = DEFAULT_RETRY_CONFIGS if retry_configs is None else retry_configs
    attempts = 0

    while True:
        try:
            return await fn(*args, **kwargs)
        except Exception as e:
            error_type = classify_error(e)
            attempts += 1
            config = configs.get(error_type)

            if config is None or attempts > config.max_retries:
                raise RetryExhausted(operation, error_type, attempts, e) from e

            delay = _compute_delay(config, attempts - 1)
            logger.warning(
                "Operation '%s' - %s (attempt %d/%d), retrying in %.1fs",
                operation, error_type, attempts, config.max_retries, delay,
            )
            await asyncio.sleep(delay)
