from __future__ import annotations

import logging
import time
from typing import Any, Callable, Mapping, Optional

import httpx

from motion_bridge.errors import RetryExhaustedError

logger = logging.getLogger(__name__)

BASE_DELAY_S = 0.2


def backoff_delay(attempt: int, base_delay_s: float = BASE_DELAY_S) -> float:
    """Delay after a failed ``attempt`` (1-based): 0.2s, 0.4s, 0.8s, ..."""
    return base_delay_s * (2 ** (attempt - 1))


def send_with_retry(
    client: httpx.Client,
    method: str,
    url: str,
    *,
    headers: Optional[Mapping[str, str]] = None,
    json: Any = None,
    max_attempts: int = 3,
    base_delay_s: float = BASE_DELAY_S,
    error_label: str = "Upstream error",
    sleep: Optional[Callable[[float], None]] = None,
) -> httpx.Response:
    """Send a request, retrying any non-2xx response with exponential backoff.

    Every non-success status is retried the same way (a 400 is treated like a 500).
    Transport errors are not retried and propagate as raised by httpx.

    Raises RetryExhaustedError with the last status and body once ``max_attempts``
    responses have failed.
    """
    sleep = sleep or time.sleep
    attempts = max(1, max_attempts)
    last_status: Optional[int] = None
    last_detail = ""

    for attempt in range(1, attempts + 1):
        response = client.request(method, url, headers=headers, json=json)
        if response.is_success:
            return response

        last_status = response.status_code
        last_detail = response.text
        if attempt < attempts:
            delay = backoff_delay(attempt, base_delay_s)
            logger.warning(
                f"{method} {url} failed with {last_status} "
                f"(attempt {attempt}/{attempts}), retrying in {delay:.1f}s"
            )
            sleep(delay)

    logger.error(f"{method} {url} failed after {attempts} attempts (last status {last_status})")
    raise RetryExhaustedError(
        f"{error_label} ({last_status}): {last_detail}",
        status=last_status,
        detail=last_detail,
        attempts=attempts,
    )
