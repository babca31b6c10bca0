"""Rate-limit annotations built from Zoom response headers."""

from __future__ import annotations

from datetime import datetime, timezone

import httpx
import structlog

from baton.zoom.models import Annotations, RateLimitDescription

logger = structlog.get_logger()

REMAINING_HEADER = "X-Ratelimit-Remaining"
LIMIT_HEADER = "X-Ratelimit-Limit"
RESET_HEADER = "Retry-After"


def _parse_int(response: httpx.Response, header: str) -> int | None:
    raw = response.headers.get(header, "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        logger.debug("Ignoring malformed rate-limit header", header=header, value=raw)
        return None


def extract_rate_limit_data(response: httpx.Response) -> RateLimitDescription:
    """Build a rate-limit description from response headers.

    Missing or malformed counters read as 0 and a malformed reset time is
    left unset; quota headers never fail the request they came with.
    """
    reset_at = None
    reset = _parse_int(response, RESET_HEADER)
    if reset is not None:
        try:
            reset_at = datetime.fromtimestamp(reset, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            logger.debug("Ignoring out-of-range reset time", value=reset)

    return RateLimitDescription(
        limit=_parse_int(response, LIMIT_HEADER) or 0,
        remaining=_parse_int(response, REMAINING_HEADER) or 0,
        reset_at=reset_at,
    )


def parse_resp(response: httpx.Response | None) -> Annotations:
    """Annotations for a call, empty when there was no response."""
    if response is None:
        return []
    return [extract_rate_limit_data(response)]
