"""Shared HTTP and parsing helpers for outbound API calls."""
import asyncio
import logging
import random
from datetime import datetime, timezone
from typing import Optional

import aiohttp

logger = logging.getLogger(__name__)

# Repositories pushed/updated after this instant count as recent activity
RECENT_ACTIVITY_CUTOFF = datetime(2023, 1, 1, tzinfo=timezone.utc)


async def _request_json(
    session: aiohttp.ClientSession,
    method: str,
    url: str,
    *,
    retries: int = 3,
    **kwargs,
) -> dict | list | None:
    """Issue a request and return parsed JSON, retrying transient failures.

    Retries on 429 (rate limit), 5xx (server error), timeouts, and
    connection errors with exponential backoff + jitter.

    Returns None on non-retryable errors (400, 401, 403, 404, ...) and
    once every attempt has failed.
    """
    last_error = None
    for attempt in range(retries):
        try:
            async with session.request(method, url, **kwargs) as resp:
                if resp.status == 429 or resp.status >= 500:
                    wait = (2 ** attempt) + random.uniform(0, 1)
                    logger.warning(
                        "HTTP %d from %s, retrying in %.1fs (attempt %d/%d)",
                        resp.status, url, wait, attempt + 1, retries,
                    )
                    await asyncio.sleep(wait)
                    continue
                if resp.status == 403 and resp.headers.get("X-RateLimit-Remaining") == "0":
                    logger.warning("GitHub rate limit exhausted at %s", url)
                    return None
                if resp.status != 200:
                    logger.debug("HTTP %d from %s", resp.status, url)
                    return None
                return await resp.json()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            last_error = e
            if attempt < retries - 1:
                wait = (2 ** attempt) + random.uniform(0, 1)
                logger.warning(
                    "Request to %s failed: %s, retrying in %.1fs (attempt %d/%d)",
                    url, e, wait, attempt + 1, retries,
                )
                await asyncio.sleep(wait)

    if last_error:
        logger.error("All %d retries failed for %s: %s", retries, url, last_error)
    return None


async def http_get_json(
    session: aiohttp.ClientSession,
    url: str,
    *,
    retries: int = 3,
    **kwargs,
) -> dict | list | None:
    """GET request returning parsed JSON with retry on transient failures."""
    return await _request_json(session, "GET", url, retries=retries, **kwargs)


async def http_post_json(
    session: aiohttp.ClientSession,
    url: str,
    *,
    retries: int = 3,
    **kwargs,
) -> dict | list | None:
    """POST request returning parsed JSON with retry on transient failures."""
    return await _request_json(session, "POST", url, retries=retries, **kwargs)


def parse_date_iso(value) -> Optional[datetime]:
    """
    Parse an ISO 8601 timestamp into a timezone-aware datetime.

    Handles the trailing 'Z' GitHub uses; naive values are taken as UTC.

    Args:
        value: ISO format date string or datetime

    Returns:
        datetime object or None if parsing fails
    """
    if not value:
        return None
    parsed = None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
    if parsed is None:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def is_recent(updated_at: Optional[datetime]) -> bool:
    """True when the timestamp falls after the recent-activity cutoff."""
    return updated_at is not None and updated_at > RECENT_ACTIVITY_CUTOFF
