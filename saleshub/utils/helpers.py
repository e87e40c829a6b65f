"""
Helper utilities and common functions
"""

import asyncio
import json
from datetime import datetime, timezone
from typing import Any

import structlog

logger = structlog.get_logger("saleshub.helpers")


def safe_json_dumps(data: Any, default: str = "{}") -> str:
    """Safely serialize to JSON string"""
    try:
        return json.dumps(data, ensure_ascii=False, default=str)
    except (TypeError, ValueError):
        return default


def truncate_text(text: str, max_length: int = 100, suffix: str = "...") -> str:
    """Truncate text to maximum length"""
    if not text or len(text) <= max_length:
        return text

    return text[:max_length - len(suffix)] + suffix


def utc_now_iso() -> str:
    """Current UTC time in ISO format"""
    return datetime.now(timezone.utc).isoformat()


async def retry_async(
    coro_func,
    max_retries: int = 3,
    delay: float = 1.0,
    backoff_factor: float = 2.0,
    exceptions: tuple = (Exception,)
) -> Any:
    """Retry async function with exponential backoff"""
    last_exception = None

    for attempt in range(max_retries + 1):
        try:
            return await coro_func()
        except exceptions as e:
            last_exception = e

            if attempt == max_retries:
                break

            wait_time = delay * (backoff_factor ** attempt)
            logger.warning(
                f"Attempt {attempt + 1} failed, retrying in {wait_time}s",
                error=str(e)
            )
            await asyncio.sleep(wait_time)

    raise last_exception
