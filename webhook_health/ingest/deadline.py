"""Run an awaitable against a wall-clock deadline."""

import asyncio
import logging
from collections.abc import Awaitable
from typing import TypeVar

from webhook_health.errors import RequestTimeout

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def with_deadline(operation: Awaitable[T], timeout: float) -> T:
    """Await ``operation``; cancel it and raise RequestTimeout after ``timeout`` seconds.

    Cancellation is delivered into the operation, so ``async with`` blocks
    inside it (HTTP clients, connections) are unwound before this returns.
    """
    try:
        return await asyncio.wait_for(operation, timeout=timeout)
    except asyncio.TimeoutError as e:
        logger.warning("Operation exceeded %.1fs deadline, cancelled", timeout)
        raise RequestTimeout(timeout) from e
