"""Periodic background callback bound to the lifetime of an operation."""

import asyncio
import contextlib
import logging
from collections.abc import AsyncIterator, Awaitable, Callable

logger = logging.getLogger(__name__)


async def _beat(callback: Callable[[], Awaitable[None]], interval: float) -> None:
    while True:
        try:
            await callback()
        except Exception:
            logger.warning("Heartbeat callback failed", exc_info=True)
        await asyncio.sleep(interval)


@contextlib.asynccontextmanager
async def heartbeat(
    callback: Callable[[], Awaitable[None]] | None,
    interval: float,
) -> AsyncIterator[None]:
    """Run callback now and every interval seconds until the block exits.

    The background task is cancelled and awaited on exit, whether the block
    completed or raised. A None callback makes this a no-op.
    """
    if callback is None:
        yield
        return
    if interval <= 0:
        raise ValueError("interval must be positive")
    task = asyncio.create_task(_beat(callback, interval))
    try:
        yield
    finally:
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
