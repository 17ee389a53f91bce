import asyncio
import logging
from typing import Awaitable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _drain(task: asyncio.Task, what: str):
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.debug(f"Abandoned {what} finished with error: {exc}")


async def call_with_timeout(operation: Awaitable[T], seconds: float, what: str = "operation") -> T:
    """
    Await ``operation`` for at most ``seconds``.

    On expiry raises asyncio.TimeoutError and stops waiting. The operation
    itself is not cancelled; whatever it produces later is discarded.
    """
    task = asyncio.ensure_future(operation)
    try:
        return await asyncio.wait_for(asyncio.shield(task), timeout=seconds)
    except asyncio.TimeoutError:
        logger.warning(f"⏱️ {what} did not finish within {seconds:g}s, abandoning it")
        task.add_done_callback(lambda t: _drain(t, what))
        raise
