import asyncio
import logging
import time
from typing import Any, Awaitable, Callable, Optional

from app.core.errors import SenderUnavailableError
from app.utils.timeouts import call_with_timeout

logger = logging.getLogger(__name__)


class SenderHolder:
    """
    Process-wide cache for one verified mail sender.

    A cached handle younger than ``ttl_seconds`` is returned without any
    network call. Otherwise a new one is built and verified within
    ``timeout_seconds``. Concurrent rebuilds are allowed; the last one to
    finish wins the cache slot.
    """

    def __init__(self, factory: Callable[[], Awaitable[Any]], ttl_seconds: float = 300,
                 timeout_seconds: float = 15, clock: Callable[[], float] = time.monotonic):
        self.factory = factory
        self.ttl_seconds = ttl_seconds
        self.timeout_seconds = timeout_seconds
        self.clock = clock
        self._handle: Optional[Any] = None
        self._created_at: Optional[float] = None

    @property
    def handle(self) -> Optional[Any]:
        return self._handle

    def is_fresh(self) -> bool:
        if self._handle is None or self._created_at is None:
            return False
        return self.clock() - self._created_at < self.ttl_seconds

    async def _build(self) -> Any:
        handle = await self.factory()
        await handle.verify()
        return handle

    async def acquire(self) -> Any:
        if self.is_fresh():
            return self._handle

        try:
            handle = await call_with_timeout(self._build(), self.timeout_seconds, "mail sender setup")
        except asyncio.TimeoutError as e:
            self.invalidate()
            raise SenderUnavailableError(f"Mail sender not ready within {self.timeout_seconds:g}s") from e
        except SenderUnavailableError:
            self.invalidate()
            raise
        except Exception as e:
            self.invalidate()
            raise SenderUnavailableError(f"Mail sender setup failed: {e}") from e

        self._handle = handle
        self._created_at = self.clock()
        logger.info("✅ Email transporter created")
        return handle

    def invalidate(self, handle: Optional[Any] = None):
        """Drop the cached handle. With ``handle`` given, only if it is still the cached one."""
        if handle is not None and handle is not self._handle:
            return
        self._handle = None
        self._created_at = None
