"""Coalesces bursts of calls into one call after a quiet period."""

import asyncio
import logging
from typing import Callable, List, Optional

logger = logging.getLogger(__name__)

DEFAULT_DELAY_SEC = 0.2


class Debouncer:
    """Runs `callback` once `delay` seconds after the last `trigger()`."""

    def __init__(self, callback: Callable[[], None], delay: float = DEFAULT_DELAY_SEC):
        self.callback = callback
        self.delay = delay
        self._handle: Optional[asyncio.TimerHandle] = None
        self._waiters: List[asyncio.Future] = []

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def trigger(self) -> None:
        """Restart the quiet period. Must be called from a running event loop."""
        self._cancel_handle()
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self.delay, self._fire)

    async def wait(self) -> bool:
        """
        Wait for the pending call.

        Returns:
            True once the callback ran, False when the call was cancelled or
            nothing was pending
        """
        if self._handle is None:
            return False
        waiter = asyncio.get_running_loop().create_future()
        self._waiters.append(waiter)
        return await waiter

    def cancel(self) -> None:
        self._cancel_handle()
        self._release_waiters(False)

    def _cancel_handle(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _release_waiters(self, fired: bool) -> None:
        waiters, self._waiters = self._waiters, []
        for waiter in waiters:
            if not waiter.done():
                waiter.set_result(fired)

    def _fire(self) -> None:
        self._handle = None
        try:
            self.callback()
        except Exception as e:
            logger.error(f"[DEBOUNCE] Callback failed: {e}")
        self._release_waiters(True)
