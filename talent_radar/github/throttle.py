"""Minimum-spacing throttle for sequential upstream calls."""
import asyncio
import time


class Throttle:
    """Enforce a minimum interval between consecutive calls.

    The first call passes immediately; later calls sleep for whatever is
    left of the interval since the previous call.

    Usage:
        throttle = Throttle(min_interval=0.1)
        await throttle.wait()
        profile = await client.get_user(login)
    """

    def __init__(self, min_interval: float = 0.0):
        self.min_interval = max(0.0, min_interval)
        self._last: float | None = None

    async def wait(self) -> None:
        """Sleep until the minimum interval since the previous call has passed."""
        now = time.monotonic()
        if self._last is not None and self.min_interval > 0:
            remaining = self.min_interval - (now - self._last)
            if remaining > 0:
                await asyncio.sleep(remaining)
                now = time.monotonic()
        self._last = now
