"""
Module: termin_bot/watcher/shutdown.py

One-shot shutdown signal shared by the process signal handlers and the watcher loop.
"""
import asyncio


class ShutdownSignal:
    """
    Fires at most once and is never reset.

    The watcher checks it cooperatively between ticks; nothing in flight is cancelled.
    """
    def __init__(self):
        self._event = asyncio.Event()
        self.reason = None

    def fire(self, reason=None):
        """
        Fire the signal. Returns True only for the call that actually fired it.
        """
        if self._event.is_set():
            return False
        self.reason = reason
        self._event.set()
        return True

    def is_set(self):
        return self._event.is_set()

    async def wait(self, timeout=None):
        """
        Wait until the signal fires or timeout seconds pass.

        Returns True if the signal has fired.
        """
        if timeout is None:
            await self._event.wait()
            return True
        try:
            await asyncio.wait_for(self._event.wait(), timeout)
        except asyncio.TimeoutError:
            pass
        return self._event.is_set()
