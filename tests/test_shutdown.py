#!/usr/bin/env python3
"""
Tests for ShutdownSignal
"""
import asyncio
import unittest

from termin_bot.watcher.shutdown import ShutdownSignal


class TestShutdownSignal(unittest.IsolatedAsyncioTestCase):
    async def test_fires_once(self):
        signal = ShutdownSignal()
        self.assertFalse(signal.is_set())
        self.assertTrue(signal.fire("SIGTERM"))
        self.assertFalse(signal.fire("SIGINT"))
        self.assertTrue(signal.is_set())
        self.assertEqual(signal.reason, "SIGTERM")

    async def test_wait_times_out(self):
        signal = ShutdownSignal()
        self.assertFalse(await signal.wait(0.01))

    async def test_wait_wakes_on_fire(self):
        signal = ShutdownSignal()
        waiter = asyncio.create_task(signal.wait(5))
        await asyncio.sleep(0)
        signal.fire()
        self.assertTrue(await asyncio.wait_for(waiter, 1))

    async def test_wait_without_timeout(self):
        signal = ShutdownSignal()
        signal.fire()
        self.assertTrue(await signal.wait())


if __name__ == "__main__":
    unittest.main()
