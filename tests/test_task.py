#!/usr/bin/env python3
"""
Tests for PollCycle
"""
import unittest
from unittest.mock import AsyncMock

from termin_bot.config import WatcherConfig
from termin_bot.errors import SourceError
from termin_bot.watcher.client import Timeslot
from termin_bot.watcher.task import PollCycle


class FakeClient:
    """Returns canned timeslots per store; stores listed in `failing` raise SourceError."""
    def __init__(self, timeslots=None, failing=()):
        self.timeslots = timeslots or {}
        self.failing = set(failing)
        self.calls = []

    def fetch(self, store_code):
        self.calls.append(store_code)
        if store_code in self.failing:
            raise SourceError(store_code, "connection reset")
        return list(self.timeslots.get(store_code, []))

    def close(self):
        pass


SLOT = Timeslot(date="2024-09-01", start="10:00", end="10:30")


class TestPollCycle(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.config = WatcherConfig(channel_id=1, store_codes=("0885", "0103"))
        self.notifier = AsyncMock()
        self.notifier.notify.return_value = True

    async def test_queries_every_store_in_order(self):
        client = FakeClient()
        await PollCycle(self.config, client, self.notifier).run()
        self.assertEqual(client.calls, ["0885", "0103"])

    async def test_no_availability_no_notification(self):
        outcome = await PollCycle(self.config, FakeClient(), self.notifier).run()
        self.assertFalse(outcome.has_availability)
        self.assertFalse(outcome.notified)
        self.notifier.notify.assert_not_awaited()

    async def test_availability_notifies(self):
        client = FakeClient({"0885": [SLOT]})
        outcome = await PollCycle(self.config, client, self.notifier).run()
        self.assertTrue(outcome.has_availability)
        self.assertTrue(outcome.notified)
        self.notifier.notify.assert_awaited_once_with(outcome.message)
        self.assertIn("Store: Bonn city center", outcome.message)
        self.assertIn("Store: Bonn Kölnstraße\nNo dates available", outcome.message)

    async def test_failing_store_does_not_abort_cycle(self):
        client = FakeClient({"0103": [SLOT]}, failing=["0885"])
        outcome = await PollCycle(self.config, client, self.notifier).run()
        self.assertEqual(client.calls, ["0885", "0103"])
        self.assertEqual(outcome.failed_stores, ("0885",))
        self.assertTrue(outcome.has_availability)
        self.assertIn("Store: Bonn Kölnstraße\nDate: 2024-09-01", outcome.message)
        self.assertIn("Store: Bonn city center\nNo dates available", outcome.message)

    async def test_all_stores_failing(self):
        client = FakeClient(failing=["0885", "0103"])
        outcome = await PollCycle(self.config, client, self.notifier).run()
        self.assertEqual(outcome.failed_stores, ("0885", "0103"))
        self.assertFalse(outcome.has_availability)
        self.notifier.notify.assert_not_awaited()

    async def test_notification_failure_is_reported(self):
        self.notifier.notify.return_value = False
        outcome = await PollCycle(self.config, FakeClient({"0885": [SLOT]}), self.notifier).run()
        self.assertTrue(outcome.has_availability)
        self.assertFalse(outcome.notified)

    async def test_notify_disabled(self):
        outcome = await PollCycle(self.config, FakeClient({"0885": [SLOT]}), self.notifier).run(notify=False)
        self.assertTrue(outcome.has_availability)
        self.notifier.notify.assert_not_awaited()

    async def test_cycles_do_not_share_results(self):
        client = FakeClient({"0885": [SLOT]})
        cycle = PollCycle(self.config, client, self.notifier)
        first = await cycle.run()
        client.timeslots = {"0103": [Timeslot(date="2024-10-05", start="12:00", end="12:30")]}
        second = await cycle.run()
        self.assertIn("2024-09-01", first.message)
        self.assertNotIn("2024-09-01", second.message)
        self.assertIn("2024-10-05", second.message)


if __name__ == "__main__":
    unittest.main()
