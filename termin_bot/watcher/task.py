"""
Module: termin_bot/watcher/task.py

Defines PollCycle: one pass over every configured store, followed by formatting and,
when any store has free timeslots, a channel notification.
"""
import asyncio
from typing import NamedTuple, Tuple

from termin_bot.errors import SourceError
from termin_bot.utils import log_message
from termin_bot.watcher.formatter import PollResult, format_poll_result


class CycleOutcome(NamedTuple):
    message: str
    has_availability: bool
    failed_stores: Tuple[str, ...]
    notified: bool


class PollCycle:
    """
    Runs a single poll cycle.

    Stores are queried sequentially in configuration order; the blocking client runs in a
    worker thread so the Discord gateway stays responsive. The message is only formatted
    once every store has answered or failed.

    Attributes:
        config: WatcherConfig with the stores and display names.
        client: SourceClient (or any object with a blocking `fetch(store_code)`).
        notifier: ChannelNotifier (or any object with `async notify(message) -> bool`).
    """
    def __init__(self, config, client, notifier):
        self.config = config
        self.client = client
        self.notifier = notifier

    async def collect(self):
        """
        Query every store and return (PollResult, failed_store_codes).

        A store whose lookup raises SourceError is recorded with no timeslots.
        """
        result: PollResult = {}
        failed = []
        for store_code in self.config.store_codes:
            try:
                result[store_code] = await asyncio.to_thread(self.client.fetch, store_code)
            except SourceError as e:
                log_message(f"Lookup failed, treating as no availability: {e}", "warning")
                result[store_code] = []
                failed.append(store_code)
        return result, tuple(failed)

    async def run(self, notify=True):
        """
        Execute the cycle and return its CycleOutcome.

        With notify=False the message is built but never sent.
        """
        result, failed = await self.collect()
        message, has_availability = format_poll_result(result, self.config.store_names)
        log_message(
            f"Polled {len(result)} store(s): "
            f"{'availability found' if has_availability else 'no availability'}"
            f"{f', {len(failed)} failed' if failed else ''}",
            "info" if has_availability else "debug"
        )
        notified = False
        if notify and has_availability:
            notified = await self.notifier.notify(message)
        return CycleOutcome(message, has_availability, failed, notified)
