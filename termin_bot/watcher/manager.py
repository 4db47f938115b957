"""
Module: termin_bot/watcher/manager.py

Defines WatcherScheduler: drives the fixed-interval poll loop, runs one PollCycle per
interval, and stops cooperatively when the shutdown signal fires.
"""
import asyncio
import time
from datetime import datetime, UTC

from termin_bot.utils import log_message
from termin_bot.watcher.client import SourceClient
from termin_bot.watcher.notifier import ChannelNotifier
from termin_bot.watcher.task import PollCycle

RUNNING = "running"
STOPPED = "stopped"


class WatcherScheduler:
    """
    Orchestrates the polling loop.

    Responsibilities:
      - Tick once per `config.tick`, checking the shutdown signal on every tick.
      - Start a cycle once `config.poll_interval` has elapsed since the previous cycle
        completed; cycle duration is added to the wait, not subtracted from it.
      - Keep cycles from overlapping, including on-demand checks.
      - Record a small runtime summary for the status command.

    Attributes:
      config: WatcherConfig for the loop timings.
      cycle: PollCycle executed every interval.
      state (str): "running" while the loop runs, "stopped" otherwise.
      cycles_run (int): Completed scheduled cycles.
      last_cycle_at (datetime or None): UTC time the last scheduled cycle completed.
      last_outcome (CycleOutcome or None): Summary of the last scheduled cycle.
    """
    def __init__(self, config, cycle, clock=time.monotonic):
        self.config = config
        self.cycle = cycle
        self.clock = clock
        self.state = STOPPED
        self.cycles_run = 0
        self.last_cycle_at = None
        self.last_outcome = None
        self._lock = asyncio.Lock()
        self._cycle_started = None

    @classmethod
    def from_config(cls, bot, config):
        """Build a scheduler wired to the real HTTP client and a channel notifier."""
        cycle = PollCycle(config, SourceClient(config), ChannelNotifier(bot, config.channel_id))
        return cls(config, cycle)

    def seconds_until_next_cycle(self):
        """Seconds left before the next scheduled cycle, or None when not running."""
        if self.state != RUNNING or self._cycle_started is None:
            return None
        elapsed = self.clock() - self._cycle_started
        return max(0.0, self.config.poll_interval.total_seconds() - elapsed)

    async def run(self, shutdown):
        """
        Run until `shutdown` fires.

        The signal is checked before every tick; a cycle already underway completes
        normally and no new cycle starts once the signal has been observed.
        """
        interval = self.config.poll_interval.total_seconds()
        tick = self.config.tick.total_seconds()
        self.state = RUNNING
        self._cycle_started = self.clock()
        log_message(
            f"Watcher started: {len(self.config.store_codes)} store(s) every {self.config.poll_interval}",
            "info"
        )
        try:
            while not shutdown.is_set():
                if self.clock() - self._cycle_started >= interval:
                    await self._scheduled_cycle()
                    self._cycle_started = self.clock()
                await shutdown.wait(tick)
            log_message("Watcher received signal to stop", "info")
        except asyncio.CancelledError:
            log_message("Watcher task cancelled", "warning")
            raise
        finally:
            self.state = STOPPED
            self._cycle_started = None

    async def _scheduled_cycle(self):
        async with self._lock:
            try:
                outcome = await self.cycle.run()
            except Exception as e:
                log_message(f"Error in poll cycle: {e!r}", "error")
                return
        self.cycles_run += 1
        self.last_cycle_at = datetime.now(UTC)
        self.last_outcome = outcome

    async def check_now(self):
        """
        Run an on-demand cycle without notifying the channel and return its CycleOutcome.

        Waits for a scheduled cycle in progress; does not reset the scheduling timer.
        """
        async with self._lock:
            return await self.cycle.run(notify=False)

    def close(self):
        """Release the HTTP session."""
        self.cycle.client.close()
