"""
Package: termin_bot/watcher

Provides SourceClient, PollCycle, WatcherScheduler, ChannelNotifier, and ShutdownSignal.
"""
from .client import SourceClient, Timeslot
from .formatter import format_poll_result
from .notifier import ChannelNotifier
from .shutdown import ShutdownSignal
from .task import PollCycle, CycleOutcome
from .manager import WatcherScheduler
