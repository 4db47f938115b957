"""
Module: termin_bot/errors.py

Exception types raised by the watcher and its configuration loader.
"""


class WatcherError(Exception):
    """Base class for all errors raised by the appointment watcher."""


class SourceError(WatcherError):
    """
    A single store's availability lookup failed.

    Covers transport failures, non-2xx responses, and bodies that do not decode
    into timeslot records.
    """
    def __init__(self, store_code, reason):
        super().__init__(f"Store {store_code}: {reason}")
        self.store_code = store_code
        self.reason = reason


class NotifyError(WatcherError):
    """The notification message could not be delivered to the destination channel."""


class ConfigError(WatcherError, EnvironmentError):
    """Required configuration is missing or invalid at startup."""
