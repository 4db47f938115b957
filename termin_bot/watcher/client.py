"""
Module: termin_bot/watcher/client.py

Defines the Timeslot record and SourceClient, which queries the appointment API
for the next free timeslots of a single store.
"""
from dataclasses import dataclass
from typing import List

import requests

from termin_bot.errors import SourceError
from termin_bot.utils import log_message


@dataclass(frozen=True)
class Timeslot:
    date: str
    start: str
    end: str

    @classmethod
    def from_entry(cls, entry):
        """Decode one `{"date": ..., "timeslots": {"from": ..., "to": ...}}` entry."""
        slot = entry["timeslots"]
        return cls(date=entry["date"], start=slot["from"], end=slot["to"])


class SourceClient:
    """
    Blocking HTTP client for the free-timeslot endpoint.

    The request headers come from the config's RequestProfile and are installed on the
    session once; every call uses the configured timeout. One call per fetch, no caching.
    """
    def __init__(self, config, session=None):
        self.config = config
        self.session = session or requests.Session()
        self.session.headers.update(config.profile.headers())
        self.timeout = config.request_timeout.total_seconds()

    def url_for(self, store_code):
        return (
            f"https://{self.config.host}/api/v3/times/"
            f"{self.config.branch_prefix}-{store_code}/free/{self.config.service}/next"
        )

    def fetch(self, store_code) -> List[Timeslot]:
        """
        Return the next free timeslots for one store.

        An empty JSON array means no availability. Raises SourceError on transport
        failures, non-2xx statuses, and bodies that are not a list of timeslot entries.
        """
        url = self.url_for(store_code)
        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise SourceError(store_code, f"request failed: {e}") from e

        try:
            entries = response.json()
        except ValueError as e:
            raise SourceError(store_code, f"response is not JSON: {e}") from e
        if not isinstance(entries, list):
            raise SourceError(store_code, f"expected a list, got {type(entries).__name__}")

        try:
            timeslots = [Timeslot.from_entry(entry) for entry in entries]
        except (KeyError, TypeError) as e:
            raise SourceError(store_code, f"malformed timeslot entry: {e!r}") from e

        log_message(f"Store {store_code}: {len(timeslots)} free timeslot(s)", "debug")
        return timeslots

    def close(self):
        self.session.close()
