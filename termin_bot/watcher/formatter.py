"""
Module: termin_bot/watcher/formatter.py

Renders a poll result into the text posted to the notification channel.
"""
from typing import Dict, List, Mapping, Tuple

from termin_bot.watcher.client import Timeslot

PollResult = Dict[str, List[Timeslot]]

UNKNOWN_STORE = "Unknown"
NO_DATES = "No dates available"


def store_display_name(store_code, store_names: Mapping[str, str]) -> str:
    return store_names.get(store_code, UNKNOWN_STORE)


def format_poll_result(result: PollResult, store_names: Mapping[str, str]) -> Tuple[str, bool]:
    """
    Build the notification message for one cycle.

    Each store gets a `Store: <name>` header followed by either a `No dates available`
    line or one Date/From/To block per timeslot; every block ends with a blank line.

    Returns (message, has_availability), where has_availability is True iff at least
    one store reported a timeslot. Sending is left to the caller.
    """
    lines = []
    has_availability = False
    for store_code, timeslots in result.items():
        lines.append(f"Store: {store_display_name(store_code, store_names)}")
        if not timeslots:
            lines.extend([NO_DATES, ""])
            continue
        has_availability = True
        for slot in timeslots:
            lines.extend([
                f"Date: {slot.date}",
                f"From: {slot.start}",
                f"To: {slot.end}",
                ""
            ])
    message = "\n".join(lines) + "\n" if lines else ""
    return message, has_availability
