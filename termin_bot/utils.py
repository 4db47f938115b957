"""
Module: termin_bot/utils.py

Provides utility functions for logging and parsing intervals.
"""
import inspect, os, re
from datetime import datetime, timedelta, UTC
from colorama import init, Fore, Style

init(autoreset=True)

LEVELS = {
    "debug": 10,
    "info": 20,
    "warning": 30,
    "error": 40
}

_min_level = LEVELS["info"]


def set_log_level(level):
    """
    Set the minimum level printed by log_message.

    Unknown level names raise ValueError so a typo in LOG_LEVEL surfaces at startup.
    """
    global _min_level
    try:
        _min_level = LEVELS[level.lower()]
    except KeyError:
        raise ValueError(f"Unknown log level: {level}") from None


def log_message(message, level="info"):
    """
    Print a timestamped, colored log message with the caller's relative source path.

    Parameters:
    - message: The log message string.
    - level: One of "info", "debug", "warning", or "error" for coloring.
    """
    if LEVELS.get(level.lower(), LEVELS["info"]) < _min_level:
        return

    frame    = inspect.currentframe().f_back
    fullpath = frame.f_code.co_filename
    cwd      = os.getcwd()
    if fullpath.startswith(cwd + os.sep):
        filename = fullpath[len(cwd)+1:]
    else:
        filename = os.path.basename(fullpath)
    lineno   = frame.f_lineno

    timestamp = f"[{datetime.now(UTC).strftime('%Y-%m-%d %H:%M:%S')}]"
    color_map = {
        "info": Fore.GREEN,
        "debug": Fore.BLUE,
        "warning": Fore.YELLOW,
        "error": Fore.RED
    }
    level_prefix = f"{level.upper():<7}"
    level_color = color_map.get(level.lower(), Fore.WHITE)

    prefix = f"[{timestamp}] {filename}({lineno}):"
    print(f"{prefix} {level_color}{level_prefix} {message}{Style.RESET_ALL}", flush=True)


def parse_interval(interval_str):
    """
    Parse an interval string into a (value, unit) tuple.

    Supported formats: digits + unit, where unit is one of
    s, m, h, optionally with suffixes like "sec", "min", "hours".

    Returns (int(value), str(unit)) if valid, otherwise (None, None).
    """
    pattern = r'^(\d+)\s*([smh])(?:ec(?:ond)?|in(?:ute)?|our)?s?$'
    match = re.match(pattern, interval_str.strip(), re.IGNORECASE)
    if not match:
        return None, None
    return int(match.group(1)), match.group(2).lower()


def interval_to_timedelta(value, unit):
    """
    Convert an interval value and unit into a timedelta.

    Supported units:
      s - seconds
      m - minutes
      h - hours

    Returns a datetime.timedelta or None if the inputs are missing, not positive,
    or the unit is invalid.
    """
    if value is None or unit is None or value <= 0:
        return None

    delta_map = {
        's': timedelta(seconds=value),
        'm': timedelta(minutes=value),
        'h': timedelta(hours=value)
    }
    return delta_map.get(unit)
