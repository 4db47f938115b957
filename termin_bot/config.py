"""
Module: termin_bot/config.py

Loads bot and watcher settings from the environment (and an optional .env file),
validates them, and builds the configuration records consumed by the watcher.
"""
import os
from datetime import timedelta
from dotenv import load_dotenv
from termin_bot.errors import ConfigError
from termin_bot.utils import parse_interval, interval_to_timedelta, LEVELS

DEFAULT_STORE_CODES = ("0885", "0103")

STORE_NAMES = {
    "0885": "Bonn city center",
    "0103": "Bonn Kölnstraße",
}

DEFAULT_USER_AGENT = "Mozilla/5.0 (X11; Linux x86_64; rv:128.0) Gecko/20100101 Firefox/128.0"

DEFAULT_COOKIE = (
    "OptanonConsent=isGpcEnabled=0&datestamp=Fri+Aug+02+2024+22%3A57%3A12+GMT%2B0200+"
    "(Central+European+Summer+Time)&version=202401.1.0&browserGpcFlag=1&isIABGlobal=false"
    "&hosts=&genVendors=&consentId=682341bf-8f7d-41fa-9d4e-ee1d7ffae4dd&interactionCount=1"
    "&landingPath=NotLandingPage&groups=C0001%3A1%2CC0002%3A1%2CC0004%3A1;"
)


class RequestProfile:
    """
    Static request identity sent with every availability lookup.

    Attributes:
        user_agent (str): User-Agent header value.
        referer (str): Referer header value.
        cookie (str or None): Cookie header value; omitted when empty.
        extra_headers (dict): Any further fixed headers.
    """
    def __init__(self, user_agent=DEFAULT_USER_AGENT, referer=None, cookie=DEFAULT_COOKIE, extra_headers=None):
        self.user_agent = user_agent
        self.referer = referer
        self.cookie = cookie
        self.extra_headers = dict(extra_headers or {})

    @classmethod
    def browser(cls, host, service, user_agent=DEFAULT_USER_AGENT, cookie=DEFAULT_COOKIE):
        """Header set of a desktop Firefox session on the booking site."""
        return cls(
            user_agent=user_agent,
            referer=f"https://{host}/find-branch?service={service}",
            cookie=cookie,
            extra_headers={
                "Accept": "application/json, text/plain, */*",
                "Accept-Language": "en-US,en;q=0.5",
                "Accept-Encoding": "gzip, deflate, br, zstd",
                "DNT": "1",
                "Connection": "keep-alive",
                "Sec-Fetch-Dest": "empty",
                "Sec-Fetch-Mode": "cors",
                "Sec-Fetch-Site": "same-origin",
                "Sec-GPC": "1",
                "TE": "trailers",
            },
        )

    def headers(self):
        """Return the full header mapping, including User-Agent, Referer and Cookie."""
        headers = dict(self.extra_headers)
        headers["User-Agent"] = self.user_agent
        if self.referer:
            headers["Referer"] = self.referer
        if self.cookie:
            headers["Cookie"] = self.cookie
        return headers


class WatcherConfig:
    """
    Everything the appointment watcher needs, supplied at construction.

    Attributes:
        channel_id (int): Discord channel receiving availability notifications.
        store_codes (tuple[str]): Stores queried every cycle, in order.
        store_names (dict): Store code to display name lookup.
        poll_interval (timedelta): Time between the end of one cycle and the start of the next.
        tick (timedelta): Granularity of the shutdown check.
        request_timeout (timedelta): Timeout applied to every upstream request.
        host (str): Upstream API host.
        branch_prefix (str): Prefix joined to the store code in the branch id.
        service (str): Appointment service code.
        profile (RequestProfile): Static request headers.
    """
    def __init__(
        self,
        channel_id,
        store_codes=DEFAULT_STORE_CODES,
        store_names=None,
        poll_interval=timedelta(seconds=60),
        tick=timedelta(seconds=1),
        request_timeout=timedelta(seconds=15),
        host="termine.fielmann.de",
        branch_prefix="001",
        service="CL_CF",
        profile=None
    ):
        if not store_codes:
            raise ConfigError("At least one store code is required")
        if poll_interval <= timedelta(0) or tick <= timedelta(0):
            raise ConfigError("Poll interval and tick must be positive")
        self.channel_id = channel_id
        self.store_codes = tuple(store_codes)
        self.store_names = dict(STORE_NAMES if store_names is None else store_names)
        self.poll_interval = poll_interval
        self.tick = tick
        self.request_timeout = request_timeout
        self.host = host
        self.branch_prefix = branch_prefix
        self.service = service
        self.profile = profile or RequestProfile.browser(host, service)


class BotSettings:
    """
    Process-level settings: Discord credentials, command scope, and the watcher config.
    """
    def __init__(self, token, watcher, guild_ids=(), log_level="info"):
        self.token = token
        self.watcher = watcher
        self.guild_ids = list(guild_ids)
        self.guild_mode = bool(self.guild_ids)
        self.log_level = log_level


def _interval(env, name, default):
    raw = env.get(name) or default
    delta = interval_to_timedelta(*parse_interval(raw))
    if delta is None:
        raise ConfigError(f"Invalid `{name}` value: {raw!r} (expected e.g. '30s', '1min', '2h')")
    return delta


def load_config(environ=None):
    """
    Build BotSettings from environment variables.

    When environ is None, variables from a .env file are loaded first and os.environ is read.
    Raises ConfigError when a required variable is missing or a value does not parse.
    """
    if environ is None:
        load_dotenv()
        environ = os.environ

    token = environ.get("DISCORD_BOT_TOKEN")
    if not token:
        raise ConfigError("Missing `DISCORD_BOT_TOKEN` env var")

    raw_channel = (environ.get("NOTIFICATION_CHANNEL_ID") or "").strip()
    if not raw_channel:
        raise ConfigError("Missing `NOTIFICATION_CHANNEL_ID` env var")
    if not raw_channel.isdigit():
        raise ConfigError(f"`NOTIFICATION_CHANNEL_ID` must be numeric, got {raw_channel!r}")

    raw_guilds = environ.get("GUILD_IDS", "")
    guild_ids = [int(gid.strip()) for gid in raw_guilds.split(",") if gid.strip().isdigit()]

    raw_stores = environ.get("STORE_CODES")
    if raw_stores is None:
        store_codes = DEFAULT_STORE_CODES
    else:
        store_codes = tuple(code.strip() for code in raw_stores.split(",") if code.strip())

    log_level = (environ.get("LOG_LEVEL") or "info").lower()
    if log_level not in LEVELS:
        raise ConfigError(f"Invalid `LOG_LEVEL` value: {log_level!r}")

    host = environ.get("FIELMANN_HOST") or "termine.fielmann.de"
    service = environ.get("FIELMANN_SERVICE") or "CL_CF"
    profile = RequestProfile.browser(
        host,
        service,
        user_agent=environ.get("FIELMANN_USER_AGENT") or DEFAULT_USER_AGENT,
        cookie=environ.get("FIELMANN_COOKIE", DEFAULT_COOKIE)
    )

    watcher = WatcherConfig(
        channel_id=int(raw_channel),
        store_codes=store_codes,
        poll_interval=_interval(environ, "POLL_INTERVAL", "60s"),
        request_timeout=_interval(environ, "REQUEST_TIMEOUT", "15s"),
        host=host,
        branch_prefix=environ.get("FIELMANN_BRANCH_PREFIX") or "001",
        service=service,
        profile=profile
    )
    return BotSettings(token, watcher, guild_ids=guild_ids, log_level=log_level)
