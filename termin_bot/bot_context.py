"""
Module: termin_bot/bot_context.py

Sets up the Discord bot, the appointment watcher, and the shutdown signal, and defines
the main slash command group `/termin`.
"""
import nextcord
from nextcord.ext import commands

from termin_bot.config import load_config
from termin_bot.errors import ConfigError
from termin_bot.utils import log_message, set_log_level
from termin_bot.watcher import ShutdownSignal, WatcherScheduler

try:
    settings = load_config()
except ConfigError as e:
    log_message(f"Invalid configuration: {e}", "error")
    raise

set_log_level(settings.log_level)

intents = nextcord.Intents.default()
bot = commands.Bot(intents=intents)
shutdown = ShutdownSignal()
watcher = WatcherScheduler.from_config(bot, settings.watcher)


@bot.slash_command(
    name="termin",
    description="Appointment watcher commands",
    guild_ids=settings.guild_ids if settings.guild_mode else None
)
async def termin_group(interaction: nextcord.Interaction):
    """
    Main command group for the appointment watcher.
    Subcommands: status, check, help.
    This command itself is not directly invoked.
    """
    pass
