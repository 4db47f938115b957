"""
Module: termin_bot/main.py

Entry point for the appointment watcher bot.
Starts the Discord client, launches the watcher once the bot is ready, and translates
SIGINT/SIGTERM/SIGHUP into an orderly shutdown: watcher first, Discord connection last.
"""
import asyncio
import signal
import traceback

import nextcord

from termin_bot.utils import log_message
from termin_bot.bot_context import bot, settings, shutdown, watcher, termin_group

# Import command modules to register slash commands
import termin_bot.commands.status
import termin_bot.commands.check
import termin_bot.commands.help

watcher_task = None


@bot.event
async def on_ready():
    """
    Handler for the bot's ready event.

    Logs bot identity, syncs slash commands, and starts the watcher on first connect.
    """
    global watcher_task
    log_message(f"Logged in as {bot.user.name} ({bot.user.id})", "info")

    for guild_id in settings.guild_ids:
        try:
            synced = await bot.sync_application_commands(guild_id=guild_id)
            count = len(synced) if synced is not None else "all"
            log_message(f"Synced {count} commands to guild {guild_id}", "info")
        except nextcord.errors.Forbidden:
            log_message(f"Failed to sync commands for guild {guild_id}: Missing Access", "warning")
        except Exception as e:
            log_message(f"Error syncing commands for guild {guild_id}: {e}", "error")

    if watcher_task is None and not shutdown.is_set():
        watcher_task = asyncio.create_task(watcher.run(shutdown))


@bot.event
async def on_application_command_error(interaction, error):
    """
    Handler for errors during slash command execution.

    Logs the error and notifies the user of an internal failure.
    """
    log_message(f"Slash command error: {error}", "error")
    try:
        await interaction.response.send_message("❌ An internal error occurred.", ephemeral=True)
    except nextcord.DiscordException as e:
        log_message(f"Could not report command error: {e}", "warning")


@bot.event
async def on_error(event_method, *args, **kwargs):
    """
    Catch-all handler for unhandled errors in any event.
    """
    log_message(f"Unhandled error in event {event_method}: {traceback.format_exc()}", "error")


@bot.listen()
async def on_message(message: nextcord.Message):
    if message.author.bot:
        return
    log_message(f"Got a message event in #{getattr(message.channel, 'name', message.channel.id)}", "debug")


def describe_interaction(interaction):
    """
    Rebuild the `/termin ...` command line of a slash command interaction.

    Returns None for other interaction types and for commands outside the `/termin` group.
    """
    if interaction.type != nextcord.InteractionType.application_command:
        return None
    data = interaction.data or {}
    if data.get("name") != termin_group.name:
        return None
    cmd = f"/{data['name']}"
    for opt in data.get("options", []):
        cmd += f" {opt['name']}"
    return cmd


# Log raw `/termin` commands before they run
@bot.listen()
async def on_interaction(interaction: nextcord.Interaction):
    try:
        cmd = describe_interaction(interaction)
        if cmd is None:
            return
        log_message(
            f"Executing command {cmd} | Channel: {interaction.channel_id} | "
            f"User: {interaction.user.name} ({interaction.user.id})",
            "info"
        )
    except Exception as e:
        log_message(f"Error in on_interaction: {e}", "error")


@bot.event
async def on_application_command_completion(interaction: nextcord.Interaction):
    cmd = describe_interaction(interaction) or "command"
    log_message(f"Executed {cmd} in {interaction.channel_id}", "debug")


@bot.event
async def on_disconnect():
    log_message("Bot disconnected from Discord; watcher keeps polling.", "warning")


def _on_signal(sig):
    if shutdown.fire(sig.name):
        log_message(f"Received {sig.name}, shutting down...", "warning")


def install_signal_handlers(loop):
    """
    Route termination signals into the shutdown signal.

    Platforms without add_signal_handler (Windows) fall back to KeyboardInterrupt.
    """
    for name in ("SIGINT", "SIGTERM", "SIGHUP"):
        sig = getattr(signal, name, None)
        if sig is None:
            continue
        try:
            loop.add_signal_handler(sig, _on_signal, sig)
        except NotImplementedError:
            log_message(f"Cannot install handler for {name} on this platform", "debug")


async def serve():
    """
    Run the bot until a termination signal arrives or the connection ends for good.

    The watcher is stopped and its HTTP session closed before the Discord connection.
    """
    install_signal_handlers(asyncio.get_running_loop())
    bot.add_application_command(termin_group)

    bot_task = asyncio.create_task(bot.start(settings.token))
    shutdown_task = asyncio.create_task(shutdown.wait())
    await asyncio.wait({bot_task, shutdown_task}, return_when=asyncio.FIRST_COMPLETED)
    shutdown.fire("bot stopped")

    try:
        if watcher_task is not None:
            await watcher_task
    finally:
        watcher.close()
        if not bot.is_closed():
            await bot.close()
    await shutdown_task
    await bot_task
    log_message("Shutdown complete", "info")


def main():
    log_message("Bot is starting up...")
    try:
        asyncio.run(serve())
    except KeyboardInterrupt:
        log_message("Received CTRL-C, shutting down...", "warning")


if __name__ == "__main__":
    main()
