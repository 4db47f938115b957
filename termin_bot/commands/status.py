"""
Module: termin_bot/commands/status.py

Defines `/termin status` to show the watcher state, configured stores, and the summary of
the last scheduled poll cycle.
"""
import nextcord
from termin_bot.bot_context import watcher, termin_group
from termin_bot.utils import log_message
from termin_bot.watcher.formatter import store_display_name
from termin_bot.watcher.manager import RUNNING


@termin_group.subcommand(name="status", description="Show the appointment watcher status")
async def watcher_status(interaction: nextcord.Interaction):
    """
    Show state, stores, interval, cycles run, and the outcome of the last scheduled cycle.
    """
    config = watcher.config
    stores = "\n".join(
        f"`{code}` {store_display_name(code, config.store_names)}" for code in config.store_codes
    )

    embed = nextcord.Embed(
        title="Appointment Watcher",
        description=f"Polling every **{config.poll_interval}**",
        color=nextcord.Color.green() if watcher.state == RUNNING else nextcord.Color.red()
    )
    embed.add_field(name="State", value=watcher.state.capitalize(), inline=True)
    embed.add_field(name="Cycles run", value=str(watcher.cycles_run), inline=True)

    remaining = watcher.seconds_until_next_cycle()
    if remaining is not None:
        embed.add_field(name="Next cycle", value=f"in {int(remaining)}s", inline=True)

    embed.add_field(name="Stores", value=stores, inline=False)

    outcome = watcher.last_outcome
    if outcome is None:
        embed.add_field(name="Last cycle", value="No cycle completed yet", inline=False)
    else:
        summary = [
            f"Finished {watcher.last_cycle_at.strftime('%Y-%m-%d %H:%M:%S UTC')}",
            "Free timeslots found" if outcome.has_availability else "No free timeslots",
        ]
        if outcome.has_availability:
            summary.append("Notification sent" if outcome.notified else "Notification failed")
        if outcome.failed_stores:
            summary.append("Failed lookups: " + ", ".join(outcome.failed_stores))
        embed.add_field(name="Last cycle", value="\n".join(summary), inline=False)

    log_message(
        f"User {interaction.user.name} ({interaction.user.id}) opened /termin status",
        "info"
    )
    await interaction.response.send_message(embed=embed, ephemeral=True)
