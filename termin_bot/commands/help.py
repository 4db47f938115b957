"""
Module: termin_bot/commands/help.py

Provides the `/termin help` slash command for displaying usage information
for the appointment watcher commands.
"""
import nextcord
from termin_bot.utils import log_message
from termin_bot.bot_context import watcher, termin_group


@termin_group.subcommand(name="help", description="Get help with the appointment watcher")
async def watcher_help(interaction: nextcord.Interaction):
    """
    Display the available commands and how the watcher decides to notify.
    """
    config = watcher.config
    embed = nextcord.Embed(
        title="📚 Appointment Watcher Help",
        description=(
            f"Every {config.poll_interval} all configured stores are checked for free "
            f"appointments. When at least one store has a free timeslot, a summary is posted "
            f"in <#{config.channel_id}>."
        ),
        color=nextcord.Color.green()
    )
    for name, value in [
        ("/termin status", "Watcher state, stores, and the outcome of the last check"),
        ("/termin check", "Check all stores right now; only you see the result"),
        ("/termin help", "Show this message")
    ]:
        embed.add_field(name=name, value=value, inline=False)

    log_message(
        f"User {interaction.user.name} ({interaction.user.id}) accessed help",
        "info"
    )
    await interaction.response.send_message(embed=embed, ephemeral=True)
