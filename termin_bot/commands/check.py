"""
Module: termin_bot/commands/check.py

Defines `/termin check`, which polls every configured store right away and shows the
result to the invoking user only. The notification channel is not posted to and the
scheduled timer is left untouched.
"""
import nextcord
from termin_bot.bot_context import watcher, termin_group
from termin_bot.utils import log_message
from termin_bot.watcher.notifier import split_message


@termin_group.subcommand(name="check", description="Check all stores for free appointments now")
async def check_now(interaction: nextcord.Interaction):
    await interaction.response.send_message("⌛ Checking stores...", ephemeral=True)
    log_message(
        f"User {interaction.user.name} ({interaction.user.id}) requested an on-demand check",
        "info"
    )

    outcome = await watcher.check_now()

    text = outcome.message
    if outcome.failed_stores:
        text += "⚠️ Lookup failed for: " + ", ".join(outcome.failed_stores)
    chunks = split_message(text) or ["No stores configured."]
    await interaction.edit_original_message(content=chunks[0])
    for chunk in chunks[1:]:
        await interaction.followup.send(chunk, ephemeral=True)
