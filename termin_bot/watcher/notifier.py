"""
Module: termin_bot/watcher/notifier.py

Delivers availability messages to the configured Discord text channel.
"""
import nextcord

from termin_bot.errors import NotifyError
from termin_bot.utils import log_message

MAX_MESSAGE_LENGTH = 2000


def _cut_block(block, limit):
    """
    Cut one oversized block on line breaks; a line longer than the limit is cut hard.
    """
    pieces = []
    current = ""
    for line in block.split("\n"):
        while len(line) > limit:
            if current:
                pieces.append(current)
                current = ""
            pieces.append(line[:limit])
            line = line[limit:]
        candidate = f"{current}\n{line}" if current else line
        if len(candidate) > limit:
            pieces.append(current)
            current = line
        else:
            current = candidate
    if current:
        pieces.append(current)
    return pieces


def split_message(message, limit=MAX_MESSAGE_LENGTH):
    """
    Split a message into chunks of at most `limit` characters.

    Chunks break between blank-line separated blocks. A block longer than the limit is
    sent on its own, cut on line breaks, and never shares a chunk with its neighbours.
    """
    chunks = []
    current = ""
    for block in message.split("\n\n"):
        if not block.strip():
            continue
        if len(block) > limit:
            if current:
                chunks.append(current)
                current = ""
            chunks.extend(_cut_block(block, limit))
            continue
        candidate = f"{current}\n\n{block}" if current else block
        if len(candidate) <= limit:
            current = candidate
        else:
            chunks.append(current)
            current = block
    if current:
        chunks.append(current)
    return chunks


class ChannelNotifier:
    """
    Sends text to one Discord channel through the bot's connection.

    Attributes:
        bot: The nextcord client used to resolve the channel.
        channel_id (int): Destination channel ID.
    """
    def __init__(self, bot, channel_id):
        self.bot = bot
        self.channel_id = channel_id

    async def _resolve_channel(self):
        channel = self.bot.get_channel(self.channel_id)
        if channel is not None:
            return channel
        try:
            return await self.bot.fetch_channel(self.channel_id)
        except nextcord.DiscordException as e:
            raise NotifyError(f"Channel {self.channel_id} is not reachable: {e}") from e

    async def send(self, message):
        """
        Post the message, split into as many Discord messages as needed.

        Raises NotifyError when the channel cannot be resolved or a send fails.
        """
        channel = await self._resolve_channel()
        for chunk in split_message(message):
            try:
                await channel.send(chunk)
            except nextcord.DiscordException as e:
                raise NotifyError(f"Sending to channel {self.channel_id} failed: {e}") from e

    async def notify(self, message):
        """
        Deliver the message and report success. Failures are logged, never raised.
        """
        try:
            await self.send(message)
        except NotifyError as e:
            log_message(f"Notification failed: {e}", "error")
            return False
        log_message(f"Sent availability notification to channel {self.channel_id}", "info")
        return True
