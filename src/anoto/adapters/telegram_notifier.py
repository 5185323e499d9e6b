"""Telegram notification adapter."""

import asyncio
import logging

import telegramify_markdown
from telegram import Bot
from telegram.error import TelegramError

logger = logging.getLogger(__name__)

MESSAGE_CHUNK = 4000


def format_reminder(title: str, body: str) -> list[str]:
    """Render a reminder as MarkdownV2 chunks that fit one Telegram message."""
    converted = telegramify_markdown.markdownify(f"**{title}**\n\n{body}")
    return [converted[i : i + MESSAGE_CHUNK] for i in range(0, len(converted), MESSAGE_CHUNK)]


class TelegramNotifier:
    """
    Telegram bot notifier.

    Implements Notifier protocol. Sends each reminder to every configured
    chat. Delivery is fire-and-forget: failures are logged and reported
    through the return value, never raised.
    """

    def __init__(self, token: str, chat_ids: list[int]):
        if not token:
            raise ValueError(
                "TELEGRAM_BOT_TOKEN not configured. "
                "Get a token from @BotFather on Telegram and add it to anoto.conf"
            )
        self.token = token
        self.chat_ids = list(chat_ids)

    def notify(self, title: str, body: str) -> bool:
        if not self.chat_ids:
            logger.warning("No TELEGRAM_CHAT_IDS configured - reminder not delivered")
            return False
        return asyncio.run(self._send(format_reminder(title, body)))

    async def _send(self, chunks: list[str]) -> bool:
        delivered = True
        async with Bot(self.token) as bot:
            for chat_id in self.chat_ids:
                try:
                    for chunk in chunks:
                        await bot.send_message(chat_id=chat_id, text=chunk, parse_mode="MarkdownV2")
                except TelegramError as e:
                    logger.error(f"Failed to send reminder to chat {chat_id}: {e}")
                    delivered = False
        return delivered
