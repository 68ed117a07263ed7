"""
Conversation-message handler.

Recognizes a small fixed vocabulary and replies with a canned prompt:
- /start: welcome text plus the main keyboard
- the "change language" button label (any language): language picker
- the "menu" button label (any language) when no storefront URL is
  configured: a configuration warning

Button labels are matched across all languages so a keyboard sent before a
language switch keeps working. Anything else is ignored.
"""

import logging
from typing import Set

from orderbot.clients.telegram_client import TelegramClient
from orderbot.config import BotConfig
from orderbot.errors import ChannelError
from orderbot.events import MessageEvent
from orderbot.rendering import language_keyboard, main_keyboard
from orderbot.rendering.templates import bot_templates, bot_text, interpolate, supported_languages
from orderbot.session import SessionStore

logger = logging.getLogger(__name__)

START_COMMAND = "/start"


def _labels(key: str) -> Set[str]:
    return {bot_templates(code)[key] for code in supported_languages()}


class MessageHandler:
    def __init__(self, config: BotConfig, client: TelegramClient, sessions: SessionStore):
        self.config = config
        self.client = client
        self.sessions = sessions

    def handle(self, event: MessageEvent) -> bool:
        """
        Reply to a recognized message.

        Returns:
            True if the text was recognized and a reply was attempted
        """
        text = (event.text or "").strip()
        language = self.sessions.get_language(event.chat_id)
        texts = bot_templates(language)

        if text == START_COMMAND or text.startswith(START_COMMAND + " "):
            self._reply(
                event.chat_id,
                interpolate(texts["welcome"], {"name": event.first_name}),
                main_keyboard(language, self.config.WEBAPP_URL),
            )
            return True

        if text in _labels("lang_button"):
            self._reply(event.chat_id, texts["choose_lang"], language_keyboard())
            return True

        if text in _labels("menu_button"):
            if self.config.WEBAPP_URL:
                # the web-app button opens the storefront client-side
                return False
            self._reply(event.chat_id, bot_text("webapp_missing"))
            return True

        return False

    def _reply(self, chat_id: str, text: str, reply_markup=None) -> None:
        try:
            self.client.send_message(chat_id, text, reply_markup=reply_markup, parse_mode=None)
        except ChannelError as e:
            logger.error(f"Failed to reply to chat {chat_id}: {e}")
