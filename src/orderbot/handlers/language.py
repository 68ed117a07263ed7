"""Change-language action handler (`set_lang_<code>` presses)."""

import logging

from orderbot.clients.telegram_client import TelegramClient
from orderbot.config import BotConfig
from orderbot.errors import ChannelError
from orderbot.events import ActionEvent
from orderbot.payloads import LanguageChangePayload
from orderbot.rendering import main_keyboard
from orderbot.rendering.templates import bot_templates, is_supported_language
from orderbot.session import SessionStore

logger = logging.getLogger(__name__)


class LanguageHandler:
    def __init__(self, config: BotConfig, client: TelegramClient, sessions: SessionStore):
        self.config = config
        self.client = client
        self.sessions = sessions

    def handle(self, event: ActionEvent, payload: LanguageChangePayload) -> bool:
        """
        Switch the conversation's language and confirm in the new language.

        The press is acknowledged before the confirmation is sent.

        Returns:
            True if the language was changed
        """
        if not is_supported_language(payload.language):
            logger.warning(f"Unsupported language {payload.language!r} requested by chat {event.chat_id}")
            self._acknowledge(event)
            return False

        self.sessions.set_language(event.chat_id, payload.language)

        self._acknowledge(event)

        language = self.sessions.get_language(event.chat_id)
        try:
            self.client.send_message(
                event.chat_id,
                bot_templates(language)["lang_changed"],
                reply_markup=main_keyboard(language, self.config.WEBAPP_URL),
                parse_mode=None,
            )
        except ChannelError as e:
            logger.error(f"Failed to confirm language change for chat {event.chat_id}: {e}")
        return True

    def _acknowledge(self, event: ActionEvent) -> None:
        try:
            self.client.answer_callback(event.callback_id)
        except ChannelError as e:
            logger.error(f"Failed to acknowledge language press for chat {event.chat_id}: {e}")
