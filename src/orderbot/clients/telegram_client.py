"""
Telegram Channel Client

Thin wrapper over the Bot API send/edit/answer/receive primitives.
Every call is a single request/response exchange; nothing is retried here.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from orderbot.clients.base_client import BaseClient
from orderbot.config import BotConfig
from orderbot.errors import ChannelSendFailure, ChannelUnavailable

logger = logging.getLogger(__name__)

NOT_MODIFIED = "message is not modified"

# Extra seconds on top of the long-poll wait before the HTTP read gives up
LONG_POLL_GRACE_SECONDS = 10.0


class TelegramClient(BaseClient):
    """HTTP client for the Telegram Bot API."""

    def __init__(self, config: BotConfig, transport: Optional[httpx.BaseTransport] = None):
        """
        Initialize Telegram client.

        Args:
            config: Bot configuration (token, API base, request timeout)
            transport: Optional httpx transport override
        """
        super().__init__(
            base_url=config.api_url,
            timeout=config.REQUEST_TIMEOUT_SECONDS,
            transport=transport,
        )
        self.config = config

    @property
    def enabled(self) -> bool:
        return self.config.is_bot_configured()

    def send_message(
        self,
        chat_id,
        text: str,
        reply_markup: Optional[Dict[str, Any]] = None,
        parse_mode: Optional[str] = "Markdown",
    ) -> Optional[int]:
        """
        Send a text message.

        Returns:
            The new message id, or None when the bot is not configured

        Raises:
            ChannelSendFailure: If the Bot API call fails
        """
        if not self.enabled:
            return None
        payload: Dict[str, Any] = {"chat_id": chat_id, "text": text}
        if parse_mode:
            payload["parse_mode"] = parse_mode
        if reply_markup is not None:
            payload["reply_markup"] = reply_markup
        result = self._call("sendMessage", payload)
        return (result or {}).get("message_id")

    def edit_message(
        self,
        chat_id,
        message_id: int,
        text: str,
        reply_markup: Optional[Dict[str, Any]] = None,
        parse_mode: Optional[str] = "Markdown",
    ) -> None:
        """
        Edit an existing message's text and inline keyboard in place.

        Editing to identical content is a no-op rather than an error.

        Raises:
            ChannelSendFailure: If the Bot API call fails for any other reason
        """
        if not self.enabled:
            return
        payload: Dict[str, Any] = {
            "chat_id": chat_id,
            "message_id": message_id,
            "text": text,
            "reply_markup": reply_markup if reply_markup is not None else {"inline_keyboard": []},
        }
        if parse_mode:
            payload["parse_mode"] = parse_mode
        try:
            self._call("editMessageText", payload)
        except ChannelSendFailure as e:
            if NOT_MODIFIED in (e.description or "").lower():
                logger.debug(f"Message {message_id} in chat {chat_id} already up to date")
                return
            raise

    def answer_callback(
        self,
        callback_query_id: str,
        text: Optional[str] = None,
        show_alert: bool = False,
    ) -> None:
        """Acknowledge an inline button press, optionally with a toast or alert."""
        if not self.enabled:
            return
        payload: Dict[str, Any] = {"callback_query_id": callback_query_id}
        if text:
            payload["text"] = text
        if show_alert:
            payload["show_alert"] = True
        self._call("answerCallbackQuery", payload)

    def send_location(self, chat_id, latitude: float, longitude: float) -> Optional[int]:
        if not self.enabled:
            return None
        result = self._call(
            "sendLocation",
            {"chat_id": chat_id, "latitude": latitude, "longitude": longitude},
        )
        return (result or {}).get("message_id")

    def get_updates(self, offset: int, timeout: int) -> List[Dict[str, Any]]:
        """
        Long-poll for inbound updates.

        Args:
            offset: Identifier of the first update to return (the delivery cursor)
            timeout: Seconds the server may hold the request open waiting for updates

        Returns:
            List of raw update objects (possibly empty)

        Raises:
            ChannelUnavailable: On connectivity failures or API errors
        """
        if not self.enabled:
            return []
        result = self._call(
            "getUpdates",
            {"offset": offset, "timeout": timeout, "allowed_updates": ["message", "callback_query"]},
            timeout=timeout + LONG_POLL_GRACE_SECONDS,
            error_cls=ChannelUnavailable,
        )
        return result or []

    def delete_webhook(self, drop_pending_updates: bool = False) -> None:
        if not self.enabled:
            return
        self._call(
            "deleteWebhook",
            {"drop_pending_updates": drop_pending_updates},
            error_cls=ChannelUnavailable,
        )
