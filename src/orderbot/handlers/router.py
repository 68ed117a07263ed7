"""
Update Router

Routes each inbound event to exactly one handler. Shared by the polling loop
and the webhook endpoint.
"""

import logging
from typing import Any, Dict

from orderbot.events import ActionEvent, IgnoredEvent, InboundEvent, MessageEvent, parse_update
from orderbot.handlers.language import LanguageHandler
from orderbot.handlers.messages import MessageHandler
from orderbot.handlers.status import StatusChangeHandler
from orderbot.payloads import LanguageChangePayload, StatusChangePayload, parse_payload

logger = logging.getLogger(__name__)


class UpdateRouter:
    def __init__(
        self,
        language_handler: LanguageHandler,
        status_handler: StatusChangeHandler,
        message_handler: MessageHandler,
    ):
        self.language_handler = language_handler
        self.status_handler = status_handler
        self.message_handler = message_handler

    def handle_update(self, update: Dict[str, Any]) -> None:
        """Parse a raw update and route it."""
        self.route(parse_update(update))

    def route(self, event: InboundEvent) -> None:
        if isinstance(event, ActionEvent):
            payload = parse_payload(event.data)
            if isinstance(payload, LanguageChangePayload):
                self.language_handler.handle(event, payload)
            elif isinstance(payload, StatusChangePayload):
                self.status_handler.handle(event, payload)
            else:
                logger.debug(f"Ignoring unknown callback data {event.data!r}")
        elif isinstance(event, MessageEvent):
            self.message_handler.handle(event)
        elif isinstance(event, IgnoredEvent):
            logger.debug(f"Ignoring update {event.update_id}: {event.reason}")
        else:
            raise TypeError(f"Unhandled event type: {type(event).__name__}")
