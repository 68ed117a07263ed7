"""
Notification Dispatcher

Sends order notifications to the two audiences:
- the operator: a control message with the first decision point (and a
  location marker for geolocated deliveries)
- the customer: a one-time confirmation, then one message per status change

Failure semantics: every outbound send failure is caught and logged here.
Dispatch never raises to its caller, and nothing is retried; a partial
failure (operator message sent, location marker lost) is accepted.
"""

import logging
from typing import Any, Callable, Optional

from orderbot.clients.telegram_client import TelegramClient
from orderbot.config import BotConfig
from orderbot.errors import ChannelError
from orderbot.notifications.control_message import ControlMessage
from orderbot.orders.models import Order, OrderStatus
from orderbot.rendering import (
    render_customer_confirmation,
    render_customer_status_update,
    render_operator_message,
)
from orderbot.session import SessionStore

logger = logging.getLogger(__name__)


class NotificationDispatcher:
    """Composes and sends operator and customer notifications."""

    def __init__(self, client: TelegramClient, config: BotConfig, sessions: SessionStore):
        self.client = client
        self.config = config
        self.sessions = sessions

    def _send(self, method: str, order_number: str, call: Callable[[], Any]) -> Optional[Any]:
        """Run one channel call; log and swallow any failure."""
        try:
            return call()
        except ChannelError as e:
            logger.error(f"{method} failed for order #{order_number}: {e}")
        except Exception as e:
            logger.error(
                f"Unexpected error during {method} for order #{order_number}: {e}",
                exc_info=True,
            )
        return None

    def dispatch_new_order(self, order: Order) -> Optional[ControlMessage]:
        """
        Alert the operator about a new order.

        Sends the operator message with first-step actions and, for a delivery
        with a geolocation, a companion location marker.

        Returns:
            The created ControlMessage, or None if the message was not sent
        """
        admin_id = self.config.ADMIN_TELEGRAM_ID
        if not admin_id:
            logger.warning(f"ADMIN_TELEGRAM_ID not set; operator not notified of #{order.order_number}")
            return None

        rendered = render_operator_message(order, OrderStatus.ACCEPTED)
        message_id = self._send(
            "sendMessage",
            order.order_number,
            lambda: self.client.send_message(admin_id, rendered.text, rendered.reply_markup),
        )

        if not order.is_pickup and order.location is not None:
            self._send(
                "sendLocation",
                order.order_number,
                lambda: self.client.send_location(
                    admin_id, order.location.latitude, order.location.longitude
                ),
            )

        if message_id is None:
            return None

        logger.info(f"Admin notification sent for order #{order.order_number}")
        return ControlMessage(
            chat_id=str(admin_id),
            message_id=message_id,
            order_id=order.id,
            status=OrderStatus.ACCEPTED,
        )

    def dispatch_customer_confirmation(self, order: Order, language: Optional[str] = None) -> bool:
        """
        Send the one-time order confirmation to the customer.

        Returns:
            True if the message was sent
        """
        if not order.customer_chat_id:
            logger.debug(f"Order #{order.order_number} has no customer chat; confirmation skipped")
            return False

        text = render_customer_confirmation(order, language or self.config.DEFAULT_LANGUAGE)
        sent = self._send(
            "sendMessage",
            order.order_number,
            lambda: self.client.send_message(order.customer_chat_id, text),
        )
        return sent is not None

    def dispatch_status_change_to_customer(self, order: Order, status) -> bool:
        """
        Tell the customer about a status change, in their selected language.

        Best effort: silently does nothing when the customer has no reachable
        conversation or the status has no customer message (accepted).

        Returns:
            True if a message was sent
        """
        if not order.customer_chat_id:
            return False

        language = self.sessions.get_language(order.customer_chat_id)
        text = render_customer_status_update(status, order.order_number, language)
        if not text:
            return False

        sent = self._send(
            "sendMessage",
            order.order_number,
            lambda: self.client.send_message(order.customer_chat_id, text),
        )
        if sent is None:
            return False

        status_value = status.value if isinstance(status, OrderStatus) else str(status)
        logger.info(
            f"Status \"{status_value}\" sent to user {order.customer_chat_id} "
            f"for order #{order.order_number}"
        )
        return True
