"""
Message Reconciler

Edits an existing operator control message in place so it shows the new
status and its next actions. A terminal status leaves the message with an
empty keyboard.

Reconciliation is idempotent: the rendered content is a pure function of
(order, status), the message is always edited and never re-sent, and the
channel client treats "message is not modified" as success.
"""

import logging
from typing import Optional

from orderbot.clients.telegram_client import TelegramClient
from orderbot.errors import ChannelError
from orderbot.notifications.control_message import ControlMessage
from orderbot.orders.models import Order, OrderStatus
from orderbot.rendering import render_operator_message

logger = logging.getLogger(__name__)


class MessageReconciler:
    def __init__(self, client: TelegramClient):
        self.client = client

    def reconcile(self, chat_id, message_id, order: Order, new_status) -> Optional[ControlMessage]:
        """
        Re-render the control message for new_status.

        Args:
            chat_id: Conversation holding the control message
            message_id: Id of the control message
            order: Order being displayed
            new_status: Status to display

        Returns:
            The reconciled ControlMessage, or None if nothing was edited
        """
        if not chat_id or not message_id:
            return None

        status = OrderStatus.parse(new_status) or order.status
        rendered = render_operator_message(order, status)
        try:
            self.client.edit_message(chat_id, message_id, rendered.text, rendered.reply_markup)
        except ChannelError as e:
            logger.error(
                f"Failed to reconcile control message {message_id} for order #{order.order_number}: {e}"
            )
            return None

        return ControlMessage(
            chat_id=str(chat_id),
            message_id=int(message_id),
            order_id=order.id,
            status=status,
        )
