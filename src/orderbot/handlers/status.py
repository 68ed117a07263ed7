"""
Status-change action handler.

Handles `setstatus:<orderId>:<targetStatus>` presses from the operator.

Flow:
1. Authorize: only the configured operator may change statuses
2. Validate the payload (non-empty numeric order id, recognized status)
3. Look up the order
4. Apply the transition through the state machine
5. Persist with a compare-and-swap on the previous status
6. Acknowledge the press
7. Reconcile the originating control message in place
8. Notify the customer (best effort)

Any failure in steps 1-5 is acknowledged to the operator as an alert and
leaves the order untouched.
"""

import logging
from typing import Optional

from orderbot.clients.telegram_client import TelegramClient
from orderbot.config import BotConfig
from orderbot.db.base import OrderStore
from orderbot.errors import (
    ChannelError,
    InvalidRequest,
    InvalidTransition,
    NotFound,
    OrderBotError,
    Unauthorized,
)
from orderbot.events import ActionEvent
from orderbot.notifications import MessageReconciler, NotificationDispatcher
from orderbot.orders import Order, OrderStatus, apply_transition
from orderbot.payloads import StatusChangePayload
from orderbot.rendering import status_label

logger = logging.getLogger(__name__)

GENERIC_FAILURE_NOTICE = OrderBotError.notice


class StatusChangeHandler:
    def __init__(
        self,
        config: BotConfig,
        store: OrderStore,
        client: TelegramClient,
        reconciler: MessageReconciler,
        dispatcher: NotificationDispatcher,
    ):
        self.config = config
        self.store = store
        self.client = client
        self.reconciler = reconciler
        self.dispatcher = dispatcher

    def change_status(self, chat_id: str, payload: StatusChangePayload) -> Order:
        """
        Validate and persist a status change.

        Returns:
            The updated order

        Raises:
            Unauthorized: chat_id is not the operator (checked before any lookup)
            InvalidRequest: Missing/non-numeric order id or unrecognized status
            NotFound: No order with that id
            InvalidTransition: Target not reachable, or the order changed concurrently
        """
        if not self.config.is_operator(chat_id):
            raise Unauthorized(f"Chat {chat_id} is not the operator")

        target = OrderStatus.parse(payload.target_status)
        try:
            order_id = int(payload.order_id)
        except (TypeError, ValueError):
            order_id = 0
        if order_id <= 0 or target is None:
            raise InvalidRequest(
                f"Invalid status payload: order_id={payload.order_id!r} status={payload.target_status!r}"
            )

        order = self.store.find_by_id(order_id)
        if order is None:
            raise NotFound(f"Order {order_id} not found")

        updated = apply_transition(order, target)

        if not self.store.update_status(
            order.id,
            updated.status,
            expected_status=order.status,
            updated_at=updated.updated_at,
        ):
            raise InvalidTransition(
                order.status.value,
                target.value,
                f"Order {order_id} changed while updating to {target.value}",
            )
        return updated

    def handle(self, event: ActionEvent, payload: StatusChangePayload) -> Optional[Order]:
        """
        Process one status-change press end to end.

        Returns:
            The updated order, or None if the change was rejected
        """
        try:
            order = self.change_status(event.chat_id, payload)
        except (Unauthorized, InvalidRequest, NotFound, InvalidTransition) as e:
            logger.warning(f"Status change rejected for chat {event.chat_id}: {e}")
            self._answer(event.callback_id, e.notice, show_alert=True)
            return None
        except Exception as e:
            logger.error(f"Status update error: {e}", exc_info=True)
            self._answer(event.callback_id, GENERIC_FAILURE_NOTICE, show_alert=True)
            return None

        self._answer(event.callback_id, f"#{order.order_number}: {status_label(order.status)}")
        self.reconciler.reconcile(event.chat_id, event.message_id, order, order.status)
        if order.customer_chat_id:
            self.dispatcher.dispatch_status_change_to_customer(order, order.status)

        logger.info(f"Order #{order.order_number} -> \"{order.status.value}\" by admin")
        return order

    def _answer(self, callback_id: str, text: str, show_alert: bool = False) -> None:
        try:
            self.client.answer_callback(callback_id, text=text, show_alert=show_alert)
        except ChannelError as e:
            logger.error(f"Failed to acknowledge callback {callback_id}: {e}")
