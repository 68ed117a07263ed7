"""
Order-creation trigger.

The order-submission flow calls notify_order_created() right after it stores
a new order. Both notifications are queued on the dispatch worker, so the
caller's response never waits on the messaging channel.
"""

import logging
from typing import Optional

from orderbot.notifications.dispatcher import NotificationDispatcher
from orderbot.notifications.worker import DispatchWorker
from orderbot.orders.models import Order

logger = logging.getLogger(__name__)


def notify_order_created(
    order: Order,
    dispatcher: NotificationDispatcher,
    worker: DispatchWorker,
    language: Optional[str] = None,
) -> bool:
    """
    Queue the operator alert and the customer confirmation for a new order.

    A retried submission queues a second confirmation; duplicates are not
    suppressed here.

    Returns:
        True if both jobs were queued
    """
    operator_queued = worker.submit(dispatcher.dispatch_new_order, order)
    customer_queued = worker.submit(dispatcher.dispatch_customer_confirmation, order, language)
    if not (operator_queued and customer_queued):
        logger.warning(f"Notifications for order #{order.order_number} were only partially queued")
    return operator_queued and customer_queued
