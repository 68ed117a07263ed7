"""
Notifications Layer

Outbound order notifications: dispatch to operator and customer, the bounded
dispatch worker, and in-place reconciliation of operator control messages.
"""

from orderbot.notifications.control_message import ControlMessage
from orderbot.notifications.dispatcher import NotificationDispatcher
from orderbot.notifications.order_events import notify_order_created
from orderbot.notifications.reconciler import MessageReconciler
from orderbot.notifications.worker import DispatchWorker

__all__ = [
    "ControlMessage",
    "NotificationDispatcher",
    "notify_order_created",
    "MessageReconciler",
    "DispatchWorker",
]
