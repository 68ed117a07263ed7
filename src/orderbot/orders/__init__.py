"""
Orders Layer

Order domain model and the order lifecycle state machine.
"""

from orderbot.orders.models import (
    Order,
    LineItem,
    Location,
    OrderStatus,
    TERMINAL_STATUSES,
    generate_order_number,
)
from orderbot.orders.state_machine import (
    NextAction,
    next_actions,
    is_valid_transition,
    apply_transition,
)

__all__ = [
    "Order",
    "LineItem",
    "Location",
    "OrderStatus",
    "TERMINAL_STATUSES",
    "generate_order_number",
    "NextAction",
    "next_actions",
    "is_valid_transition",
    "apply_transition",
]
