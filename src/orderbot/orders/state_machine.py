"""
Order State Machine

Pure transition-validation and next-action logic over an order's status.

    accepted -> preparing -> cooking -> out_for_delivery -> delivered
    (any non-terminal status) -> cancelled

Every non-terminal status offers exactly one forward step plus cancellation,
in that order. delivered and cancelled are terminal.

Constraints:
- No I/O, no logging, no clock reads other than the default timestamp
- apply_transition() is the only sanctioned way to change an order's status
"""

from dataclasses import replace
from datetime import datetime
from typing import Dict, List, NamedTuple, Optional, Union

from orderbot.errors import InvalidTransition
from orderbot.orders.models import Order, OrderStatus, TERMINAL_STATUSES, now_utc

StatusLike = Union[OrderStatus, str]


class NextAction(NamedTuple):
    label: str
    target: OrderStatus


# Forward edge of the happy path
FORWARD: Dict[OrderStatus, OrderStatus] = {
    OrderStatus.ACCEPTED: OrderStatus.PREPARING,
    OrderStatus.PREPARING: OrderStatus.COOKING,
    OrderStatus.COOKING: OrderStatus.OUT_FOR_DELIVERY,
    OrderStatus.OUT_FOR_DELIVERY: OrderStatus.DELIVERED,
}

# Operator-facing button label for each forward step, keyed by source status
FORWARD_LABELS: Dict[OrderStatus, str] = {
    OrderStatus.ACCEPTED: "👨‍🍳 Начать готовить",
    OrderStatus.PREPARING: "🔥 Готово, упаковываем",
    OrderStatus.COOKING: "🚗 Передать курьеру",
    OrderStatus.OUT_FOR_DELIVERY: "✅ Заказ доставлен!",
}

CANCEL_LABEL = "❌ Отменить заказ"


def next_actions(status: StatusLike) -> List[NextAction]:
    """
    Return the actions available from a status.

    Args:
        status: Current status (enum or its string value)

    Returns:
        [forward, cancel] for a non-terminal status, [] for a terminal or
        unrecognized status.
    """
    current = OrderStatus.parse(status)
    if current is None or current in TERMINAL_STATUSES:
        return []
    return [
        NextAction(FORWARD_LABELS[current], FORWARD[current]),
        NextAction(CANCEL_LABEL, OrderStatus.CANCELLED),
    ]


def is_valid_transition(from_status: StatusLike, to_status: StatusLike) -> bool:
    """True iff to_status is one of next_actions(from_status)."""
    target = OrderStatus.parse(to_status)
    if target is None:
        return False
    return any(action.target == target for action in next_actions(from_status))


def apply_transition(order: Order, to_status: StatusLike, now: Optional[datetime] = None) -> Order:
    """
    Move an order to a new status.

    Args:
        order: Order in its current status
        to_status: Target status
        now: Timestamp to record as updated_at (defaults to current UTC time)

    Returns:
        A new Order with status and updated_at changed; every other field is
        carried over untouched.

    Raises:
        InvalidTransition: If to_status is not reachable from order.status
    """
    if not is_valid_transition(order.status, to_status):
        from_value = order.status.value if isinstance(order.status, OrderStatus) else str(order.status)
        to_value = to_status.value if isinstance(to_status, OrderStatus) else str(to_status)
        raise InvalidTransition(from_value, to_value)

    return replace(
        order,
        status=OrderStatus.parse(to_status),
        updated_at=now or now_utc(),
    )
