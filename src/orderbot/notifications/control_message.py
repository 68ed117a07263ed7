from dataclasses import dataclass

from orderbot.orders.models import OrderStatus


@dataclass(frozen=True)
class ControlMessage:
    """The single live operator message through which an order is advanced."""
    chat_id: str
    message_id: int
    order_id: int
    status: OrderStatus
