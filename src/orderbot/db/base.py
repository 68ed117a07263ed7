"""
Order store contract.

The order store is an external collaborator; the bot consumes it only through
this narrow read/write surface, keyed by numeric id and unique order number.
"""

from datetime import datetime
from typing import Optional

from orderbot.orders.models import Order, OrderStatus


class OrderStore:
    """Read/write contract every order store implements."""

    def create(self, order: Order) -> Order:
        """Persist a new order, assign its numeric id and return the stored order."""
        raise NotImplementedError

    def find_by_id(self, order_id: int) -> Optional[Order]:
        raise NotImplementedError

    def find_by_order_number(self, order_number: str) -> Optional[Order]:
        raise NotImplementedError

    def update_status(
        self,
        order_id: int,
        status: OrderStatus,
        expected_status: Optional[OrderStatus] = None,
        updated_at: Optional[datetime] = None,
    ) -> bool:
        """
        Write a new status.

        When expected_status is given the write is a compare-and-swap: it only
        happens if the stored status still equals expected_status.

        Returns:
            True if the order exists and was updated, False otherwise
        """
        raise NotImplementedError
