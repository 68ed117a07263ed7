"""
In-memory order store.

Process-lifetime storage used for local runs and tests. Thread-safe: the
ingestion loop, the dispatch worker and the webhook surface may touch it
from different threads.
"""

import itertools
import threading
from dataclasses import replace
from datetime import datetime
from typing import Dict, Optional

from orderbot.db.base import OrderStore
from orderbot.orders.models import Order, OrderStatus, now_utc


class InMemoryOrderStore(OrderStore):
    def __init__(self):
        self._orders: Dict[int, Order] = {}
        self._by_number: Dict[str, int] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def create(self, order: Order) -> Order:
        with self._lock:
            if order.order_number in self._by_number:
                raise ValueError(f"Order number already exists: {order.order_number}")
            stored = replace(order, id=next(self._ids))
            self._orders[stored.id] = stored
            self._by_number[stored.order_number] = stored.id
            return stored

    def find_by_id(self, order_id: int) -> Optional[Order]:
        with self._lock:
            return self._orders.get(order_id)

    def find_by_order_number(self, order_number: str) -> Optional[Order]:
        with self._lock:
            order_id = self._by_number.get(order_number)
            return self._orders.get(order_id) if order_id is not None else None

    def update_status(
        self,
        order_id: int,
        status: OrderStatus,
        expected_status: Optional[OrderStatus] = None,
        updated_at: Optional[datetime] = None,
    ) -> bool:
        with self._lock:
            current = self._orders.get(order_id)
            if current is None:
                return False
            if expected_status is not None and current.status != expected_status:
                return False
            self._orders[order_id] = replace(
                current, status=status, updated_at=updated_at or now_utc()
            )
            return True
