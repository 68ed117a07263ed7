"""
Order domain model.

Orders are created by the (external) order-submission flow in status `accepted`
and mutated only through the state machine's apply_transition().
"""

import random
import time
from dataclasses import dataclass, field, asdict
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Optional


class OrderStatus(str, Enum):
    ACCEPTED = "accepted"
    PREPARING = "preparing"
    COOKING = "cooking"
    OUT_FOR_DELIVERY = "out_for_delivery"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"

    @classmethod
    def parse(cls, value: Any) -> Optional["OrderStatus"]:
        """Return the matching status, or None if value is not a recognized status."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value))
        except ValueError:
            return None


TERMINAL_STATUSES = frozenset([OrderStatus.DELIVERED, OrderStatus.CANCELLED])

PAYMENT_METHODS = ("click", "payme", "cash")

DELIVERY = "delivery"
PICKUP = "pickup"


def now_utc() -> datetime:
    return datetime.now(timezone.utc)


def generate_order_number() -> str:
    """Human-readable order number: UZ + last 6 digits of epoch millis + 3 random digits."""
    timestamp = str(int(time.time() * 1000))[-6:]
    suffix = str(random.randint(0, 999)).zfill(3)
    return f"UZ{timestamp}{suffix}"


def _as_int(value: Any) -> int:
    # DynamoDB hands numbers back as Decimal
    return int(Decimal(str(value)))


@dataclass(frozen=True)
class LineItem:
    name: str
    price: int
    quantity: int
    size: Optional[str] = None

    @property
    def line_total(self) -> int:
        return self.price * self.quantity

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LineItem":
        return cls(
            name=str(data.get("name", "")),
            price=_as_int(data.get("price", 0)),
            quantity=_as_int(data.get("quantity", 1)),
            size=data.get("size") or None,
        )


@dataclass(frozen=True)
class Location:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class Order:
    """
    One customer purchase.

    Attributes:
        id: Numeric store-assigned id (used in action-control payloads)
        order_number: Human-readable, unique, customer-facing number (e.g. "UZ123456789")
        items: Ordered line items
        total_amount: Order total in whole sums
        delivery_address: Delivery address, or the pickup branch for pickup orders
        phone: Contact phone
        payment_method: "click" | "payme" | "cash"
        delivery_type: "delivery" | "pickup"
        status: Current OrderStatus
        created_at / updated_at: UTC timestamps
        location: Optional delivery geolocation
        customer_chat_id: Customer's conversation identifier, if reachable
        customer_name: Display name for the operator message
        branch_id: Pickup branch reference
    """

    id: int
    order_number: str
    items: List[LineItem]
    total_amount: int
    delivery_address: str
    phone: str
    payment_method: str
    delivery_type: str = DELIVERY
    status: OrderStatus = OrderStatus.ACCEPTED
    created_at: datetime = field(default_factory=now_utc)
    updated_at: datetime = field(default_factory=now_utc)
    location: Optional[Location] = None
    customer_chat_id: Optional[str] = None
    customer_name: Optional[str] = None
    branch_id: Optional[str] = None

    @property
    def is_pickup(self) -> bool:
        return self.delivery_type == PICKUP

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["status"] = self.status.value
        data["created_at"] = self.created_at.isoformat()
        data["updated_at"] = self.updated_at.isoformat()
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Order":
        status = OrderStatus.parse(data.get("status", OrderStatus.ACCEPTED.value))
        if status is None:
            raise ValueError(f"Unknown order status: {data.get('status')!r}")

        location = data.get("location")
        if isinstance(location, dict) and location.get("latitude") is not None \
                and location.get("longitude") is not None:
            location = Location(float(location["latitude"]), float(location["longitude"]))
        else:
            location = None

        customer_chat_id = data.get("customer_chat_id")
        return cls(
            id=_as_int(data["id"]),
            order_number=str(data["order_number"]),
            items=[
                item if isinstance(item, LineItem) else LineItem.from_dict(item)
                for item in data.get("items", [])
            ],
            total_amount=_as_int(data.get("total_amount", 0)),
            delivery_address=str(data.get("delivery_address", "")),
            phone=str(data.get("phone", "")),
            payment_method=str(data.get("payment_method", "")),
            delivery_type=data.get("delivery_type") or DELIVERY,
            status=status,
            created_at=_parse_timestamp(data.get("created_at")),
            updated_at=_parse_timestamp(data.get("updated_at")),
            location=location,
            customer_chat_id=str(customer_chat_id) if customer_chat_id else None,
            customer_name=_customer_name(data),
            branch_id=data.get("branch_id") or None,
        )


def _customer_name(data: Dict[str, Any]) -> Optional[str]:
    """Explicit name, else "first last" from the submitted profile fields."""
    explicit = (data.get("customer_name") or "").strip()
    if explicit:
        return explicit
    parts = [str(data.get(key) or "").strip() for key in ("first_name", "last_name")]
    return " ".join(part for part in parts if part) or None


def _parse_timestamp(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if not value:
        return now_utc()
    return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
