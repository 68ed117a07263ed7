"""
Customer Renderer

Customer-facing copy: the one-time order confirmation and per-status updates,
each keyed by the customer's language. Customer messages never carry actions.
"""

from typing import Optional

from orderbot.orders.models import Order, OrderStatus
from orderbot.rendering.formatting import escape_markdown, format_amount
from orderbot.rendering.templates import customer_templates, interpolate


def render_customer_confirmation(order: Order, language: str) -> str:
    """Summary sent once, right after the order is created."""
    templates = customer_templates(language)
    items = "\n".join(
        interpolate(templates["item_line"], {
            "name": escape_markdown(item.name),
            "quantity": item.quantity,
        })
        for item in order.items
    )
    payment_labels = templates["payment_labels"]
    return interpolate(templates["confirmation"], {
        "order_number": order.order_number,
        "items": items,
        "total": format_amount(order.total_amount),
        "currency": templates["currency"],
        "address_label": templates["pickup_label"] if order.is_pickup else templates["address_label"],
        "address": escape_markdown(order.delivery_address),
        "payment": escape_markdown(payment_labels.get(order.payment_method, order.payment_method)),
    })


def render_customer_status_update(status, order_number: str, language: str) -> Optional[str]:
    """
    Status-change text for the customer.

    Returns:
        None for `accepted` (the confirmation already covers it) and for
        unrecognized statuses; the templated text otherwise.
    """
    parsed = OrderStatus.parse(status)
    if parsed is None or parsed == OrderStatus.ACCEPTED:
        return None
    template = customer_templates(language)["status"].get(parsed.value)
    if not template:
        return None
    return interpolate(template, {"order_number": order_number})
