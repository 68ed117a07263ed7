"""
Operator Renderer

Renders the operator control message for an order at a given status.

The output is a deterministic function of the order contents and the status:
rendering the same (order, status) twice yields identical text and keyboard,
which is what keeps in-place reconciliation idempotent.

Constraints:
- Operator copy only; customer templates are never used here
- No channel calls
"""

from typing import Any, Dict, List, NamedTuple, Optional

from orderbot.orders.models import Order, OrderStatus
from orderbot.orders.state_machine import NextAction, next_actions
from orderbot.rendering.formatting import escape_markdown, format_amount
from orderbot.rendering.keyboards import status_keyboard
from orderbot.rendering.templates import interpolate, operator_templates


class OperatorMessage(NamedTuple):
    text: str
    actions: List[NextAction]
    reply_markup: Optional[Dict[str, Any]]


def status_line(status) -> str:
    """'📋 Статус: Принят' style line; unknown statuses render as 'Статус: <value>'."""
    parsed = OrderStatus.parse(status)
    lines = operator_templates()["status_lines"]
    if parsed is None:
        return f"Статус: {status}"
    return lines[parsed.value]


def status_label(status) -> str:
    """Short label used in button-press acknowledgments."""
    parsed = OrderStatus.parse(status)
    labels = operator_templates()["status_labels"]
    if parsed is None:
        return str(status)
    return labels[parsed.value]


def _items_block(order: Order, templates: Dict[str, Any]) -> str:
    return "\n".join(
        interpolate(templates["item_line"], {
            "name": escape_markdown(item.name),
            "size": escape_markdown(item.size or templates["default_size"]),
            "quantity": item.quantity,
            "line_total": format_amount(item.line_total),
            "currency": templates["currency"],
        })
        for item in order.items
    )


def _heading_icon(status: OrderStatus, templates: Dict[str, Any]) -> str:
    icons = templates["icons"]
    return icons.get(status.value, icons["default"])


def render_operator_message(order: Order, status) -> OperatorMessage:
    """
    Render the operator-facing text and controls for an order.

    Args:
        order: The order being displayed
        status: Status to display (usually the order's new status)

    Returns:
        OperatorMessage with text, the next actions, and the inline keyboard
        (None when the status is terminal)
    """
    templates = operator_templates()
    parsed = OrderStatus.parse(status) or order.status
    pickup = order.is_pickup

    map_line = ""
    if not pickup and order.location is not None:
        map_line = interpolate(templates["map_line"], {
            "latitude": order.location.latitude,
            "longitude": order.location.longitude,
        })

    payment_labels = templates["payment_labels"]
    text = interpolate(templates["body"], {
        "icon": _heading_icon(parsed, templates),
        "heading": templates["heading_pickup"] if pickup else templates["heading_delivery"],
        "order_number": order.order_number,
        "separator": templates["separator"],
        "type_label": templates["type_pickup"] if pickup else templates["type_delivery"],
        "customer_name": escape_markdown(order.customer_name or templates["unknown_name"]),
        "phone": escape_markdown(order.phone),
        "address_label": templates["branch_label"] if pickup else templates["address_label"],
        "address": escape_markdown(order.delivery_address),
        "map_line": map_line,
        "items": _items_block(order, templates),
        "total": format_amount(order.total_amount),
        "currency": templates["currency"],
        "payment": escape_markdown(payment_labels.get(order.payment_method, order.payment_method)),
        "status_line": status_line(parsed),
    })

    return OperatorMessage(
        text=text,
        actions=next_actions(parsed),
        reply_markup=status_keyboard(order.id, parsed),
    )
