"""
Rendering Layer

Converts orders and statuses into Telegram messages (text + keyboards).

Constraints:
- Must not call the channel or the order store
- Operator and customer copy come from separate template sets
"""

from orderbot.rendering.operator_renderer import (
    OperatorMessage,
    render_operator_message,
    status_line,
    status_label,
)
from orderbot.rendering.customer_renderer import (
    render_customer_confirmation,
    render_customer_status_update,
)
from orderbot.rendering.keyboards import status_keyboard, language_keyboard, main_keyboard

__all__ = [
    "OperatorMessage",
    "render_operator_message",
    "status_line",
    "status_label",
    "render_customer_confirmation",
    "render_customer_status_update",
    "status_keyboard",
    "language_keyboard",
    "main_keyboard",
]
