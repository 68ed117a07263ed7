"""
Keyboard builders.

Inline keyboards carry action-control payloads; the reply keyboard is the
customer's persistent menu.
"""

from typing import Any, Dict, List, Optional

from orderbot.orders.state_machine import NextAction, next_actions
from orderbot.payloads import encode_language_payload, encode_status_payload
from orderbot.rendering.templates import bot_templates, supported_languages


def action_buttons(order_id: int, actions: List[NextAction]) -> List[List[Dict[str, str]]]:
    """One button per row, in next-action order (forward first, cancel second)."""
    return [
        [{"text": action.label, "callback_data": encode_status_payload(order_id, action.target.value)}]
        for action in actions
    ]


def status_keyboard(order_id: int, status) -> Optional[Dict[str, Any]]:
    """
    Inline keyboard for the operator control message.

    Returns:
        {"inline_keyboard": [...]} for a non-terminal status, None for a terminal one
    """
    buttons = action_buttons(order_id, next_actions(status))
    return {"inline_keyboard": buttons} if buttons else None


def language_keyboard() -> Dict[str, Any]:
    return {
        "inline_keyboard": [
            [{"text": f"{meta['flag']} {meta['label']}", "callback_data": encode_language_payload(code)}]
            for code, meta in supported_languages().items()
        ]
    }


def main_keyboard(language: str, webapp_url: str = "") -> Dict[str, Any]:
    """Persistent reply keyboard: menu (web app when configured) and change-language."""
    texts = bot_templates(language)
    menu_button: Dict[str, Any] = {"text": texts["menu_button"]}
    if webapp_url:
        menu_button["web_app"] = {"url": webapp_url}
    return {
        "keyboard": [[menu_button], [{"text": texts["lang_button"]}]],
        "resize_keyboard": True,
        "one_time_keyboard": False,
    }
