"""
Inbound event model.

Raw Bot API updates are parsed once into a closed set of event types, and the
update router handles each type explicitly:

- ActionEvent: an actor pressed an inline control (callback_query)
- MessageEvent: an actor sent a text message
- IgnoredEvent: anything else (edited messages, stickers, malformed updates)
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Union


@dataclass(frozen=True)
class ActionEvent:
    update_id: int
    callback_id: str
    chat_id: str
    message_id: Optional[int]
    data: str
    from_id: Optional[str] = None


@dataclass(frozen=True)
class MessageEvent:
    update_id: int
    chat_id: str
    text: str
    first_name: str = ""


@dataclass(frozen=True)
class IgnoredEvent:
    update_id: Optional[int]
    reason: str


InboundEvent = Union[ActionEvent, MessageEvent, IgnoredEvent]


def parse_update(update: Dict[str, Any]) -> InboundEvent:
    """
    Classify a raw update.

    Args:
        update: Raw update object as returned by getUpdates or posted to the webhook

    Returns:
        ActionEvent, MessageEvent, or IgnoredEvent (never raises on malformed input)
    """
    update_id = update.get("update_id") if isinstance(update, dict) else None
    try:
        callback = update.get("callback_query")
        if callback:
            message = callback.get("message") or {}
            sender = callback.get("from") or {}
            # Inline-mode callbacks carry no message; fall back to the sender
            chat_id = (message.get("chat") or {}).get("id", sender.get("id"))
            if chat_id is None:
                return IgnoredEvent(update_id, "callback without chat")
            return ActionEvent(
                update_id=update_id,
                callback_id=str(callback["id"]),
                chat_id=str(chat_id),
                message_id=message.get("message_id"),
                data=callback.get("data") or "",
                from_id=str(sender["id"]) if sender.get("id") is not None else None,
            )

        message = update.get("message")
        if message:
            text = message.get("text")
            if text is None:
                return IgnoredEvent(update_id, "non-text message")
            return MessageEvent(
                update_id=update_id,
                chat_id=str(message["chat"]["id"]),
                text=text,
                first_name=(message.get("from") or {}).get("first_name", ""),
            )
    except (KeyError, TypeError, AttributeError) as e:
        return IgnoredEvent(update_id, f"malformed update: {e}")

    return IgnoredEvent(update_id, "unsupported update type")
