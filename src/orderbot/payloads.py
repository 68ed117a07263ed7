"""
Action-control payload encoding.

Inline buttons carry one of exactly two payload shapes:

    setstatus:<orderId>:<targetStatus>
    set_lang_<languageCode>

Telegram limits callback data to 64 bytes; both shapes stay well under it.
"""

from dataclasses import dataclass
from typing import Optional, Union

STATUS_PREFIX = "setstatus:"
LANGUAGE_PREFIX = "set_lang_"


@dataclass(frozen=True)
class StatusChangePayload:
    """Raw fields of a status-change press; validation happens in the handler."""
    order_id: str
    target_status: str


@dataclass(frozen=True)
class LanguageChangePayload:
    language: str


Payload = Union[StatusChangePayload, LanguageChangePayload]


def encode_status_payload(order_id: int, target_status: str) -> str:
    return f"{STATUS_PREFIX}{order_id}:{target_status}"


def encode_language_payload(language: str) -> str:
    return f"{LANGUAGE_PREFIX}{language}"


def parse_payload(data: Optional[str]) -> Optional[Payload]:
    """
    Parse callback data into a payload.

    Returns:
        StatusChangePayload / LanguageChangePayload, or None for any other shape.
        A status payload with missing parts yields empty fields so the handler
        can reject it as an invalid request.
    """
    if not data:
        return None
    if data.startswith(LANGUAGE_PREFIX):
        return LanguageChangePayload(language=data[len(LANGUAGE_PREFIX):])
    if data.startswith(STATUS_PREFIX):
        parts = data[len(STATUS_PREFIX):].split(":")
        order_id = parts[0] if len(parts) > 0 else ""
        target = parts[1] if len(parts) > 1 else ""
        return StatusChangePayload(order_id=order_id.strip(), target_status=target.strip())
    return None
