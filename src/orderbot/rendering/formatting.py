"""Shared text formatting helpers for Telegram Markdown messages."""

from typing import Any

# Legacy Markdown entities Telegram parses in free text
_MARKDOWN_SPECIALS = ("_", "*", "`", "[")


def format_amount(amount: Any) -> str:
    """45000 -> '45 000' (space-grouped thousands, no decimals)."""
    return f"{int(amount):,}".replace(",", " ")


def escape_markdown(value: Any) -> str:
    """Escape user-supplied text so it cannot break Markdown parsing."""
    text = "" if value is None else str(value)
    for char in _MARKDOWN_SPECIALS:
        text = text.replace(char, f"\\{char}")
    return text
