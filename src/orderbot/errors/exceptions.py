"""
Core Error Classes

Custom exceptions for orderbot.

Handler-boundary errors (InvalidTransition, Unauthorized, InvalidRequest, NotFound)
are recovered by the update handlers and surfaced to the operator as a failure
acknowledgment. Channel errors are recovered at the point of send and logged.
"""

from typing import Optional


class OrderBotError(Exception):
    """Base class for all orderbot errors."""

    notice = "❌ Ошибка при обновлении статуса"

    def __init__(self, message: str = "", notice: Optional[str] = None):
        super().__init__(message)
        if notice is not None:
            self.notice = notice


class InvalidTransition(OrderBotError):
    """Raised when a status change is not reachable from the current status."""

    notice = "❌ Недопустимая смена статуса"

    def __init__(self, from_status: str, to_status: str, message: Optional[str] = None):
        super().__init__(message or f"Invalid status transition: {from_status} -> {to_status}")
        self.from_status = from_status
        self.to_status = to_status


class Unauthorized(OrderBotError):
    """Raised when a non-operator conversation attempts a status change."""

    notice = "⛔ Только администратор может менять статус"


class InvalidRequest(OrderBotError):
    """Raised on a malformed action payload or an unrecognized status."""

    notice = "❌ Неверный статус или ID заказа"


class NotFound(OrderBotError):
    """Raised when a referenced order is absent from the store."""

    notice = "❌ Заказ не найден в базе данных"


class ChannelError(OrderBotError):
    """Raised when the messaging channel (Telegram Bot API) fails."""

    def __init__(self, method: str, message: str, description: Optional[str] = None):
        super().__init__(f"{method}: {message}")
        self.method = method
        self.description = description or message


class ChannelSendFailure(ChannelError):
    """Raised when an outbound send/edit/answer call fails."""
    pass


class ChannelUnavailable(ChannelError):
    """Raised when inbound updates cannot be retrieved (transient connectivity)."""
    pass
