"""
Error taxonomy for orderbot.
"""

from orderbot.errors.exceptions import (
    OrderBotError,
    InvalidTransition,
    Unauthorized,
    InvalidRequest,
    NotFound,
    ChannelError,
    ChannelSendFailure,
    ChannelUnavailable,
)

__all__ = [
    "OrderBotError",
    "InvalidTransition",
    "Unauthorized",
    "InvalidRequest",
    "NotFound",
    "ChannelError",
    "ChannelSendFailure",
    "ChannelUnavailable",
]
