"""
Update Handlers

Interpret inbound events: language changes, menu requests and order status
changes.
"""

from orderbot.handlers.language import LanguageHandler
from orderbot.handlers.messages import MessageHandler
from orderbot.handlers.status import StatusChangeHandler
from orderbot.handlers.router import UpdateRouter

__all__ = ["LanguageHandler", "MessageHandler", "StatusChangeHandler", "UpdateRouter"]
