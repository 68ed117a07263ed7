"""
Channel Clients

Outbound clients for the external messaging platform.
"""

from orderbot.clients.base_client import BaseClient
from orderbot.clients.telegram_client import TelegramClient

__all__ = ["BaseClient", "TelegramClient"]
