"""
Polling Layer

Long-polling ingestion of inbound Telegram updates.
"""

from orderbot.polling.ingestion import UpdatePoller

__all__ = ["UpdatePoller"]
