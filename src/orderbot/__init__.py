"""
Orderbot

Telegram order-notification bot: order lifecycle state machine, operator and
customer notifications, and inbound update handling.
"""

__version__ = "1.0.0"
