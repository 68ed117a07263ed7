"""
Order stores.

OrderStore is the contract; InMemoryOrderStore and the DynamoDB-backed OrderDB
implement it.
"""

from orderbot.db.base import OrderStore
from orderbot.db.memory import InMemoryOrderStore
from orderbot.db.order import OrderDB

__all__ = ["OrderStore", "InMemoryOrderStore", "OrderDB"]
