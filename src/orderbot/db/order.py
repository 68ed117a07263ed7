"""
DynamoDB Table: orders

Primary Key (composite):
    - PK = ORDER#{id}
    - SK = ORDER#{id}

Attributes:
    - id, order_number, customer_chat_id, customer_name
    - items (snapshot of order items)
    - total_amount, status, payment_method
    - delivery_address, delivery_type, branch_id, phone, location
    - created_at, updated_at

Counter item (numeric id allocation):
    - PK = COUNTER#orders, SK = COUNTER#orders, attribute `seq`

GSIs:
    - GSI1_OrderNumber:
        PK = NUMBER#{order_number}
        SK = ORDER#{id}
"""

from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Optional

import boto3
from boto3.dynamodb.conditions import Key
from botocore.exceptions import ClientError

from orderbot.db.base import OrderStore
from orderbot.orders.models import Order, OrderStatus, now_utc

COUNTER_KEY = "COUNTER#orders"


def _to_dynamo(value: Any) -> Any:
    # DynamoDB rejects floats
    if isinstance(value, float):
        return Decimal(str(value))
    if isinstance(value, dict):
        return {k: _to_dynamo(v) for k, v in value.items() if v is not None}
    if isinstance(value, list):
        return [_to_dynamo(v) for v in value]
    return value


class OrderDB(OrderStore):
    def __init__(self, table_name="orders", region_name="eu-west-2"):
        self.table = boto3.resource("dynamodb", region_name=region_name).Table(table_name)

    # -------------------- Create --------------------

    def _next_id(self) -> int:
        resp = self.table.update_item(
            Key={"PK": COUNTER_KEY, "SK": COUNTER_KEY},
            UpdateExpression="ADD seq :one",
            ExpressionAttributeValues={":one": 1},
            ReturnValues="UPDATED_NEW",
        )
        return int(resp["Attributes"]["seq"])

    def create(self, order: Order) -> Order:
        if self.find_by_order_number(order.order_number) is not None:
            raise ValueError(f"Order number already exists: {order.order_number}")

        order_id = self._next_id()
        data = order.to_dict()
        data["id"] = order_id

        item = _to_dynamo(data)
        item.update({
            "PK": f"ORDER#{order_id}",
            "SK": f"ORDER#{order_id}",
            "entity": "ORDER",
            "GSI1PK": f"NUMBER#{order.order_number}",
            "GSI1SK": f"ORDER#{order_id}",
        })

        self.table.put_item(Item=item, ConditionExpression="attribute_not_exists(PK)")
        return Order.from_dict(data)

    # -------------------- Get --------------------

    def find_by_id(self, order_id: int) -> Optional[Order]:
        resp = self.table.get_item(
            Key={"PK": f"ORDER#{order_id}", "SK": f"ORDER#{order_id}"}
        )
        item = resp.get("Item")
        return _item_to_order(item) if item else None

    def find_by_order_number(self, order_number: str) -> Optional[Order]:
        resp = self.table.query(
            IndexName="GSI1_OrderNumber",
            KeyConditionExpression=Key("GSI1PK").eq(f"NUMBER#{order_number}"),
            Limit=1,
        )
        items = resp.get("Items", [])
        return _item_to_order(items[0]) if items else None

    # -------------------- Update --------------------

    def update_status(
        self,
        order_id: int,
        status: OrderStatus,
        expected_status: Optional[OrderStatus] = None,
        updated_at: Optional[datetime] = None,
    ) -> bool:
        timestamp = (updated_at or now_utc()).isoformat()
        condition = "attribute_exists(PK)"
        values: Dict[str, Any] = {":s": status.value, ":u": timestamp}
        if expected_status is not None:
            condition += " AND #s = :expected"
            values[":expected"] = expected_status.value

        try:
            resp = self.table.update_item(
                Key={"PK": f"ORDER#{order_id}", "SK": f"ORDER#{order_id}"},
                UpdateExpression="SET #s = :s, updated_at = :u",
                ConditionExpression=condition,
                ExpressionAttributeNames={"#s": "status"},
                ExpressionAttributeValues=values,
                ReturnValues="UPDATED_NEW",
            )
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") == "ConditionalCheckFailedException":
                return False
            raise
        return "Attributes" in resp


def _item_to_order(item: Dict[str, Any]) -> Order:
    data = {k: v for k, v in item.items() if k not in ("PK", "SK", "GSI1PK", "GSI1SK", "entity")}
    return Order.from_dict(data)
