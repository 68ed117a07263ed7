from datetime import datetime, timezone

import pytest

from orderbot.config import BotConfig
from orderbot.orders import LineItem, Location, Order, OrderStatus

ADMIN_ID = "1001"
CUSTOMER_ID = "2002"


def make_order(**overrides) -> Order:
    fields = dict(
        id=7,
        order_number="UZ123456",
        items=[
            LineItem(name="Plov", price=30000, quantity=2, size="large"),
            LineItem(name="Choy", price=5000, quantity=1),
        ],
        total_amount=65000,
        delivery_address="Tashkent, Amir Temur 1",
        phone="+998901234567",
        payment_method="cash",
        status=OrderStatus.ACCEPTED,
        created_at=datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc),
        updated_at=datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc),
        customer_chat_id=CUSTOMER_ID,
        customer_name="Aziz",
    )
    fields.update(overrides)
    return Order(**fields)


@pytest.fixture
def order():
    return make_order()


@pytest.fixture
def geo_order():
    return make_order(location=Location(41.3111, 69.2797))


@pytest.fixture
def config():
    return BotConfig(
        BOT_TOKEN="123:abc",
        ADMIN_TELEGRAM_ID=ADMIN_ID,
        WEBAPP_URL="",
        TELEGRAM_API_BASE="https://api.telegram.test",
        DEFAULT_LANGUAGE="ru",
        POLL_TIMEOUT_SECONDS=1,
        POLL_RETRY_DELAY_SECONDS=0.01,
        REDIS_URL="",
        ORDERS_TABLE="",
        BOT_MODE="polling",
    )
