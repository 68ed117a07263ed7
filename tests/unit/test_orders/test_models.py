import re
from decimal import Decimal
from unittest.mock import patch

from conftest import make_order
from orderbot.orders import LineItem, Location, Order, OrderStatus, generate_order_number


class TestOrderStatus:

    def test_parse_known(self):
        assert OrderStatus.parse("out_for_delivery") is OrderStatus.OUT_FOR_DELIVERY
        assert OrderStatus.parse(OrderStatus.COOKING) is OrderStatus.COOKING

    def test_parse_unknown(self):
        assert OrderStatus.parse("shipped") is None
        assert OrderStatus.parse(None) is None


class TestGenerateOrderNumber:

    def test_format(self):
        assert re.fullmatch(r"UZ\d{9}", generate_order_number())

    def test_uses_clock_suffix_and_random_digits(self):
        with patch("orderbot.orders.models.time.time", return_value=1714564800.5), \
                patch("orderbot.orders.models.random.randint", return_value=7):
            assert generate_order_number() == "UZ800500007"


class TestOrder:

    def test_line_total(self):
        assert LineItem(name="Plov", price=30000, quantity=2).line_total == 60000

    def test_pickup_and_terminal_flags(self):
        assert make_order(delivery_type="pickup").is_pickup
        assert not make_order().is_pickup
        assert make_order(status=OrderStatus.CANCELLED).is_terminal
        assert not make_order().is_terminal

    def test_from_dict_with_dynamo_numbers(self):
        """Decimal values coming back from DynamoDB become ints and floats"""
        data = make_order(location=Location(41.3, 69.2)).to_dict()
        data["total_amount"] = Decimal("65000")
        data["items"][0]["price"] = Decimal("30000")
        data["location"] = {"latitude": Decimal("41.3"), "longitude": Decimal("69.2")}

        order = Order.from_dict(data)

        assert order.total_amount == 65000
        assert order.items[0].price == 30000
        assert order.location == Location(41.3, 69.2)
        assert order.status is OrderStatus.ACCEPTED
        assert order.created_at == make_order().created_at

    def test_from_dict_composes_name_from_profile(self):
        data = make_order(customer_name=None).to_dict()
        data.update({"first_name": "Aziz", "last_name": "Karimov"})
        assert Order.from_dict(data).customer_name == "Aziz Karimov"

    def test_from_dict_first_name_only(self):
        data = make_order(customer_name=None).to_dict()
        data["first_name"] = "Aziz"
        assert Order.from_dict(data).customer_name == "Aziz"

    def test_from_dict_explicit_name_wins(self):
        data = make_order(customer_name="Dilnoza").to_dict()
        data.update({"first_name": "Aziz", "last_name": "Karimov"})
        assert Order.from_dict(data).customer_name == "Dilnoza"

    def test_from_dict_without_any_name(self):
        assert Order.from_dict(make_order(customer_name=None).to_dict()).customer_name is None

    def test_to_dict_uses_status_value(self):
        assert make_order(status=OrderStatus.COOKING).to_dict()["status"] == "cooking"
