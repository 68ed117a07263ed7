from datetime import datetime, timezone

import pytest

from conftest import make_order
from orderbot.errors import InvalidTransition
from orderbot.orders import OrderStatus, apply_transition, is_valid_transition, next_actions
from orderbot.orders.state_machine import CANCEL_LABEL, FORWARD

NON_TERMINAL = [
    OrderStatus.ACCEPTED,
    OrderStatus.PREPARING,
    OrderStatus.COOKING,
    OrderStatus.OUT_FOR_DELIVERY,
]
TERMINAL = [OrderStatus.DELIVERED, OrderStatus.CANCELLED]


class TestNextActions:

    @pytest.mark.parametrize("status", NON_TERMINAL)
    def test_forward_then_cancel(self, status):
        """Every non-terminal status offers exactly forward first, cancel second"""
        actions = next_actions(status)
        assert len(actions) == 2
        assert actions[0].target == FORWARD[status]
        assert actions[1].target == OrderStatus.CANCELLED
        assert actions[1].label == CANCEL_LABEL

    @pytest.mark.parametrize("status", TERMINAL)
    def test_terminal_has_no_actions(self, status):
        assert next_actions(status) == []

    def test_accepts_string_values(self):
        assert next_actions("cooking")[0].target == OrderStatus.OUT_FOR_DELIVERY

    def test_unknown_status_has_no_actions(self):
        assert next_actions("teleported") == []

    def test_happy_path_reaches_delivered(self):
        """Following the forward action from accepted walks the whole lifecycle"""
        path = [OrderStatus.ACCEPTED]
        while next_actions(path[-1]):
            path.append(next_actions(path[-1])[0].target)
        assert path == [
            OrderStatus.ACCEPTED,
            OrderStatus.PREPARING,
            OrderStatus.COOKING,
            OrderStatus.OUT_FOR_DELIVERY,
            OrderStatus.DELIVERED,
        ]


class TestIsValidTransition:

    def test_exhaustive_matches_next_actions(self):
        """is_valid_transition agrees with next_actions for every status pair"""
        for source in OrderStatus:
            targets = {action.target for action in next_actions(source)}
            for target in OrderStatus:
                assert is_valid_transition(source, target) == (target in targets)

    def test_no_skipping(self):
        assert not is_valid_transition(OrderStatus.ACCEPTED, OrderStatus.DELIVERED)
        assert not is_valid_transition(OrderStatus.PREPARING, OrderStatus.OUT_FOR_DELIVERY)

    def test_no_backward(self):
        assert not is_valid_transition(OrderStatus.COOKING, OrderStatus.PREPARING)

    def test_no_self_transition(self):
        assert not is_valid_transition(OrderStatus.PREPARING, OrderStatus.PREPARING)

    def test_unknown_target(self):
        assert not is_valid_transition(OrderStatus.ACCEPTED, "bogus")


class TestApplyTransition:

    def test_changes_only_status_and_timestamp(self):
        order = make_order()
        now = datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc)

        updated = apply_transition(order, OrderStatus.PREPARING, now=now)

        assert updated.status == OrderStatus.PREPARING
        assert updated.updated_at == now
        assert updated.id == order.id
        assert updated.order_number == order.order_number
        assert updated.items == order.items
        assert updated.total_amount == order.total_amount
        assert updated.created_at == order.created_at
        # Input is left untouched
        assert order.status == OrderStatus.ACCEPTED

    def test_accepts_string_target(self):
        updated = apply_transition(make_order(), "cancelled")
        assert updated.status is OrderStatus.CANCELLED

    @pytest.mark.parametrize("status", TERMINAL)
    def test_terminal_is_final(self, status):
        """No status change is accepted once an order is delivered or cancelled"""
        order = make_order(status=status)
        for target in OrderStatus:
            with pytest.raises(InvalidTransition):
                apply_transition(order, target)

    def test_invalid_transition_carries_statuses(self):
        with pytest.raises(InvalidTransition) as exc_info:
            apply_transition(make_order(), OrderStatus.DELIVERED)
        assert exc_info.value.from_status == "accepted"
        assert exc_info.value.to_status == "delivered"
