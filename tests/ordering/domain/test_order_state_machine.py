"""Tests for the order status state machine."""

import pytest
from ordering.exceptions import InvalidTransitionError
from ordering.order.status import (
    INITIAL_STATUS,
    TERMINAL_STATES,
    OrderStatus,
    assert_can_transition,
    can_cancel,
    can_transition,
    parse_status,
)
from protean.exceptions import ValidationError


class TestStatusValues:
    def test_initial_status_is_processing(self):
        assert INITIAL_STATUS == OrderStatus.PROCESSING

    def test_terminal_states(self):
        assert TERMINAL_STATES == {OrderStatus.DELIVERED, OrderStatus.CANCELLED}

    def test_parse_known_value(self):
        assert parse_status("In Transit") == OrderStatus.IN_TRANSIT

    def test_parse_enum_passthrough(self):
        assert parse_status(OrderStatus.SHIPPED) == OrderStatus.SHIPPED

    def test_parse_unknown_value(self):
        with pytest.raises(ValidationError) as exc:
            parse_status("Lost")
        assert "status" in exc.value.messages


class TestForwardProgression:
    @pytest.mark.parametrize(
        "current,target",
        [
            ("Processing", "Confirmed"),
            ("Confirmed", "Shipped"),
            ("Shipped", "In Transit"),
            ("In Transit", "Delivered"),
        ],
    )
    def test_next_stage_allowed(self, current, target):
        assert can_transition(current, target)

    def test_skipping_stages_allowed(self):
        assert can_transition("Processing", "Shipped")
        assert can_transition("Processing", "Delivered")

    def test_same_status_allowed_when_not_terminal(self):
        assert can_transition("Shipped", "Shipped")

    def test_assert_returns_target(self):
        assert assert_can_transition("Processing", "Confirmed") == OrderStatus.CONFIRMED


class TestCancellationGate:
    @pytest.mark.parametrize("current", ["Processing", "Confirmed", "In Transit"])
    def test_cancellable(self, current):
        assert can_cancel(current)
        assert can_transition(current, "Cancelled")

    @pytest.mark.parametrize("current", ["Shipped", "Delivered"])
    def test_not_cancellable_after_ship_or_delivery(self, current):
        assert not can_cancel(current)
        with pytest.raises(InvalidTransitionError):
            assert_can_transition(current, "Cancelled")

    def test_cancelled_cannot_be_cancelled_again(self):
        assert not can_cancel("Cancelled")


class TestTerminalStates:
    @pytest.mark.parametrize("target", ["Processing", "Confirmed", "Shipped", "In Transit"])
    def test_delivered_is_final(self, target):
        with pytest.raises(InvalidTransitionError):
            assert_can_transition("Delivered", target)

    @pytest.mark.parametrize("target", ["Processing", "Shipped", "Delivered"])
    def test_cancelled_is_final(self, target):
        with pytest.raises(InvalidTransitionError):
            assert_can_transition("Cancelled", target)

    def test_invalid_transition_carries_states(self):
        with pytest.raises(InvalidTransitionError) as exc:
            assert_can_transition("Delivered", "Shipped")
        assert exc.value.current == "Delivered"
        assert exc.value.target == "Shipped"
        assert "status" in exc.value.messages
