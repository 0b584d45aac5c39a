"""Order status state machine.

    Processing → Confirmed → Shipped → In Transit → Delivered
    Cancelled (from any state except Shipped and Delivered)

Any status in the enum may be assigned directly: stages can be skipped, and
an order may move back to an earlier fulfillment stage when an admin corrects
it. Delivered and Cancelled are terminal. Cancellation is blocked once the
order has shipped.
"""

from enum import Enum

from protean.exceptions import ValidationError

from ordering.exceptions import InvalidTransitionError


class OrderStatus(Enum):
    PROCESSING = "Processing"
    CONFIRMED = "Confirmed"
    SHIPPED = "Shipped"
    IN_TRANSIT = "In Transit"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"


INITIAL_STATUS = OrderStatus.PROCESSING

TERMINAL_STATES = frozenset({OrderStatus.DELIVERED, OrderStatus.CANCELLED})

# States from which cancellation is refused
_NON_CANCELLABLE_STATES = frozenset({OrderStatus.SHIPPED, OrderStatus.DELIVERED})


def parse_status(value) -> OrderStatus:
    """Coerce a status value to ``OrderStatus``; unknown values are rejected."""
    if isinstance(value, OrderStatus):
        return value
    try:
        return OrderStatus(value)
    except ValueError:
        allowed = ", ".join(s.value for s in OrderStatus)
        raise ValidationError({"status": [f"Invalid status '{value}'. Must be one of: {allowed}"]}) from None


def can_cancel(current) -> bool:
    current = parse_status(current)
    return current not in _NON_CANCELLABLE_STATES and current not in TERMINAL_STATES


def can_transition(current, target) -> bool:
    current, target = parse_status(current), parse_status(target)
    if current in TERMINAL_STATES:
        return False
    if target == OrderStatus.CANCELLED:
        return can_cancel(current)
    return True


def assert_can_transition(current, target) -> OrderStatus:
    """Validate a status change, returning the parsed target status."""
    current, target = parse_status(current), parse_status(target)
    if not can_transition(current, target):
        raise InvalidTransitionError(current.value, target.value)
    return target
