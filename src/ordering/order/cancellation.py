"""Order cancellation — command and handler.

Cancelling flips the order to ``Cancelled`` and returns every item's quantity
to stock, both inside the same unit of work.
"""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.inventory.ledger import InventoryLedger
from ordering.order.access import assert_can_access
from ordering.order.order import Order

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Order")
class CancelOrder:
    order_id = Identifier(required=True)
    requester_id = Identifier(required=True)
    requester_role = String(required=True, max_length=20)


def cancel_and_release(order, requester_id, requester_role):
    """Cancel ``order`` and release its stock. Must run inside a unit of work."""
    assert_can_access(order, requester_id, requester_role)

    order.cancel(cancelled_by="customer" if order.is_owned_by(requester_id) else "admin")
    InventoryLedger().release_all(order.stock_lines())
    current_domain.repository_for(Order).add(order)

    logger.info(
        "order_cancelled",
        order_id=str(order.id),
        cancelled_by=order.cancelled_by,
        lines=len(order.items),
    )
    return order


@ordering.command_handler(part_of=Order)
class CancelOrderHandler:
    @handle(CancelOrder)
    def cancel_order(self, command):
        order = current_domain.repository_for(Order).get(command.order_id)
        cancel_and_release(order, command.requester_id, command.requester_role)
        return str(order.id)
