"""Order fulfillment — admin status updates.

A request to move an order to ``Cancelled`` is routed through cancellation so
that the order's stock is released as well.
"""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.exceptions import ForbiddenError
from ordering.order.access import is_admin
from ordering.order.cancellation import cancel_and_release
from ordering.order.order import Order
from ordering.order.status import OrderStatus, parse_status

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Order")
class UpdateOrderStatus:
    order_id = Identifier(required=True)
    status = String(required=True, max_length=20)
    tracking_number = String(max_length=255)
    requester_id = Identifier(required=True)
    requester_role = String(required=True, max_length=20)


@ordering.command_handler(part_of=Order)
class OrderFulfillmentHandler:
    @handle(UpdateOrderStatus)
    def update_order_status(self, command):
        if not is_admin(command.requester_role):
            raise ForbiddenError("Admin access required")

        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        target = parse_status(command.status)

        if target == OrderStatus.CANCELLED:
            cancel_and_release(order, command.requester_id, command.requester_role)
            return order.status

        previous = order.status
        order.update_status(target.value, tracking_number=command.tracking_number)
        repo.add(order)

        logger.info(
            "order_status_changed",
            order_id=str(order.id),
            previous_status=previous,
            new_status=order.status,
        )
        return order.status
