"""Order payment — command and handler."""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.access import assert_can_access
from ordering.order.order import Order

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Order")
class MarkOrderPaid:
    order_id = Identifier(required=True)
    receipt_id = String(required=True, max_length=255)
    status = String(max_length=50)
    update_time = String(max_length=50)
    email_address = String(max_length=254)
    requester_id = Identifier(required=True)
    requester_role = String(required=True, max_length=20)


@ordering.command_handler(part_of=Order)
class OrderPaymentHandler:
    @handle(MarkOrderPaid)
    def mark_order_paid(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        assert_can_access(order, command.requester_id, command.requester_role)

        order.mark_paid(
            receipt_id=command.receipt_id,
            status=command.status,
            update_time=command.update_time,
            email_address=command.email_address,
        )
        repo.add(order)

        logger.info("order_paid", order_id=str(order.id), receipt_id=command.receipt_id)
        return str(order.id)
