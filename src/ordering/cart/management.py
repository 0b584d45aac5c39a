"""Cart management — lazy creation and clearing.

Every customer has exactly one cart. It is opened on first access and
reused from then on.
"""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier
from protean.utils.globals import current_domain

from ordering.cart.cart import Cart
from ordering.domain import ordering

logger = structlog.get_logger(__name__)


def cart_for(customer_id, create=True) -> Cart:
    """Load the customer's cart, creating an unsaved one when ``create`` is set."""
    cart = current_domain.repository_for(Cart).for_customer(customer_id)
    if cart is None:
        if not create:
            raise ObjectNotFoundError("Cart not found")
        cart = Cart.create(customer_id=customer_id)
        logger.info("cart_opened", customer_id=str(customer_id), cart_id=str(cart.id))
    return cart


@ordering.command(part_of="Cart")
class OpenCart:
    """Return the customer's cart, creating it on first access."""

    customer_id = Identifier(required=True)


@ordering.command(part_of="Cart")
class ClearCart:
    customer_id = Identifier(required=True)


@ordering.command_handler(part_of=Cart)
class ManageCartHandler:
    @handle(OpenCart)
    def open_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.for_customer(command.customer_id)
        if cart is None:
            cart = cart_for(command.customer_id)
            repo.add(cart)
        return str(cart.id)

    @handle(ClearCart)
    def clear_cart(self, command):
        cart = cart_for(command.customer_id)
        removed = cart.clear()
        current_domain.repository_for(Cart).add(cart)
        logger.info("cart_cleared", customer_id=str(command.customer_id), items_removed=removed)
        return str(cart.id)
