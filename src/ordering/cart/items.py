"""Cart item management — commands and handler.

Every add or update is validated against the product's current stock via
the inventory ledger. The check is advisory: nothing is held until the order
is placed.
"""

from protean import handle
from protean.fields import Identifier, Integer, String
from protean.utils.globals import current_domain

from ordering.cart.cart import Cart
from ordering.cart.management import cart_for
from ordering.domain import ordering
from ordering.inventory.ledger import InventoryLedger


@ordering.command(part_of="Cart")
class AddToCart:
    customer_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(min_value=1, default=1)
    size = String(max_length=10)
    color = String(max_length=50)


@ordering.command(part_of="Cart")
class UpdateCartItem:
    customer_id = Identifier(required=True)
    item_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)


@ordering.command(part_of="Cart")
class RemoveFromCart:
    """Remove by cart item id, or every line of a product by product id."""

    customer_id = Identifier(required=True)
    item_id = Identifier(required=True)


@ordering.command_handler(part_of=Cart)
class ManageCartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        cart = cart_for(command.customer_id)
        already = cart.quantity_in_cart(command.product_id, command.size, command.color)
        product = InventoryLedger().reserve(command.product_id, already + command.quantity)

        item = cart.add_item(
            product_id=command.product_id,
            quantity=command.quantity,
            price=product.price,
            size=command.size,
            color=command.color,
        )
        current_domain.repository_for(Cart).add(cart)
        return str(item.id)

    @handle(UpdateCartItem)
    def update_cart_item(self, command):
        cart = cart_for(command.customer_id, create=False)
        item = cart.get_item(command.item_id)
        InventoryLedger().reserve(item.product_id, command.quantity)

        cart.update_item_quantity(item_id=command.item_id, quantity=command.quantity)
        current_domain.repository_for(Cart).add(cart)
        return str(item.id)

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        cart = cart_for(command.customer_id, create=False)
        removed = cart.remove_item(command.item_id)
        current_domain.repository_for(Cart).add(cart)
        return len(removed)
