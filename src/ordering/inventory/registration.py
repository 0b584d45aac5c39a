"""Catalog synchronization — register products and receive stock."""

import json

from protean import handle
from protean.fields import Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.inventory.product import Product


@ordering.command(part_of="Product")
class RegisterProduct:
    product_id = Identifier()
    name = String(required=True, max_length=200)
    price = Float(required=True, min_value=0.0)
    stock = Integer(min_value=0, default=0)
    image = String(max_length=500)
    sizes = Text()  # JSON: list of size codes
    colors = Text()  # JSON: list of color names


@ordering.command(part_of="Product")
class ReceiveStock:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)


@ordering.command_handler(part_of=Product)
class CatalogSyncHandler:
    @handle(RegisterProduct)
    def register_product(self, command):
        product = Product.register(
            product_id=command.product_id,
            name=command.name,
            price=command.price,
            stock=command.stock or 0,
            image=command.image,
            sizes=json.loads(command.sizes) if command.sizes else [],
            colors=json.loads(command.colors) if command.colors else [],
        )
        current_domain.repository_for(Product).add(product)
        return str(product.id)

    @handle(ReceiveStock)
    def receive_stock(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.receive(command.quantity)
        repo.add(product)
        return product.stock
