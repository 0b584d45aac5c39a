"""Domain events for the Product aggregate (inventory ledger)."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from ordering.domain import ordering


@ordering.event(part_of="Product")
class ProductRegistered:
    """A catalog product became known to the ledger with an opening stock."""

    __version__ = 1

    product_id = Identifier(required=True)
    name = String(required=True)
    price = Float(required=True)
    stock = Integer(required=True)
    registered_at = DateTime(required=True)


@ordering.event(part_of="Product")
class StockReceived:
    """Units were added to a product's stock by the catalog."""

    __version__ = 1

    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    previous_stock = Integer(required=True)
    new_stock = Integer(required=True)
    received_at = DateTime(required=True)


@ordering.event(part_of="Product")
class StockCommitted:
    """Units were taken out of stock by a placed order."""

    __version__ = 1

    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    previous_stock = Integer(required=True)
    new_stock = Integer(required=True)
    committed_at = DateTime(required=True)


@ordering.event(part_of="Product")
class StockReleased:
    """Units went back into stock after an order was cancelled."""

    __version__ = 1

    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    previous_stock = Integer(required=True)
    new_stock = Integer(required=True)
    released_at = DateTime(required=True)
