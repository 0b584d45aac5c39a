"""Repository for the Cart aggregate."""

from protean.exceptions import ExpectedVersionError, ObjectNotFoundError, ValidationError

from ordering.cart.cart import Cart, cart_id_for
from ordering.domain import ordering


@ordering.repository(part_of=Cart)
class CartRepository:
    def for_customer(self, customer_id) -> Cart | None:
        """The customer's cart, or ``None`` if they never opened one."""
        try:
            return self._dao.get(cart_id_for(customer_id))
        except ObjectNotFoundError:
            return None

    def add(self, cart):
        try:
            return super().add(cart)
        except ValidationError as exc:
            # A second new cart for the same customer hits the id uniqueness check
            if "id" in exc.messages:
                raise ExpectedVersionError(f"Cart for customer {cart.customer_id} was opened concurrently") from exc
            raise
