"""Domain errors surfaced by the ordering core.

Stock and state-machine violations are specialisations of Protean's
``ValidationError`` so that they carry the same ``messages`` payload. Access
errors are not validation problems and stand on their own.
"""

from protean.exceptions import ValidationError


class InsufficientStockError(ValidationError):
    """Requested quantity exceeds the product's available stock."""

    def __init__(self, product_id, available, requested):
        self.product_id = str(product_id)
        self.available = available
        self.requested = requested
        super().__init__(
            {"quantity": [f"Insufficient stock: {available} available, {requested} requested"]}
        )


class InvalidTransitionError(ValidationError):
    """Order status change not permitted from the current status."""

    def __init__(self, current, target):
        self.current = current
        self.target = target
        super().__init__({"status": [f"Cannot transition from {current} to {target}"]})


class ForbiddenError(Exception):
    """The requester may not access or modify the resource."""

    def __init__(self, message="Not authorized to access this resource"):
        self.message = message
        super().__init__(message)


class UnauthenticatedError(Exception):
    """No authenticated identity accompanies the request."""

    def __init__(self, message="Not authorized, no identity supplied"):
        self.message = message
        super().__init__(message)
