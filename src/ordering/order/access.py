"""Order ownership rules: customers see their own orders, admins see all."""

from ordering.exceptions import ForbiddenError
from ordering.utils.settings import setting


def is_admin(role) -> bool:
    return role == setting("ADMIN_ROLE")


def assert_can_access(order, requester_id, requester_role):
    if not (order.is_owned_by(requester_id) or is_admin(requester_role)):
        raise ForbiddenError("Not authorized to access this order")
