"""Request identity.

Authentication happens upstream: the gateway verifies the session and
forwards the caller as ``X-User-Id`` and ``X-User-Role`` headers. Routes
depend on ``current_principal`` (any signed-in caller) or ``require_admin``.
"""

from dataclasses import dataclass

from fastapi import Depends, Header

from ordering.exceptions import ForbiddenError, UnauthenticatedError
from ordering.order.access import is_admin
from ordering.utils.logging import add_context

ROLES = ("user", "admin")


@dataclass(frozen=True)
class Principal:
    id: str
    role: str = "user"

    @property
    def is_admin(self) -> bool:
        return is_admin(self.role)


async def current_principal(
    x_user_id: str | None = Header(default=None),
    x_user_role: str = Header(default="user"),
) -> Principal:
    if not x_user_id:
        raise UnauthenticatedError()
    role = x_user_role.lower()
    if role not in ROLES:
        raise UnauthenticatedError(f"Unknown role '{x_user_role}'")

    add_context(user_id=x_user_id, role=role)
    return Principal(id=x_user_id, role=role)


async def require_admin(principal: Principal = Depends(current_principal)) -> Principal:
    if not principal.is_admin:
        raise ForbiddenError("Not authorized as an admin")
    return principal
