"""
Role based permissions.

Every mutating service operation asks ``ensure_allowed`` before it touches
the store. The mapping is a pure function of the caller's role, the
operation and, for order updates, who owns the order.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from errors import AuthorizationError
from models.User import Role

logger = logging.getLogger(__name__)


class Operation(str, Enum):
    MANAGE_USERS = "users:manage"
    WRITE_TABLES = "tables:write"
    MANAGE_RESERVATIONS = "reservations:manage"
    CREATE_ORDER = "orders:create"
    UPDATE_ORDER = "orders:update"
    DELETE_ORDER = "orders:delete"
    WRITE_GROCERIES = "groceries:write"
    DELETE_GROCERIES = "groceries:delete"
    VIEW_KITCHEN = "kitchen:view"
    READ = "read"


@dataclass(frozen=True)
class CallerContext:
    """Who is calling: resolved from the bearer token for every request."""
    user_id: int
    role: Role


@dataclass(frozen=True)
class AccessContext:
    caller_id: Optional[int] = None
    owner_id: Optional[int] = None
    item_status_only: bool = False


_GRANTS = {
    Operation.MANAGE_USERS: {Role.ADMIN},
    Operation.WRITE_TABLES: {Role.ADMIN},
    Operation.MANAGE_RESERVATIONS: {Role.ADMIN, Role.RECEPTIONIST},
    Operation.CREATE_ORDER: {Role.ADMIN, Role.WAITER},
    Operation.UPDATE_ORDER: {Role.ADMIN, Role.WAITER, Role.CHEF},
    Operation.DELETE_ORDER: {Role.ADMIN},
    Operation.WRITE_GROCERIES: {Role.ADMIN, Role.CHEF},
    Operation.DELETE_GROCERIES: {Role.ADMIN},
    Operation.VIEW_KITCHEN: {Role.ADMIN, Role.CHEF},
    Operation.READ: {Role.ADMIN, Role.RECEPTIONIST, Role.WAITER, Role.CHEF},
}


def is_allowed(role, operation: Operation, context: Optional[AccessContext] = None) -> bool:
    try:
        role = Role(role)
    except ValueError:
        return False

    if role not in _GRANTS.get(operation, set()):
        return False

    if operation is Operation.UPDATE_ORDER and role is not Role.ADMIN:
        if context is None:
            return False
        if role is Role.WAITER:
            return context.owner_id is not None and context.owner_id == context.caller_id
        if role is Role.CHEF:
            return context.item_status_only

    return True


def ensure_allowed(caller: CallerContext, operation: Operation, context: Optional[AccessContext] = None) -> None:
    if not is_allowed(caller.role, operation, context):
        role = getattr(caller.role, "value", caller.role)
        logger.warning("Denied %s for user %s (role %s)", operation.value, caller.user_id, role)
        raise AuthorizationError(f"Role '{role}' is not authorized for {operation.value}")
