"""
Role hierarchy guard.

Answers "may this actor act upon that role" by comparing seniority. The
tenant owner bypass is the caller's job; these functions are plain
comparisons.
"""

from enum import Enum
from typing import Sequence, Union

from ..roles.defaults import get_highest_position, get_role_protection
from ..roles.models import Role, SystemRoleKey


class RoleOperation(str, Enum):
    """Role management actions gated by the hierarchy."""
    CREATE = "create"
    EDIT = "edit"
    DELETE = "delete"
    ASSIGN = "assign"
    REORDER = "reorder"


def can_manage_role(actor_roles: Sequence[Role], target_role: Role) -> bool:
    """Strictly higher seniority required; peers never manage each other."""
    # Owner sits above every position, whatever a stored role claims
    if target_role.system_key is SystemRoleKey.OWNER:
        return False
    return get_highest_position(actor_roles) > target_role.position


def can_perform_role_operation(actor_roles: Sequence[Role], target_role: Role,
                               operation: Union[RoleOperation, str]) -> bool:
    """Protection of the target role first, then seniority."""
    operation = RoleOperation(operation)
    protection = get_role_protection(target_role)

    if operation is RoleOperation.CREATE and target_role.is_system:
        return False
    if operation is RoleOperation.EDIT and not protection.can_edit:
        return False
    if operation is RoleOperation.DELETE and not protection.can_delete:
        return False
    if operation is RoleOperation.REORDER and not protection.can_reorder:
        return False

    return can_manage_role(actor_roles, target_role)


def can_move_role(actor_roles: Sequence[Role], target_role: Role, new_position: int) -> bool:
    """Reorder ``target_role`` to ``new_position`` without lifting it to or above the actor."""
    if not can_perform_role_operation(actor_roles, target_role, RoleOperation.REORDER):
        return False
    return get_highest_position(actor_roles) > new_position
