"""
Built-in system roles, positions and protection rules.
"""

from dataclasses import dataclass
from typing import Dict, Optional, Sequence, Union

from shared.errors import UnknownSystemRoleError
from ..legacy.matrix import LEGACY_ADMIN_PERMISSIONS
from ..registry import (
    DEFAULT_GUEST_PERMISSIONS,
    DEFAULT_MEMBER_PERMISSIONS,
    PermissionFamily,
    wildcard_for,
)
from .models import Role, RolePermissions, SystemRoleKey
from .positions import (
    ADMIN_POSITION,
    BELOW_GUEST_POSITION,
    GUEST_POSITION,
    MEMBER_POSITION,
    OWNER_POSITION,
    PROJECT_OWNER_POSITION,
)


@dataclass(frozen=True)
class SystemRoleDefault:
    """Compile-time configuration of a system role."""
    name: str
    position: int
    permissions: RolePermissions
    project_scoped: bool = False


SYSTEM_ROLE_DEFAULTS: Dict[SystemRoleKey, SystemRoleDefault] = {
    SystemRoleKey.OWNER: SystemRoleDefault(
        name="Owner",
        position=OWNER_POSITION,
        permissions=RolePermissions(allow=frozenset(wildcard_for(family) for family in PermissionFamily)),
    ),
    SystemRoleKey.ADMIN: SystemRoleDefault(
        name="Admin",
        position=ADMIN_POSITION,
        permissions=RolePermissions(allow=LEGACY_ADMIN_PERMISSIONS),
    ),
    SystemRoleKey.MEMBER: SystemRoleDefault(
        name="Member",
        position=MEMBER_POSITION,
        permissions=RolePermissions(allow=DEFAULT_MEMBER_PERMISSIONS),
    ),
    SystemRoleKey.GUEST: SystemRoleDefault(
        name="Guest",
        position=GUEST_POSITION,
        permissions=RolePermissions(allow=DEFAULT_GUEST_PERMISSIONS),
    ),
    SystemRoleKey.PROJECT_OWNER: SystemRoleDefault(
        name="Project Owner",
        position=PROJECT_OWNER_POSITION,
        permissions=RolePermissions(allow=frozenset({wildcard_for(PermissionFamily.PROJECT)})),
        project_scoped=True,
    ),
}


def _system_key(key: Union[SystemRoleKey, str]) -> SystemRoleKey:
    try:
        return SystemRoleKey(key)
    except ValueError:
        raise UnknownSystemRoleError(key) from None


def build_system_role(key: Union[SystemRoleKey, str], role_id: Optional[str] = None,
                      project_id: Optional[str] = None) -> Role:
    """Materialize a system role from its defaults."""
    key = _system_key(key)
    default = SYSTEM_ROLE_DEFAULTS[key]
    if default.project_scoped and project_id is None:
        raise ValueError(f"{key.value} is project-scoped and needs a project_id")
    return Role(
        id=role_id or f"system-{key.value.lower()}",
        name=default.name,
        position=default.position,
        is_system=True,
        permissions=default.permissions,
        system_key=key,
        project_id=project_id if default.project_scoped else None,
    )


def get_highest_position(roles: Sequence[Role]) -> Union[int, float]:
    """Highest position among ``roles``; -inf when there are none."""
    return max((role.position for role in roles), default=BELOW_GUEST_POSITION)


@dataclass(frozen=True)
class RoleProtection:
    """Which management operations a role accepts at all."""
    can_edit: bool
    can_delete: bool
    can_reorder: bool


_LOCKED = RoleProtection(can_edit=False, can_delete=False, can_reorder=False)
_PINNED = RoleProtection(can_edit=True, can_delete=False, can_reorder=False)
_UNRESTRICTED = RoleProtection(can_edit=True, can_delete=True, can_reorder=True)

ROLE_PROTECTION: Dict[SystemRoleKey, RoleProtection] = {
    SystemRoleKey.OWNER: _LOCKED,
    SystemRoleKey.GUEST: _LOCKED,
    SystemRoleKey.PROJECT_OWNER: _LOCKED,
    # Permissions editable, but the role itself stays put
    SystemRoleKey.ADMIN: _PINNED,
    SystemRoleKey.MEMBER: _PINNED,
}


def get_role_protection(role: Role) -> RoleProtection:
    if role.system_key is not None:
        return ROLE_PROTECTION[role.system_key]
    if role.is_system:
        return _PINNED
    return _UNRESTRICTED
