"""
Legacy role adapter.

Pure mapping from the coarse role labels to granular allow sets and to
synthetic ``Role`` values. Unknown labels fail fast: defaulting to any set
would be either too permissive or too restrictive.
"""

from enum import Enum
from typing import Dict, FrozenSet, List, Optional, Union

from shared.errors import UnknownLegacyRoleError
from ..roles.defaults import SYSTEM_ROLE_DEFAULTS
from ..roles.models import Role, RolePermissions, SystemRoleKey
from .matrix import (
    LEGACY_ADMIN_PERMISSIONS,
    LEGACY_GUEST_PERMISSIONS,
    LEGACY_MEMBER_PERMISSIONS,
    LEGACY_OWNER_PERMISSIONS,
    LEGACY_PROJECT_EDITOR_PERMISSIONS,
    LEGACY_PROJECT_OWNER_PERMISSIONS,
    LEGACY_PROJECT_VIEWER_PERMISSIONS,
)


class LegacyWorkspaceRole(str, Enum):
    """Workspace labels used before permission nodes existed."""
    OWNER = "Owner"
    ADMIN = "Admin"
    MEMBER = "Member"
    GUEST = "Guest"


class LegacyProjectRole(str, Enum):
    """Project labels used before permission nodes existed."""
    OWNER = "Owner"
    EDITOR = "Editor"
    VIEWER = "Viewer"


_WORKSPACE_PERMISSIONS: Dict[LegacyWorkspaceRole, FrozenSet[str]] = {
    LegacyWorkspaceRole.OWNER: LEGACY_OWNER_PERMISSIONS,
    LegacyWorkspaceRole.ADMIN: LEGACY_ADMIN_PERMISSIONS,
    LegacyWorkspaceRole.MEMBER: LEGACY_MEMBER_PERMISSIONS,
    LegacyWorkspaceRole.GUEST: LEGACY_GUEST_PERMISSIONS,
}

_PROJECT_PERMISSIONS: Dict[LegacyProjectRole, FrozenSet[str]] = {
    LegacyProjectRole.OWNER: LEGACY_PROJECT_OWNER_PERMISSIONS,
    LegacyProjectRole.EDITOR: LEGACY_PROJECT_EDITOR_PERMISSIONS,
    LegacyProjectRole.VIEWER: LEGACY_PROJECT_VIEWER_PERMISSIONS,
}

_WORKSPACE_SYSTEM_KEYS: Dict[LegacyWorkspaceRole, SystemRoleKey] = {
    LegacyWorkspaceRole.OWNER: SystemRoleKey.OWNER,
    LegacyWorkspaceRole.ADMIN: SystemRoleKey.ADMIN,
    LegacyWorkspaceRole.MEMBER: SystemRoleKey.MEMBER,
    LegacyWorkspaceRole.GUEST: SystemRoleKey.GUEST,
}

_PROJECT_POSITIONS: Dict[LegacyProjectRole, SystemRoleKey] = {
    LegacyProjectRole.OWNER: SystemRoleKey.PROJECT_OWNER,
    LegacyProjectRole.EDITOR: SystemRoleKey.MEMBER,
    LegacyProjectRole.VIEWER: SystemRoleKey.GUEST,
}

# Labels stored by even older member records
_WORKSPACE_ALIASES: Dict[str, LegacyWorkspaceRole] = {
    "editor": LegacyWorkspaceRole.MEMBER,
    "viewer": LegacyWorkspaceRole.GUEST,
}


def _workspace_role(label: Union[LegacyWorkspaceRole, str]) -> LegacyWorkspaceRole:
    try:
        return LegacyWorkspaceRole(label)
    except ValueError:
        raise UnknownLegacyRoleError(label, [r.value for r in LegacyWorkspaceRole]) from None


def _project_role(label: Union[LegacyProjectRole, str]) -> LegacyProjectRole:
    try:
        return LegacyProjectRole(label)
    except ValueError:
        raise UnknownLegacyRoleError(label, [r.value for r in LegacyProjectRole]) from None


def get_legacy_workspace_role_permissions(label: Union[LegacyWorkspaceRole, str]) -> FrozenSet[str]:
    """Allow set of a legacy workspace label."""
    return _WORKSPACE_PERMISSIONS[_workspace_role(label)]


def get_legacy_project_role_permissions(label: Union[LegacyProjectRole, str]) -> FrozenSet[str]:
    """Allow set of a legacy project label."""
    return _PROJECT_PERMISSIONS[_project_role(label)]


def normalize_legacy_workspace_role(raw: Union[LegacyWorkspaceRole, str, None]) -> LegacyWorkspaceRole:
    """
    Parse a label read from a member record.

    Accepts the four labels in any case plus the historical Editor and
    Viewer aliases.
    """
    if isinstance(raw, LegacyWorkspaceRole):
        return raw
    if not isinstance(raw, str):
        raise UnknownLegacyRoleError(raw, [r.value for r in LegacyWorkspaceRole])
    key = raw.strip().lower()
    if key in _WORKSPACE_ALIASES:
        return _WORKSPACE_ALIASES[key]
    for role in LegacyWorkspaceRole:
        if role.value.lower() == key:
            return role
    raise UnknownLegacyRoleError(raw, [r.value for r in LegacyWorkspaceRole])


def build_legacy_workspace_role(label: Union[LegacyWorkspaceRole, str]) -> Role:
    """Synthetic, never persisted role standing in for a legacy workspace label."""
    role = _workspace_role(label)
    system_key = _WORKSPACE_SYSTEM_KEYS[role]
    return Role(
        id=f"system-{role.value.lower()}",
        name=role.value,
        position=SYSTEM_ROLE_DEFAULTS[system_key].position,
        is_system=True,
        permissions=RolePermissions(allow=_WORKSPACE_PERMISSIONS[role]),
        system_key=system_key,
    )


def build_legacy_project_role(label: Union[LegacyProjectRole, str], project_id: str) -> Role:
    """Synthetic project-scoped role standing in for a legacy project label."""
    if not project_id:
        raise ValueError("project_id is required for a project role")
    role = _project_role(label)
    anchor = _PROJECT_POSITIONS[role]
    return Role(
        id=f"system-project-{role.value.lower()}",
        name=f"Project {role.value}",
        position=SYSTEM_ROLE_DEFAULTS[anchor].position,
        is_system=True,
        permissions=RolePermissions(allow=_PROJECT_PERMISSIONS[role]),
        system_key=SystemRoleKey.PROJECT_OWNER if role is LegacyProjectRole.OWNER else None,
        project_id=project_id,
    )


def build_roles_from_legacy_workspace_role(label: Union[LegacyWorkspaceRole, str],
                                           tenant_owner_id: Optional[str] = None,
                                           user_id: Optional[str] = None) -> List[Role]:
    """
    Roles held by a member whose record only carries a legacy label.

    The tenant owner gets the single Owner role whatever the label says.
    """
    if tenant_owner_id and user_id and tenant_owner_id == user_id:
        return [build_legacy_workspace_role(LegacyWorkspaceRole.OWNER)]
    return [build_legacy_workspace_role(normalize_legacy_workspace_role(label))]
