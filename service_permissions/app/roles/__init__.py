"""
Role and permission set model package.

Modules of interest:
- models: Role, RolePermissions, evaluation context and the pydantic
  request/response models used at the persistence boundary.
- positions: Seniority anchors of the system roles.
- defaults: System role defaults, protection and seniority helpers.
"""

from .models import (
    EvaluationResult,
    PermissionEvaluationContext,
    Role,
    RoleCreateRequest,
    RolePermissions,
    RolePermissionsPayload,
    RoleResponse,
    RoleUpdateRequest,
    SystemRoleKey,
)
from .defaults import (
    ADMIN_POSITION,
    BELOW_GUEST_POSITION,
    GUEST_POSITION,
    MEMBER_POSITION,
    OWNER_POSITION,
    PROJECT_OWNER_POSITION,
    SYSTEM_ROLE_DEFAULTS,
    RoleProtection,
    SystemRoleDefault,
    build_system_role,
    get_highest_position,
    get_role_protection,
)
