"""
Permission engine package.

This package decides whether an actor may perform a guarded action inside a
tenant or one of its projects. It provides:

- app.registry: Closed vocabulary of permission nodes and their families.
- app.roles: Role and permission set model, system defaults, seniority.
- app.legacy: Adapter from legacy role labels to the granular model.
- app.evaluation: Allow/deny evaluation and the role hierarchy guard.
- app.service: In-process facade with context assembly, logs and metrics.

Guidelines:
- The engine is stateless; callers pass a freshly built context per check.
- Never cache decisions: role data may change between two checks.
- A denial is a plain False; exceptions mean the caller broke the contract.
"""

from .evaluation import (
    EffectivePermissions,
    RoleOperation,
    can_manage_role,
    can_move_role,
    can_perform_role_operation,
    evaluate_permission,
    evaluate_permissions,
    explain_permission,
    get_effective_permissions,
    has_all_permissions,
    has_any_permission,
)
from .legacy.adapter import (
    LegacyProjectRole,
    LegacyWorkspaceRole,
    build_legacy_project_role,
    build_legacy_workspace_role,
    build_roles_from_legacy_workspace_role,
    get_legacy_project_role_permissions,
    get_legacy_workspace_role_permissions,
    normalize_legacy_workspace_role,
)
from .registry import (
    ALL_AI_PERMISSIONS,
    ALL_PROJECT_PERMISSIONS,
    ALL_TENANT_PERMISSIONS,
    ALL_USER_PERMISSIONS,
    DEFAULT_GUEST_PERMISSIONS,
    DEFAULT_MEMBER_PERMISSIONS,
    PERMISSION_CATALOG,
    PermissionFamily,
    family_of,
    is_valid_node,
    validate_permission_nodes,
)
from .roles import (
    SYSTEM_ROLE_DEFAULTS,
    EvaluationResult,
    PermissionEvaluationContext,
    Role,
    RoleCreateRequest,
    RolePermissions,
    RoleResponse,
    RoleUpdateRequest,
    SystemRoleKey,
    build_system_role,
    get_highest_position,
    get_role_protection,
)
from .service import PermissionService
