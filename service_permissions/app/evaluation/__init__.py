"""
Evaluation package.

Modules of interest:
- engine: Allow/deny combination across stacked roles and the batch checks.
- hierarchy: Seniority comparisons for role management.

Both are pure and safe to call concurrently; callers build a fresh context
per check.
"""

from .engine import (
    EffectivePermissions,
    evaluate_permission,
    evaluate_permissions,
    explain_permission,
    get_effective_permissions,
    has_all_permissions,
    has_any_permission,
    validate_context,
)
from .hierarchy import RoleOperation, can_manage_role, can_move_role, can_perform_role_operation
