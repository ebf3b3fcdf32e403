"""
Permission node registry package.

Defines the closed vocabulary of permission nodes and the lookups the rest of
the engine relies on.

Modules of interest:
- catalog: Families, danger levels and per-node metadata.
- nodes: Family catalogs, member/guest defaults, wildcards and validation.
"""

from .catalog import PERMISSION_CATALOG, DangerLevel, PermissionFamily, PermissionMetadata
from .nodes import (
    ALL_AI_PERMISSIONS,
    ALL_PROJECT_PERMISSIONS,
    ALL_TENANT_PERMISSIONS,
    ALL_USER_PERMISSIONS,
    DEFAULT_GUEST_PERMISSIONS,
    DEFAULT_MEMBER_PERMISSIONS,
    FAMILY_PERMISSIONS,
    FAMILY_WILDCARDS,
    ParsedPermission,
    expand_wildcard,
    family_of,
    get_permissions_for_scope,
    group_permissions_by_module,
    is_dangerous_permission,
    is_permission_in_scope,
    is_valid_node,
    is_wildcard,
    parse_permission_node,
    validate_permission_nodes,
    wildcard_for,
)
