"""
Permission node registry.

Closed vocabulary of guardable actions, grouped by family, plus the canonical
lists used for "all in family" grants and for brand-new Member/Guest roles.
Everything here is a pure lookup.
"""

from collections import OrderedDict
from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, List, Optional, Tuple

from shared.errors import UnknownPermissionError
from .catalog import PERMISSION_CATALOG, DangerLevel, PermissionFamily


def _family_nodes(family: PermissionFamily) -> Tuple[str, ...]:
    return tuple(node for node, meta in PERMISSION_CATALOG.items() if meta.family == family)


ALL_TENANT_PERMISSIONS: Tuple[str, ...] = _family_nodes(PermissionFamily.TENANT)
ALL_PROJECT_PERMISSIONS: Tuple[str, ...] = _family_nodes(PermissionFamily.PROJECT)
ALL_AI_PERMISSIONS: Tuple[str, ...] = _family_nodes(PermissionFamily.AI)
ALL_USER_PERMISSIONS: Tuple[str, ...] = _family_nodes(PermissionFamily.USER)

FAMILY_PERMISSIONS: Dict[PermissionFamily, Tuple[str, ...]] = {
    PermissionFamily.TENANT: ALL_TENANT_PERMISSIONS,
    PermissionFamily.PROJECT: ALL_PROJECT_PERMISSIONS,
    PermissionFamily.AI: ALL_AI_PERMISSIONS,
    PermissionFamily.USER: ALL_USER_PERMISSIONS,
}

DEFAULT_MEMBER_PERMISSIONS: FrozenSet[str] = frozenset({
    # Basic tenant access
    "tenant.view",
    "tenant.members.view",
    "tenant.roles.view",
    # Media library access
    "tenant.media.view",
    "tenant.media.upload",
    # AI access (basic)
    "ai.text.use",
    "ai.usage.viewSelf",
    # User self-service
    "user.settings.editSelf",
})

# Externals only see what project roles grant them explicitly
DEFAULT_GUEST_PERMISSIONS: FrozenSet[str] = frozenset({
    "user.settings.editSelf",
})

# Reserved "every node in family" markers; only system defaults carry them
WILDCARD_SUFFIX = ".*"
FAMILY_WILDCARDS: Dict[str, PermissionFamily] = {
    family.value + WILDCARD_SUFFIX: family for family in PermissionFamily
}


def is_valid_node(node: str) -> bool:
    """Return True if ``node`` is a registered permission node."""
    return isinstance(node, str) and node in PERMISSION_CATALOG


def family_of(node: str) -> PermissionFamily:
    """Return the family of a registered node; unknown nodes are a programmer error."""
    meta = PERMISSION_CATALOG.get(node) if isinstance(node, str) else None
    if meta is None:
        raise UnknownPermissionError([str(node)])
    return meta.family


def is_wildcard(entry: str) -> bool:
    return entry in FAMILY_WILDCARDS


def wildcard_for(family: PermissionFamily) -> str:
    return PermissionFamily(family).value + WILDCARD_SUFFIX


def expand_wildcard(marker: str) -> Tuple[str, ...]:
    """Expand a family marker to the family's nodes."""
    family = FAMILY_WILDCARDS.get(marker)
    if family is None:
        raise UnknownPermissionError([marker], f"Not a family wildcard: {marker}")
    return FAMILY_PERMISSIONS[family]


def validate_permission_nodes(nodes: Iterable[str], allow_wildcards: bool = False) -> FrozenSet[str]:
    """
    Validate a collection of nodes before it is attached to a role.

    Raises UnknownPermissionError naming every rejected entry. Wildcard
    markers are rejected unless ``allow_wildcards`` is set.
    """
    nodes = frozenset(nodes)
    unknown = [
        node for node in nodes
        if not is_valid_node(node) and not (allow_wildcards and is_wildcard(node))
    ]
    if unknown:
        raise UnknownPermissionError(unknown)
    return nodes


def is_permission_in_scope(node: str, family: PermissionFamily) -> bool:
    meta = PERMISSION_CATALOG.get(node)
    return meta is not None and meta.family == PermissionFamily(family)


def get_permissions_for_scope(family: PermissionFamily) -> List[str]:
    return list(FAMILY_PERMISSIONS[PermissionFamily(family)])


def is_dangerous_permission(node: str) -> bool:
    """High-risk nodes get an extra confirmation in role editors."""
    meta = PERMISSION_CATALOG.get(node)
    return meta is not None and meta.danger_level == DangerLevel.HIGH


@dataclass(frozen=True)
class ParsedPermission:
    """Node split into scope, optional module path and action."""
    scope: str
    action: str
    module: Optional[str] = None


def parse_permission_node(node: str) -> ParsedPermission:
    """
    Split a node into its parts.

    'project.tasks.create' -> scope='project', module='tasks', action='create'
    'project.view'         -> scope='project', module=None, action='view'
    """
    parts = node.split(".")
    if len(parts) < 2 or not all(parts):
        raise UnknownPermissionError([node], f"Malformed permission node: {node}")
    if len(parts) == 2:
        return ParsedPermission(scope=parts[0], action=parts[1])
    return ParsedPermission(scope=parts[0], module=".".join(parts[1:-1]), action=parts[-1])


def group_permissions_by_module() -> "OrderedDict[str, List[str]]":
    """Group catalog nodes for display, e.g. 'project.tasks' or 'project' for two-part nodes."""
    groups: "OrderedDict[str, List[str]]" = OrderedDict()
    for node in PERMISSION_CATALOG:
        parts = node.split(".")
        key = ".".join(parts[:2]) if len(parts) > 2 else parts[0]
        groups.setdefault(key, []).append(node)
    return groups
