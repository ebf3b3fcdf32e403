"""
Permission evaluation engine.

Decides whether the actor described by a ``PermissionEvaluationContext`` may
perform a permission node:

0) Tenant owner -> allow, deny sets included.
1) Collect allow and deny entries from every applicable role.
2) Deny overrides allow, whichever role contributed it and whatever its
   position.
3) Anything not allowed is denied; unknown nodes are never allowed.

Every function is pure. Nothing is cached between calls: role data can change
between two checks and a stale decision must never be served.
"""

import time
from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple

from shared.errors import InvalidContextError
from shared.logging import get_logger
from ..registry import (
    FAMILY_PERMISSIONS,
    FAMILY_WILDCARDS,
    PERMISSION_CATALOG,
    PermissionFamily,
    is_valid_node,
)
from ..roles.models import EvaluationResult, PermissionEvaluationContext, Role

logger = get_logger("permissions.engine")


@dataclass(frozen=True)
class EffectivePermissions:
    """Combined allow/deny snapshot of a context, with contributing role ids."""
    allowed: FrozenSet[str]
    denied: FrozenSet[str]
    allow_sources: Mapping[str, Tuple[str, ...]]
    deny_sources: Mapping[str, Tuple[str, ...]]

    def permits(self, node: str) -> bool:
        return node in self.allowed and node not in self.denied


def validate_context(context: PermissionEvaluationContext) -> None:
    """Reject contexts that can only come from a caller bug."""
    if context is None:
        raise InvalidContextError("Evaluation context is required")
    for name in ("user_id", "tenant_id"):
        value = getattr(context, name, None)
        if not isinstance(value, str) or not value.strip():
            raise InvalidContextError(f"Evaluation context is missing {name}", {"field": name})
    if not isinstance(context.is_tenant_owner, bool):
        raise InvalidContextError(
            "Evaluation context is_tenant_owner must be a bool", {"field": "is_tenant_owner"}
        )
    if not isinstance(context.roles, (tuple, list)):
        raise InvalidContextError("Evaluation context roles must be a sequence", {"field": "roles"})


def _role_applies(role: Role, context: PermissionEvaluationContext) -> bool:
    # Project-scoped roles only count inside their own project
    return role.project_id is None or role.project_id == context.project_id


def _expand_entries(entries: Iterable[str], role: Role,
                    context: PermissionEvaluationContext, granting: bool) -> Iterator[str]:
    # Scope rules only narrow grants; deny entries always expand in full
    project_only = granting and role.is_project_scoped
    for entry in entries:
        family = FAMILY_WILDCARDS.get(entry)
        if family is not None:
            if granting and family == PermissionFamily.PROJECT and context.project_id is None:
                continue
            if project_only and family != PermissionFamily.PROJECT:
                continue
            yield from FAMILY_PERMISSIONS[family]
            continue

        meta = PERMISSION_CATALOG.get(entry)
        if meta is None:
            # Stale entry in a stored role; grants nothing
            continue
        if project_only and meta.family != PermissionFamily.PROJECT:
            continue
        yield entry


def _collect(context: PermissionEvaluationContext) -> EffectivePermissions:
    allow_sources: Dict[str, List[str]] = {}
    deny_sources: Dict[str, List[str]] = {}

    for role in context.roles:
        if not _role_applies(role, context):
            continue
        for node in _expand_entries(role.permissions.allow, role, context, granting=True):
            allow_sources.setdefault(node, []).append(role.id)
        for node in _expand_entries(role.permissions.deny, role, context, granting=False):
            deny_sources.setdefault(node, []).append(role.id)

    return EffectivePermissions(
        allowed=frozenset(allow_sources),
        denied=frozenset(deny_sources),
        allow_sources={node: tuple(ids) for node, ids in allow_sources.items()},
        deny_sources={node: tuple(ids) for node, ids in deny_sources.items()},
    )


def _snapshot(context: PermissionEvaluationContext) -> Optional[EffectivePermissions]:
    """Validated snapshot, or None for the tenant owner who bypasses roles."""
    validate_context(context)
    if context.is_tenant_owner:
        return None
    return _collect(context)


def _permits(snapshot: Optional[EffectivePermissions], node: str) -> bool:
    return snapshot is None or snapshot.permits(node)


def get_effective_permissions(context: PermissionEvaluationContext) -> EffectivePermissions:
    """Combined allow/deny sets of the roles in ``context`` (owner bypass not applied)."""
    validate_context(context)
    return _collect(context)


def evaluate_permission(context: PermissionEvaluationContext, node: str) -> bool:
    """True if the actor may perform ``node``."""
    validate_context(context)
    if context.is_tenant_owner:
        return True
    if not is_valid_node(node):
        return False
    return _collect(context).permits(node)


def evaluate_permissions(context: PermissionEvaluationContext, nodes: Sequence[str]) -> Dict[str, bool]:
    """Evaluate a batch of nodes against a single snapshot."""
    snapshot = _snapshot(context)
    return {node: _permits(snapshot, node) for node in nodes}


def has_all_permissions(context: PermissionEvaluationContext, nodes: Sequence[str]) -> bool:
    """True if every node is allowed; stops at the first denial."""
    snapshot = _snapshot(context)
    return all(_permits(snapshot, node) for node in nodes)


def has_any_permission(context: PermissionEvaluationContext, nodes: Sequence[str]) -> bool:
    """True if at least one node is allowed; stops at the first grant."""
    snapshot = _snapshot(context)
    return any(_permits(snapshot, node) for node in nodes)


def explain_permission(context: PermissionEvaluationContext, node: str) -> EvaluationResult:
    """Same decision as ``evaluate_permission`` with the reason and contributing roles."""
    start_time = time.perf_counter()
    snapshot = _snapshot(context)

    if snapshot is None:
        result = EvaluationResult(node=node, allowed=True, reason="Tenant owner bypass")
    elif not is_valid_node(node):
        result = EvaluationResult(node=node, allowed=False, reason="Unknown permission node")
    elif not context.roles:
        result = EvaluationResult(node=node, allowed=False, reason="No roles held")
    else:
        allowed_by = list(snapshot.allow_sources.get(node, ()))
        denied_by = list(snapshot.deny_sources.get(node, ()))
        if denied_by:
            reason = f"Denied by role(s): {', '.join(denied_by)}"
        elif allowed_by:
            reason = f"Allowed by role(s): {', '.join(allowed_by)}"
        else:
            reason = "Not granted by any applicable role"
        result = EvaluationResult(
            node=node,
            allowed=snapshot.permits(node),
            reason=reason,
            allowed_by=allowed_by,
            denied_by=denied_by,
        )

    result.evaluation_time_ms = (time.perf_counter() - start_time) * 1000

    logger.debug(
        "Permission evaluation result",
        node=node,
        user_id=context.user_id,
        tenant_id=context.tenant_id,
        project_id=context.project_id,
        allowed=result.allowed,
        reason=result.reason
    )

    return result
