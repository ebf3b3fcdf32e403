"""
In-process permission service.

Call sites (UI handlers, request handlers) go through this facade: it
assembles evaluation contexts, delegates to the pure engine and hierarchy
functions, and records logs and metrics around them. It holds no role state;
every check is computed from the context it is given.
"""

from contextlib import contextmanager, nullcontext
from typing import Callable, Dict, Iterable, Optional, Sequence, Union

from shared.config import ServiceConfig, get_config
from shared.errors import PermissionEngineError
from shared.logging import configure_logging, get_logger
from shared.metrics import MetricsCollector, get_metrics_collector
from .evaluation.engine import (
    evaluate_permission,
    evaluate_permissions,
    explain_permission,
    has_all_permissions,
    has_any_permission,
    validate_context,
)
from .evaluation.hierarchy import RoleOperation, can_manage_role, can_perform_role_operation
from .legacy.adapter import (
    LegacyWorkspaceRole,
    build_roles_from_legacy_workspace_role,
    normalize_legacy_workspace_role,
)
from .registry import PERMISSION_CATALOG
from .roles.models import EvaluationResult, PermissionEvaluationContext, Role


class PermissionService:
    """Permission service implementation."""

    def __init__(self, config: Optional[ServiceConfig] = None,
                 metrics: Optional[MetricsCollector] = None,
                 configure: bool = False):
        self.config = config or get_config("permissions")
        self.logger = get_logger(f"{self.config.service_name}.service")
        self.metrics = metrics or get_metrics_collector(self.config.service_name)

        if configure:
            configure_logging(self.config.service_name, self.config.log_level, self.config.log_json)

    # Context assembly

    def build_context(self, user_id: str, tenant_id: str, roles: Iterable[Role] = (),
                      is_tenant_owner: bool = False, project_id: Optional[str] = None,
                      is_external: bool = False) -> PermissionEvaluationContext:
        """Build a context from roles the caller already resolved for this scope."""
        unique: Dict[str, Role] = {}
        for role in roles:
            unique.setdefault(role.id, role)
        return PermissionEvaluationContext(
            user_id=user_id,
            tenant_id=tenant_id,
            is_tenant_owner=is_tenant_owner,
            roles=tuple(unique.values()),
            project_id=project_id,
            is_external=is_external,
        )

    def context_from_legacy(self, user_id: str, tenant_id: str,
                            legacy_role: Union[LegacyWorkspaceRole, str],
                            tenant_owner_id: Optional[str] = None,
                            project_id: Optional[str] = None,
                            project_roles: Sequence[Role] = ()) -> PermissionEvaluationContext:
        """
        Build a context for a member whose record only carries a legacy label.

        ``project_roles`` must already be filtered to ``project_id``. A
        personal workspace (tenant id equal to the user id) is owned by its
        user.
        """
        label = normalize_legacy_workspace_role(legacy_role)
        is_owner = (
            user_id == tenant_id
            or (tenant_owner_id is not None and user_id == tenant_owner_id)
            or label is LegacyWorkspaceRole.OWNER
        )
        roles = build_roles_from_legacy_workspace_role(
            LegacyWorkspaceRole.OWNER if is_owner else label,
            tenant_owner_id=tenant_owner_id,
            user_id=user_id,
        )
        return self.build_context(
            user_id=user_id,
            tenant_id=tenant_id,
            roles=list(roles) + list(project_roles),
            is_tenant_owner=is_owner,
            project_id=project_id,
            is_external=label is LegacyWorkspaceRole.GUEST,
        )

    # Permission checks

    def has_permission(self, context: PermissionEvaluationContext, node: str) -> bool:
        with self._observe("has_permission"):
            allowed = evaluate_permission(context, node)
        self._record(node, allowed)
        if not allowed and self.config.explain_denials:
            self._log_denial(context, node)
        return allowed

    def has_all_permissions(self, context: PermissionEvaluationContext, nodes: Sequence[str]) -> bool:
        with self._observe("has_all_permissions"):
            return has_all_permissions(context, nodes)

    def has_any_permission(self, context: PermissionEvaluationContext, nodes: Sequence[str]) -> bool:
        with self._observe("has_any_permission"):
            return has_any_permission(context, nodes)

    def permission_map(self, context: PermissionEvaluationContext, nodes: Sequence[str]) -> Dict[str, bool]:
        with self._observe("permission_map"):
            decisions = evaluate_permissions(context, nodes)
        for node, allowed in decisions.items():
            self._record(node, allowed)
        return decisions

    def explain(self, context: PermissionEvaluationContext, node: str) -> EvaluationResult:
        with self._observe("explain"):
            return explain_permission(context, node)

    # Role management

    def can_manage_role(self, context: PermissionEvaluationContext, target_role: Role) -> bool:
        """Seniority check for any action on ``target_role``; the tenant owner always passes."""
        return self._role_check(
            context, target_role, "manage",
            lambda: can_manage_role(context.roles, target_role)
        )

    def can_perform_role_operation(self, context: PermissionEvaluationContext, target_role: Role,
                                   operation: Union[RoleOperation, str]) -> bool:
        """Protection and seniority check for one operation; the tenant owner always passes."""
        operation = RoleOperation(operation)
        return self._role_check(
            context, target_role, operation.value,
            lambda: can_perform_role_operation(context.roles, target_role, operation)
        )

    # Internals

    def _role_check(self, context: PermissionEvaluationContext, target_role: Role,
                    operation: str, check: Callable[[], bool]) -> bool:
        with self._observe("role_management"):
            validate_context(context)
            allowed = True if context.is_tenant_owner else check()

        if self.config.metrics_enabled:
            self.metrics.record_role_management_check(operation, allowed)
        self.logger.debug(
            "Role management check",
            user_id=context.user_id,
            tenant_id=context.tenant_id,
            target_role=target_role.id,
            operation=operation,
            allowed=allowed
        )
        return allowed

    @contextmanager
    def _observe(self, operation: str):
        """Time an operation and log contract violations before re-raising them."""
        timer = (
            self.metrics.time_operation("permission_check_duration_seconds", operation=operation)
            if self.config.metrics_enabled else nullcontext()
        )
        try:
            with timer:
                yield
        except PermissionEngineError as exc:
            self.logger.warning(
                "Permission contract violation",
                operation=operation,
                code=exc.code,
                error=exc.message
            )
            if self.config.metrics_enabled:
                self.metrics.record_error(exc.code)
            raise

    def _record(self, node: str, allowed: bool):
        if not self.config.metrics_enabled:
            return
        meta = PERMISSION_CATALOG.get(node)
        self.metrics.record_permission_check(meta.family.value if meta else "unknown", allowed)

    def _log_denial(self, context: PermissionEvaluationContext, node: str):
        result = explain_permission(context, node)
        self.logger.info(
            "Permission denied",
            user_id=context.user_id,
            tenant_id=context.tenant_id,
            project_id=context.project_id,
            node=node,
            reason=result.reason
        )
