"""
Unit tests for the permission service facade.
"""

import pytest
from structlog.testing import capture_logs

from shared.config import ServiceConfig
from shared.errors import InvalidContextError, UnknownLegacyRoleError
from service_permissions.app.evaluation import RoleOperation
from service_permissions.app.legacy.adapter import build_legacy_project_role
from service_permissions.app.roles import SystemRoleKey, build_system_role
from service_permissions.app.service import PermissionService


class TestContextAssembly:
    """Test cases for building evaluation contexts."""

    def test_build_context_deduplicates(self, permission_service, role_factory):
        """Test duplicate role ids collapse to the first occurrence."""
        first = role_factory("r1", allow={"tenant.view"})
        duplicate = role_factory("r1", allow={"tenant.billing.manage"})

        context = permission_service.build_context("user-1", "tenant-1", [first, duplicate])

        assert context.roles == (first,)

    def test_personal_workspace_is_owned(self, permission_service):
        """Test a tenant whose id is the user id belongs to that user."""
        context = permission_service.context_from_legacy("user-1", "user-1", "Member")

        assert context.is_tenant_owner is True
        assert permission_service.has_permission(context, "tenant.billing.manage") is True

    def test_tenant_owner_id(self, permission_service):
        """Test the recorded tenant owner gets the bypass whatever the label."""
        context = permission_service.context_from_legacy(
            "user-1", "tenant-1", "Guest", tenant_owner_id="user-1"
        )

        assert context.is_tenant_owner is True
        assert [r.system_key for r in context.roles] == [SystemRoleKey.OWNER]

    def test_owner_label(self, permission_service):
        """Test the Owner label alone marks the owner."""
        context = permission_service.context_from_legacy("user-1", "tenant-1", "owner")

        assert context.is_tenant_owner is True

    def test_member_label(self, permission_service):
        """Test a Member gets the Member defaults and no bypass."""
        context = permission_service.context_from_legacy(
            "user-2", "tenant-1", "Member", tenant_owner_id="user-1"
        )

        assert context.is_tenant_owner is False
        assert context.is_external is False
        assert permission_service.has_permission(context, "tenant.media.upload") is True
        assert permission_service.has_permission(context, "tenant.members.invite") is False

    def test_guest_is_external(self, permission_service):
        """Test Guest labels, including the Viewer alias, mark externals."""
        context = permission_service.context_from_legacy("user-2", "tenant-1", "Viewer")

        assert context.is_external is True
        assert permission_service.has_permission(context, "tenant.view") is False

    def test_project_roles(self, permission_service):
        """Test project roles are stacked on the workspace role."""
        editor = build_legacy_project_role("Editor", "project-1")
        context = permission_service.context_from_legacy(
            "user-2", "tenant-1", "Guest", project_id="project-1", project_roles=[editor]
        )

        assert permission_service.has_permission(context, "project.tasks.create") is True
        assert permission_service.has_permission(context, "project.delete") is False

    def test_unknown_label(self, permission_service):
        """Test unknown labels fail fast."""
        with pytest.raises(UnknownLegacyRoleError):
            permission_service.context_from_legacy("user-2", "tenant-1", "Superuser")


class TestPermissionChecks:
    """Test cases for permission checks through the facade."""

    def test_has_permission_metrics(self, permission_service, metrics, context_factory, admin_role):
        """Test each decision is counted by family."""
        context = context_factory(roles=[admin_role])

        assert permission_service.has_permission(context, "tenant.members.invite") is True
        assert permission_service.has_permission(context, "tenant.billing.manage") is False
        assert permission_service.has_permission(context, "tenant.unknown") is False

        assert metrics.sample_value(
            "permission_checks_total", {"family": "tenant", "decision": "allow"}
        ) == 1.0
        assert metrics.sample_value(
            "permission_checks_total", {"family": "tenant", "decision": "deny"}
        ) == 1.0
        assert metrics.sample_value(
            "permission_checks_total", {"family": "unknown", "decision": "deny"}
        ) == 1.0
        assert metrics.sample_value(
            "permission_check_duration_seconds_count", {"operation": "has_permission"}
        ) == 3.0

    def test_aggregates(self, permission_service, context_factory, admin_role):
        """Test aggregate checks delegate to the engine."""
        context = context_factory(roles=[admin_role])

        assert permission_service.has_all_permissions(context, ["tenant.view", "tenant.media.view"]) is True
        assert permission_service.has_any_permission(context, ["tenant.billing.manage"]) is False

    def test_permission_map(self, permission_service, metrics, context_factory, admin_role):
        """Test the map matches single checks and counts every node."""
        context = context_factory(roles=[admin_role])
        nodes = ["tenant.view", "tenant.billing.manage", "ai.text.use"]

        decisions = permission_service.permission_map(context, nodes)

        assert decisions == {node: permission_service.has_permission(context, node) for node in nodes}
        assert metrics.sample_value(
            "permission_checks_total", {"family": "ai", "decision": "deny"}
        ) == 2.0

    def test_explain(self, permission_service, context_factory, admin_role):
        """Test explanation through the facade."""
        result = permission_service.explain(context_factory(roles=[admin_role]), "tenant.billing.manage")

        assert result.allowed is False
        assert result.denied_by == ["admin"]

    def test_invalid_context_is_counted(self, permission_service, metrics, context_factory):
        """Test contract violations are re-raised and counted."""
        context = context_factory(user_id="")

        with pytest.raises(InvalidContextError):
            permission_service.has_permission(context, "tenant.view")

        assert metrics.sample_value(
            "errors_total", {"error_type": "INVALID_CONTEXT", "service": "permissions"}
        ) == 1.0

    def test_denial_logging(self, metrics, context_factory, admin_role):
        """Test denials are explained in the log when enabled."""
        config = ServiceConfig(service_name="permissions", explain_denials=True)
        service = PermissionService(config=config, metrics=metrics)

        with capture_logs() as logs:
            service.has_permission(context_factory(roles=[admin_role]), "tenant.billing.manage")

        denials = [entry for entry in logs if entry["event"] == "Permission denied"]
        assert len(denials) == 1
        assert denials[0]["node"] == "tenant.billing.manage"
        assert denials[0]["reason"] == "Denied by role(s): admin"

    def test_no_denial_logging_by_default(self, permission_service, context_factory, admin_role):
        """Test denials are silent unless enabled."""
        with capture_logs() as logs:
            permission_service.has_permission(context_factory(roles=[admin_role]), "tenant.billing.manage")

        assert not [entry for entry in logs if entry["event"] == "Permission denied"]

    def test_metrics_disabled(self, metrics, context_factory, admin_role):
        """Test nothing is recorded when metrics are off."""
        config = ServiceConfig(service_name="permissions", metrics_enabled=False)
        service = PermissionService(config=config, metrics=metrics)

        assert service.has_permission(context_factory(roles=[admin_role]), "tenant.view") is True
        assert metrics.sample_value(
            "permission_checks_total", {"family": "tenant", "decision": "allow"}
        ) == 0.0


class TestRoleManagement:
    """Test cases for role management checks through the facade."""

    def test_owner_manages_everything(self, permission_service, metrics, context_factory):
        """Test the tenant owner passes even against the Owner role."""
        context = context_factory(is_tenant_owner=True)
        owner_role = build_system_role(SystemRoleKey.OWNER)

        assert permission_service.can_manage_role(context, owner_role) is True
        assert permission_service.can_perform_role_operation(context, owner_role, RoleOperation.DELETE) is True
        assert metrics.sample_value(
            "role_management_checks_total", {"operation": "manage", "decision": "allow"}
        ) == 1.0

    def test_admin_hierarchy(self, permission_service, metrics, context_factory):
        """Test Admin manages Member but not a peer Admin."""
        admin = build_system_role(SystemRoleKey.ADMIN)
        context = context_factory(roles=[admin])

        assert permission_service.can_manage_role(context, build_system_role(SystemRoleKey.MEMBER)) is True
        assert permission_service.can_manage_role(context, admin) is False
        assert permission_service.can_perform_role_operation(
            context, build_system_role(SystemRoleKey.MEMBER), "delete"
        ) is False
        assert metrics.sample_value(
            "role_management_checks_total", {"operation": "delete", "decision": "deny"}
        ) == 1.0

    def test_custom_role_operations(self, permission_service, context_factory, role_factory):
        """Test operations on a custom role below the actor."""
        context = context_factory(roles=[build_system_role(SystemRoleKey.ADMIN)])
        target = role_factory("designer", position=20)

        assert permission_service.can_perform_role_operation(context, target, "edit") is True
        assert permission_service.can_perform_role_operation(context, target, "assign") is True

    def test_invalid_context(self, permission_service, metrics, context_factory, role_factory):
        """Test role checks validate the context."""
        with pytest.raises(InvalidContextError):
            permission_service.can_manage_role(context_factory(tenant_id=""), role_factory("r"))

        assert metrics.sample_value(
            "errors_total", {"error_type": "INVALID_CONTEXT", "service": "permissions"}
        ) == 1.0

    def test_unknown_operation(self, permission_service, context_factory, role_factory):
        """Test unknown operation names are rejected."""
        with pytest.raises(ValueError):
            permission_service.can_perform_role_operation(context_factory(), role_factory("r"), "promote")
