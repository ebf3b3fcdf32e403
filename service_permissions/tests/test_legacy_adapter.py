"""
Unit tests for the legacy role adapter.
"""

import pytest

from shared.errors import UnknownLegacyRoleError
from service_permissions.app.evaluation import evaluate_permission
from service_permissions.app.legacy.adapter import (
    LegacyProjectRole,
    LegacyWorkspaceRole,
    build_legacy_project_role,
    build_legacy_workspace_role,
    build_roles_from_legacy_workspace_role,
    get_legacy_project_role_permissions,
    get_legacy_workspace_role_permissions,
    normalize_legacy_workspace_role,
)
from service_permissions.app.legacy.matrix import LEGACY_ADMIN_PERMISSIONS
from service_permissions.app.registry import (
    ALL_PROJECT_PERMISSIONS,
    ALL_TENANT_PERMISSIONS,
    DEFAULT_GUEST_PERMISSIONS,
    DEFAULT_MEMBER_PERMISSIONS,
    PERMISSION_CATALOG,
)
from service_permissions.app.roles import (
    ADMIN_POSITION,
    GUEST_POSITION,
    MEMBER_POSITION,
    OWNER_POSITION,
    PROJECT_OWNER_POSITION,
    SystemRoleKey,
)


class TestWorkspaceMatrix:
    """Test cases for workspace label permission sets."""

    def test_owner(self):
        """Test Owner covers every tenant node and no project node."""
        permissions = get_legacy_workspace_role_permissions("Owner")

        assert set(ALL_TENANT_PERMISSIONS) <= permissions
        assert "tenant.billing.manage" in permissions
        assert not permissions & set(ALL_PROJECT_PERMISSIONS)

    def test_admin(self):
        """Test Admin manages people and roles but not billing."""
        permissions = get_legacy_workspace_role_permissions(LegacyWorkspaceRole.ADMIN)

        assert permissions == LEGACY_ADMIN_PERMISSIONS
        assert "tenant.members.invite" in permissions
        assert "tenant.roles.create" in permissions
        assert "tenant.billing.manage" not in permissions
        assert "tenant.settings.edit" not in permissions

    def test_member_and_guest(self):
        """Test Member and Guest match the new-role defaults."""
        assert get_legacy_workspace_role_permissions("Member") == DEFAULT_MEMBER_PERMISSIONS
        assert get_legacy_workspace_role_permissions("Guest") == DEFAULT_GUEST_PERMISSIONS

    def test_sets_only_hold_registered_nodes(self):
        """Test every matrix entry is a registered node."""
        for label in LegacyWorkspaceRole:
            assert get_legacy_workspace_role_permissions(label) <= set(PERMISSION_CATALOG)
        for label in LegacyProjectRole:
            assert get_legacy_project_role_permissions(label) <= set(PERMISSION_CATALOG)

    def test_strictly_decreasing(self):
        """Test each label is a strict subset of the one above it."""
        owner, admin, member, guest = (
            get_legacy_workspace_role_permissions(label) for label in LegacyWorkspaceRole
        )

        assert guest < member < admin < owner

    @pytest.mark.parametrize("label", ["member", "Superuser", "", "Editor"])
    def test_unknown_label(self, label):
        """Test the strict lookup only accepts canonical labels."""
        with pytest.raises(UnknownLegacyRoleError) as exc_info:
            get_legacy_workspace_role_permissions(label)

        assert exc_info.value.code == "UNKNOWN_LEGACY_ROLE"
        assert exc_info.value.details["expected"] == ["Owner", "Admin", "Member", "Guest"]


class TestProjectMatrix:
    """Test cases for project label permission sets."""

    def test_owner(self):
        """Test project Owner gets every project node."""
        assert get_legacy_project_role_permissions("Owner") == frozenset(ALL_PROJECT_PERMISSIONS)

    def test_editor_and_viewer(self):
        """Test Editor writes content; Viewer only reads and comments."""
        editor = get_legacy_project_role_permissions(LegacyProjectRole.EDITOR)
        viewer = get_legacy_project_role_permissions(LegacyProjectRole.VIEWER)

        assert viewer < editor
        assert "project.tasks.create" in editor
        assert "project.delete" not in editor
        assert "project.tasks.create" not in viewer
        assert "project.tasks.comment" in viewer

    def test_unknown_label(self):
        """Test unknown project labels fail fast."""
        with pytest.raises(UnknownLegacyRoleError):
            get_legacy_project_role_permissions("Admin")


class TestNormalize:
    """Test cases for label normalization."""

    @pytest.mark.parametrize("raw, expected", [
        ("Owner", LegacyWorkspaceRole.OWNER),
        ("admin", LegacyWorkspaceRole.ADMIN),
        (" MEMBER ", LegacyWorkspaceRole.MEMBER),
        ("guest", LegacyWorkspaceRole.GUEST),
        ("Editor", LegacyWorkspaceRole.MEMBER),
        ("viewer", LegacyWorkspaceRole.GUEST),
        (LegacyWorkspaceRole.ADMIN, LegacyWorkspaceRole.ADMIN),
    ])
    def test_known_labels(self, raw, expected):
        """Test canonical labels and historical aliases."""
        assert normalize_legacy_workspace_role(raw) is expected

    @pytest.mark.parametrize("raw", [None, 3, "", "superadmin"])
    def test_unknown_labels(self, raw):
        """Test anything else fails fast."""
        with pytest.raises(UnknownLegacyRoleError):
            normalize_legacy_workspace_role(raw)


class TestSyntheticRoles:
    """Test cases for roles built from legacy labels."""

    @pytest.mark.parametrize("label, key, position", [
        ("Owner", SystemRoleKey.OWNER, OWNER_POSITION),
        ("Admin", SystemRoleKey.ADMIN, ADMIN_POSITION),
        ("Member", SystemRoleKey.MEMBER, MEMBER_POSITION),
        ("Guest", SystemRoleKey.GUEST, GUEST_POSITION),
    ])
    def test_workspace_role(self, label, key, position):
        """Test synthetic workspace roles mirror their system counterparts."""
        role = build_legacy_workspace_role(label)

        assert role.id == f"system-{label.lower()}"
        assert role.name == label
        assert role.is_system is True
        assert role.system_key == key
        assert role.position == position
        assert role.permissions.allow == get_legacy_workspace_role_permissions(label)
        assert role.permissions.deny == frozenset()

    def test_project_role(self):
        """Test synthetic project roles are bound to their project."""
        owner = build_legacy_project_role("Owner", "project-1")
        editor = build_legacy_project_role(LegacyProjectRole.EDITOR, "project-1")
        viewer = build_legacy_project_role("Viewer", "project-1")

        assert owner.id == "system-project-owner"
        assert owner.name == "Project Owner"
        assert owner.system_key == SystemRoleKey.PROJECT_OWNER
        assert owner.position == PROJECT_OWNER_POSITION
        assert editor.position == MEMBER_POSITION
        assert editor.system_key is None
        assert viewer.position == GUEST_POSITION
        assert {r.project_id for r in (owner, editor, viewer)} == {"project-1"}

    def test_project_role_needs_project(self):
        """Test a project role without a project is rejected."""
        with pytest.raises(ValueError):
            build_legacy_project_role("Editor", "")

    def test_roles_from_label(self):
        """Test label to role list conversion with aliases."""
        roles = build_roles_from_legacy_workspace_role("viewer")

        assert [r.id for r in roles] == ["system-guest"]

    def test_tenant_owner_overrides_label(self):
        """Test the tenant owner always gets the Owner role."""
        roles = build_roles_from_legacy_workspace_role("Member", tenant_owner_id="u1", user_id="u1")

        assert [r.system_key for r in roles] == [SystemRoleKey.OWNER]

    def test_other_user_keeps_label(self):
        """Test a different user keeps their own label."""
        roles = build_roles_from_legacy_workspace_role("Admin", tenant_owner_id="u1", user_id="u2")

        assert [r.system_key for r in roles] == [SystemRoleKey.ADMIN]

    def test_legacy_role_in_project_context(self, context_factory):
        """Test synthetic project roles evaluate like stored ones."""
        roles = build_roles_from_legacy_workspace_role("Member") + [
            build_legacy_project_role("Viewer", "project-1")
        ]

        inside = context_factory(roles=roles, project_id="project-1")
        elsewhere = context_factory(roles=roles, project_id="project-2")

        assert evaluate_permission(inside, "project.tasks.view") is True
        assert evaluate_permission(inside, "project.tasks.create") is False
        assert evaluate_permission(elsewhere, "project.tasks.view") is False
        assert evaluate_permission(inside, "tenant.media.upload") is True
