"""
Capability matrix of the coarse role labels that predate permission nodes.

These sets must keep producing exactly what the old labels allowed; change
them only together with a data migration.
"""

from typing import FrozenSet

from ..registry import (
    ALL_AI_PERMISSIONS,
    ALL_PROJECT_PERMISSIONS,
    ALL_TENANT_PERMISSIONS,
    ALL_USER_PERMISSIONS,
    DEFAULT_GUEST_PERMISSIONS,
    DEFAULT_MEMBER_PERMISSIONS,
)

LEGACY_OWNER_PERMISSIONS: FrozenSet[str] = frozenset(
    ALL_TENANT_PERMISSIONS + ALL_AI_PERMISSIONS + ALL_USER_PERMISSIONS
)

LEGACY_ADMIN_PERMISSIONS: FrozenSet[str] = frozenset({
    "tenant.view",
    "tenant.settings.view",
    "tenant.members.view",
    "tenant.members.invite",
    "tenant.members.remove",
    "tenant.members.manageRoles",
    "tenant.invites.view",
    "tenant.invites.create",
    "tenant.invites.revoke",
    "tenant.roles.view",
    "tenant.roles.create",
    "tenant.roles.edit",
    "tenant.roles.delete",
    "tenant.media.view",
    "tenant.media.upload",
    "tenant.media.edit",
    "tenant.media.delete",
    "ai.text.use",
    "ai.image.generate",
    "ai.image.rework",
    "ai.usage.viewSelf",
    "user.settings.editSelf",
})

LEGACY_MEMBER_PERMISSIONS: FrozenSet[str] = DEFAULT_MEMBER_PERMISSIONS
LEGACY_GUEST_PERMISSIONS: FrozenSet[str] = DEFAULT_GUEST_PERMISSIONS

# Project-level labels
LEGACY_PROJECT_OWNER_PERMISSIONS: FrozenSet[str] = frozenset(ALL_PROJECT_PERMISSIONS)

LEGACY_PROJECT_EDITOR_PERMISSIONS: FrozenSet[str] = frozenset({
    "project.view",
    "project.settings.view",
    "project.members.view",
    "project.tasks.view",
    "project.tasks.create",
    "project.tasks.edit",
    "project.tasks.delete",
    "project.tasks.assign",
    "project.tasks.changeStatus",
    "project.tasks.manageSubtasks",
    "project.tasks.manageChecklists",
    "project.tasks.comment",
    "project.tasks.attachFiles",
    "project.issues.view",
    "project.issues.create",
    "project.issues.edit",
    "project.issues.delete",
    "project.issues.assign",
    "project.issues.changeStatus",
    "project.issues.comment",
    "project.media.view",
    "project.media.upload",
})

LEGACY_PROJECT_VIEWER_PERMISSIONS: FrozenSet[str] = frozenset({
    "project.view",
    "project.members.view",
    "project.tasks.view",
    "project.tasks.comment",
    "project.issues.view",
    "project.media.view",
})
