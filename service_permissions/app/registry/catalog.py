"""
Permission catalog for the permission engine.

Single source of truth for every guardable action. The node strings are
persisted inside stored roles, so an entry may be added but never renamed.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple


class PermissionFamily(str, Enum):
    """Disjoint node families; the family decides which assignment scope may grant a node."""
    TENANT = "tenant"
    PROJECT = "project"
    AI = "ai"
    USER = "user"


class DangerLevel(str, Enum):
    """Risk classification shown next to a node in role editors."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(frozen=True)
class PermissionMetadata:
    """Catalog entry for one permission node."""
    node: str
    family: PermissionFamily
    description: str
    danger_level: DangerLevel = DangerLevel.LOW


def _entry(node: str, family: PermissionFamily, description: str,
           danger_level: DangerLevel = DangerLevel.LOW) -> PermissionMetadata:
    if not node.startswith(family.value + "."):
        raise ValueError(f"Node {node!r} does not belong to family {family.value!r}")
    return PermissionMetadata(node, family, description, danger_level)


_ENTRIES: Tuple[PermissionMetadata, ...] = (
    # Tenant - General
    _entry("tenant.view", PermissionFamily.TENANT, "View tenant/workspace shell and basic metadata"),
    _entry("tenant.settings.view", PermissionFamily.TENANT, "View tenant settings"),
    _entry("tenant.settings.edit", PermissionFamily.TENANT, "Edit tenant settings (name, branding, defaults)", DangerLevel.MEDIUM),

    # Tenant - Members & Invites
    _entry("tenant.members.view", PermissionFamily.TENANT, "View workspace members list"),
    _entry("tenant.members.invite", PermissionFamily.TENANT, "Invite workspace members"),
    _entry("tenant.members.remove", PermissionFamily.TENANT, "Remove/disable workspace members", DangerLevel.HIGH),
    _entry("tenant.members.manageRoles", PermissionFamily.TENANT, "Assign/remove roles for workspace members (hierarchy-bound)", DangerLevel.HIGH),
    _entry("tenant.invites.view", PermissionFamily.TENANT, "View workspace invite links / pending invites"),
    _entry("tenant.invites.create", PermissionFamily.TENANT, "Create workspace invite links"),
    _entry("tenant.invites.revoke", PermissionFamily.TENANT, "Revoke workspace invite links"),

    # Tenant - Roles & Hierarchy
    _entry("tenant.roles.view", PermissionFamily.TENANT, "View roles list"),
    _entry("tenant.roles.create", PermissionFamily.TENANT, "Create custom roles", DangerLevel.MEDIUM),
    _entry("tenant.roles.edit", PermissionFamily.TENANT, "Edit roles (name, permissions; hierarchy-bound)", DangerLevel.HIGH),
    _entry("tenant.roles.delete", PermissionFamily.TENANT, "Delete custom roles (hierarchy-bound)", DangerLevel.HIGH),
    _entry("tenant.roles.manageHierarchy", PermissionFamily.TENANT, "Reorder roles / change role positions (hierarchy-bound)", DangerLevel.HIGH),

    # Tenant - Billing, Seats, Subscription
    _entry("tenant.billing.view", PermissionFamily.TENANT, "View billing information (invoices, payment method summary)"),
    _entry("tenant.billing.manage", PermissionFamily.TENANT, "Manage billing (payment method, invoicing details)", DangerLevel.HIGH),
    _entry("tenant.seats.view", PermissionFamily.TENANT, "View seat/license status (owner-managed mode)"),
    _entry("tenant.seats.manage", PermissionFamily.TENANT, "Purchase/assign/revoke seats (owner-managed mode)", DangerLevel.HIGH),
    _entry("tenant.plan.view", PermissionFamily.TENANT, "View subscription plan and entitlements"),
    _entry("tenant.plan.manage", PermissionFamily.TENANT, "Change plan tier or plan settings", DangerLevel.HIGH),

    # Tenant - SSO
    _entry("tenant.sso.view", PermissionFamily.TENANT, "View SSO configuration status"),
    _entry("tenant.sso.configure", PermissionFamily.TENANT, "Configure SSO provider settings", DangerLevel.HIGH),
    _entry("tenant.sso.enforce", PermissionFamily.TENANT, "Enforce SSO for tenant access", DangerLevel.HIGH),

    # Tenant - AI Governance
    _entry("tenant.ai.viewUsage", PermissionFamily.TENANT, "View tenant AI usage summaries"),
    _entry("tenant.ai.managePolicies", PermissionFamily.TENANT, "Manage tenant AI policies", DangerLevel.MEDIUM),
    _entry("tenant.ai.manageAllocations", PermissionFamily.TENANT, "Manage per-user AI allocations", DangerLevel.MEDIUM),
    _entry("tenant.ai.manageProviderKeys", PermissionFamily.TENANT, "Manage AI provider settings (BYO keys)", DangerLevel.HIGH),

    # Tenant - Integrations & Audit
    _entry("tenant.integrations.view", PermissionFamily.TENANT, "View tenant-level integrations"),
    _entry("tenant.integrations.manage", PermissionFamily.TENANT, "Configure tenant-level integrations", DangerLevel.MEDIUM),
    _entry("tenant.audit.view", PermissionFamily.TENANT, "View audit logs"),

    # Tenant - Media Library
    _entry("tenant.media.view", PermissionFamily.TENANT, "View/browse tenant media library"),
    _entry("tenant.media.upload", PermissionFamily.TENANT, "Upload new assets into tenant library"),
    _entry("tenant.media.edit", PermissionFamily.TENANT, "Edit asset metadata (name, tags, folders)"),
    _entry("tenant.media.delete", PermissionFamily.TENANT, "Delete assets from tenant library", DangerLevel.MEDIUM),
    _entry("tenant.media.importUnsplash", PermissionFamily.TENANT, "Import assets from Unsplash"),
    _entry("tenant.media.generateAI", PermissionFamily.TENANT, "Use AI image generation"),
    _entry("tenant.media.reworkAI", PermissionFamily.TENANT, "Use AI image rework/edit"),
    _entry("tenant.media.manageVisibility", PermissionFamily.TENANT, "Change asset visibility/sharing rules"),

    # Tenant - Calendar
    _entry("tenant.calendar.view", PermissionFamily.TENANT, "View tenant/global calendar"),
    _entry("tenant.calendar.manage", PermissionFamily.TENANT, "Create/edit/remove tenant calendar items"),

    # Tenant - Notifications
    _entry("tenant.notifications.view", PermissionFamily.TENANT, "View tenant notification center"),
    _entry("tenant.notifications.manage", PermissionFamily.TENANT, "Manage tenant notification rules"),

    # Tenant - User/Profile
    _entry("tenant.users.viewProfiles", PermissionFamily.TENANT, "View extended user profile info"),
    _entry("tenant.users.manageProfiles", PermissionFamily.TENANT, "Edit user profile attributes (admin)", DangerLevel.MEDIUM),

    # Project - General
    _entry("project.view", PermissionFamily.PROJECT, "View the project and access its dashboard"),
    _entry("project.settings.view", PermissionFamily.PROJECT, "View project settings"),
    _entry("project.settings.edit", PermissionFamily.PROJECT, "Edit project settings (name, description)", DangerLevel.MEDIUM),
    _entry("project.delete", PermissionFamily.PROJECT, "Delete project", DangerLevel.HIGH),

    # Project - Members
    _entry("project.members.view", PermissionFamily.PROJECT, "View project members list"),
    _entry("project.members.inviteWorkspaceUser", PermissionFamily.PROJECT, "Invite workspace users to the project"),
    _entry("project.members.inviteExternal", PermissionFamily.PROJECT, "Invite external collaborators to the project"),
    _entry("project.members.remove", PermissionFamily.PROJECT, "Remove project members", DangerLevel.MEDIUM),
    _entry("project.members.manageRoles", PermissionFamily.PROJECT, "Assign/remove roles for project members (hierarchy-bound)", DangerLevel.HIGH),

    # Project - Modules
    _entry("project.modules.view", PermissionFamily.PROJECT, "View enabled/available modules"),
    _entry("project.modules.enableDisable", PermissionFamily.PROJECT, "Enable/disable project modules", DangerLevel.MEDIUM),

    # Project - Tasks
    _entry("project.tasks.view", PermissionFamily.PROJECT, "View tasks and task lists/boards"),
    _entry("project.tasks.create", PermissionFamily.PROJECT, "Create tasks"),
    _entry("project.tasks.edit", PermissionFamily.PROJECT, "Edit tasks (subject to ownership policy)"),
    _entry("project.tasks.editAny", PermissionFamily.PROJECT, "Edit any task regardless of ownership", DangerLevel.MEDIUM),
    _entry("project.tasks.delete", PermissionFamily.PROJECT, "Delete tasks (subject to ownership policy)"),
    _entry("project.tasks.deleteAny", PermissionFamily.PROJECT, "Delete any task regardless of ownership", DangerLevel.MEDIUM),
    _entry("project.tasks.assign", PermissionFamily.PROJECT, "Assign/unassign tasks"),
    _entry("project.tasks.changeStatus", PermissionFamily.PROJECT, "Change task status/column/state"),
    _entry("project.tasks.manageSubtasks", PermissionFamily.PROJECT, "Create/edit/delete subtasks"),
    _entry("project.tasks.manageChecklists", PermissionFamily.PROJECT, "Manage checklists within tasks"),
    _entry("project.tasks.comment", PermissionFamily.PROJECT, "Comment on tasks"),
    _entry("project.tasks.attachFiles", PermissionFamily.PROJECT, "Attach files/media to tasks"),
    _entry("project.tasks.manageCustomFields", PermissionFamily.PROJECT, "Create/edit custom fields for tasks", DangerLevel.MEDIUM),

    # Project - Flows
    _entry("project.flows.view", PermissionFamily.PROJECT, "View flows list and flow details"),
    _entry("project.flows.create", PermissionFamily.PROJECT, "Create flows"),
    _entry("project.flows.edit", PermissionFamily.PROJECT, "Edit flow content"),
    _entry("project.flows.delete", PermissionFamily.PROJECT, "Delete flows", DangerLevel.MEDIUM),
    _entry("project.flows.comment", PermissionFamily.PROJECT, "Comment on flows"),
    _entry("project.flows.attachFiles", PermissionFamily.PROJECT, "Attach files/media to flows"),
    _entry("project.flows.advanceStep", PermissionFamily.PROJECT, "Move flow to the next pipeline step"),
    _entry("project.flows.revertStep", PermissionFamily.PROJECT, "Move flow to a previous step"),
    _entry("project.flows.setStep", PermissionFamily.PROJECT, "Set flow to any step (jump)", DangerLevel.MEDIUM),
    _entry("project.flows.requestReview", PermissionFamily.PROJECT, "Mark/request review for a flow"),
    _entry("project.flows.approve", PermissionFamily.PROJECT, "Approve a flow review", DangerLevel.MEDIUM),
    _entry("project.flows.reject", PermissionFamily.PROJECT, "Reject a flow review"),
    _entry("project.flows.handoffToTasks", PermissionFamily.PROJECT, "Convert/handoff flow to tasks"),
    _entry("project.flows.handoffToSocial", PermissionFamily.PROJECT, "Handoff flow to Social module"),
    _entry("project.flows.handoffToMarketing", PermissionFamily.PROJECT, "Handoff flow to Marketing module"),

    # Project - Issues
    _entry("project.issues.view", PermissionFamily.PROJECT, "View issues"),
    _entry("project.issues.create", PermissionFamily.PROJECT, "Create issues"),
    _entry("project.issues.edit", PermissionFamily.PROJECT, "Edit issues"),
    _entry("project.issues.delete", PermissionFamily.PROJECT, "Delete issues", DangerLevel.MEDIUM),
    _entry("project.issues.assign", PermissionFamily.PROJECT, "Assign/unassign issues"),
    _entry("project.issues.changeStatus", PermissionFamily.PROJECT, "Change issue status/state"),
    _entry("project.issues.comment", PermissionFamily.PROJECT, "Comment on issues"),
    _entry("project.issues.linkGithub", PermissionFamily.PROJECT, "Link issue to GitHub"),
    _entry("project.issues.unlinkGithub", PermissionFamily.PROJECT, "Unlink issue from GitHub"),

    # Project - Social Accounts
    _entry("project.social.accounts.view", PermissionFamily.PROJECT, "View connected social accounts"),
    _entry("project.social.accounts.connect", PermissionFamily.PROJECT, "Connect a social account", DangerLevel.MEDIUM),
    _entry("project.social.accounts.disconnect", PermissionFamily.PROJECT, "Disconnect a social account", DangerLevel.MEDIUM),

    # Project - Social Campaigns
    _entry("project.social.campaigns.view", PermissionFamily.PROJECT, "View campaigns"),
    _entry("project.social.campaigns.create", PermissionFamily.PROJECT, "Create campaigns"),
    _entry("project.social.campaigns.edit", PermissionFamily.PROJECT, "Edit campaigns"),
    _entry("project.social.campaigns.delete", PermissionFamily.PROJECT, "Delete campaigns", DangerLevel.MEDIUM),

    # Project - Social Posts
    _entry("project.social.posts.view", PermissionFamily.PROJECT, "View posts"),
    _entry("project.social.posts.create", PermissionFamily.PROJECT, "Create posts"),
    _entry("project.social.posts.edit", PermissionFamily.PROJECT, "Edit posts"),
    _entry("project.social.posts.delete", PermissionFamily.PROJECT, "Delete posts", DangerLevel.MEDIUM),
    _entry("project.social.posts.schedule", PermissionFamily.PROJECT, "Schedule posts"),
    _entry("project.social.posts.publish", PermissionFamily.PROJECT, "Publish posts", DangerLevel.HIGH),
    _entry("project.social.posts.approve", PermissionFamily.PROJECT, "Approve posts"),
    _entry("project.social.posts.archive", PermissionFamily.PROJECT, "Archive posts"),

    # Project - Social Assets
    _entry("project.social.assets.manage", PermissionFamily.PROJECT, "Manage social assets"),

    # Project - Marketing Ads
    _entry("project.marketing.ads.view", PermissionFamily.PROJECT, "View paid ad campaigns"),
    _entry("project.marketing.ads.create", PermissionFamily.PROJECT, "Create ad campaigns"),
    _entry("project.marketing.ads.edit", PermissionFamily.PROJECT, "Edit ad campaigns"),
    _entry("project.marketing.ads.delete", PermissionFamily.PROJECT, "Delete ad campaigns", DangerLevel.MEDIUM),

    # Project - Marketing Email
    _entry("project.marketing.email.view", PermissionFamily.PROJECT, "View email campaigns"),
    _entry("project.marketing.email.create", PermissionFamily.PROJECT, "Create email campaigns"),
    _entry("project.marketing.email.edit", PermissionFamily.PROJECT, "Edit email campaigns"),
    _entry("project.marketing.email.send", PermissionFamily.PROJECT, "Send email campaigns", DangerLevel.HIGH),
    _entry("project.marketing.email.manageRecipients", PermissionFamily.PROJECT, "Manage recipient lists"),

    # Project - Marketing Blog
    _entry("project.marketing.blog.view", PermissionFamily.PROJECT, "View blog posts"),
    _entry("project.marketing.blog.create", PermissionFamily.PROJECT, "Create blog posts"),
    _entry("project.marketing.blog.edit", PermissionFamily.PROJECT, "Edit blog posts"),
    _entry("project.marketing.blog.delete", PermissionFamily.PROJECT, "Delete blog posts", DangerLevel.MEDIUM),

    # Project - Marketing Settings
    _entry("project.marketing.settings.view", PermissionFamily.PROJECT, "View marketing settings"),
    _entry("project.marketing.settings.edit", PermissionFamily.PROJECT, "Edit marketing settings", DangerLevel.MEDIUM),

    # Project - Sprints
    _entry("project.sprints.view", PermissionFamily.PROJECT, "View sprints"),
    _entry("project.sprints.create", PermissionFamily.PROJECT, "Create sprints"),
    _entry("project.sprints.edit", PermissionFamily.PROJECT, "Edit sprints"),
    _entry("project.sprints.delete", PermissionFamily.PROJECT, "Delete sprints", DangerLevel.MEDIUM),
    _entry("project.sprints.manageBacklog", PermissionFamily.PROJECT, "Manage sprint backlog"),
    _entry("project.sprints.manageAssignments", PermissionFamily.PROJECT, "Manage sprint assignments"),

    # Project - Milestones
    _entry("project.milestones.view", PermissionFamily.PROJECT, "View milestones"),
    _entry("project.milestones.create", PermissionFamily.PROJECT, "Create milestones"),
    _entry("project.milestones.edit", PermissionFamily.PROJECT, "Edit milestones"),
    _entry("project.milestones.delete", PermissionFamily.PROJECT, "Delete milestones", DangerLevel.MEDIUM),

    # Project - Media
    _entry("project.media.view", PermissionFamily.PROJECT, "Browse/select assets within project context"),
    _entry("project.media.upload", PermissionFamily.PROJECT, "Upload assets from within this project"),
    _entry("project.media.edit", PermissionFamily.PROJECT, "Edit asset metadata within project context"),
    _entry("project.media.delete", PermissionFamily.PROJECT, "Delete assets within project context", DangerLevel.MEDIUM),
    _entry("project.media.importUnsplash", PermissionFamily.PROJECT, "Use Unsplash in project context"),
    _entry("project.media.generateAI", PermissionFamily.PROJECT, "Use AI generation in project context"),
    _entry("project.media.reworkAI", PermissionFamily.PROJECT, "Use AI rework in project context"),

    # Project - Calendar
    _entry("project.calendar.view", PermissionFamily.PROJECT, "View project calendar"),
    _entry("project.calendar.manage", PermissionFamily.PROJECT, "Create/edit/remove calendar items"),

    # Project - Notifications
    _entry("project.notifications.view", PermissionFamily.PROJECT, "View project notifications"),
    _entry("project.notifications.manage", PermissionFamily.PROJECT, "Manage project notification settings"),

    # AI Permissions
    _entry("ai.text.use", PermissionFamily.AI, "Use AI text features (summaries, generation)"),
    _entry("ai.image.generate", PermissionFamily.AI, "Generate images"),
    _entry("ai.image.rework", PermissionFamily.AI, "Rework/edit images"),
    _entry("ai.usage.viewSelf", PermissionFamily.AI, "View own AI usage"),
    _entry("ai.usage.viewTenant", PermissionFamily.AI, "View tenant AI usage"),
    _entry("ai.limits.manageSelf", PermissionFamily.AI, "Manage own AI limits/caps"),
    _entry("ai.limits.manageOthers", PermissionFamily.AI, "Manage other users' AI limits/caps", DangerLevel.MEDIUM),
    _entry("ai.overage.allowSelf", PermissionFamily.AI, "Allow self to exceed AI quotas (billable)", DangerLevel.MEDIUM),
    _entry("ai.overage.allowOthers", PermissionFamily.AI, "Allow others to exceed AI quotas (billable)", DangerLevel.HIGH),

    # User Permissions
    _entry("user.settings.editSelf", PermissionFamily.USER, "Edit own settings"),
)

PERMISSION_CATALOG: Dict[str, PermissionMetadata] = {entry.node: entry for entry in _ENTRIES}

if len(PERMISSION_CATALOG) != len(_ENTRIES):
    raise RuntimeError("Duplicate permission node in catalog")
