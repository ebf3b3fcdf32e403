"""
Role and permission set data models.

Engine-side values are frozen dataclasses; the pydantic models are the
boundary used when an administrator creates or edits a role, and are the one
place unknown nodes are reported back as a validation error.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import FrozenSet, Iterable, List, Optional, Tuple

from pydantic import BaseModel, Field, field_validator

from shared.errors import UnknownPermissionError
from ..registry import validate_permission_nodes
from .positions import PROJECT_OWNER_POSITION


class SystemRoleKey(str, Enum):
    """Built-in roles every tenant starts with."""
    OWNER = "OWNER"
    ADMIN = "ADMIN"
    MEMBER = "MEMBER"
    GUEST = "GUEST"
    PROJECT_OWNER = "PROJECT_OWNER"


@dataclass(frozen=True)
class RolePermissions:
    """Allow/deny sets of a role. A node may sit in both; deny wins."""
    allow: FrozenSet[str] = frozenset()
    deny: FrozenSet[str] = frozenset()

    def __post_init__(self):
        object.__setattr__(self, "allow", frozenset(self.allow))
        object.__setattr__(self, "deny", frozenset(self.deny))


@dataclass(frozen=True)
class Role:
    """A named, positioned bundle of allow/deny nodes."""
    id: str
    name: str
    position: int
    is_system: bool = False
    permissions: RolePermissions = field(default_factory=RolePermissions)
    system_key: Optional[SystemRoleKey] = None
    # None for tenant-wide roles
    project_id: Optional[str] = None
    description: Optional[str] = None
    color: Optional[str] = None

    @property
    def is_project_scoped(self) -> bool:
        return self.project_id is not None


@dataclass(frozen=True)
class PermissionEvaluationContext:
    """
    Caller-built snapshot of who is asking and which roles apply.

    ``roles`` must already be deduplicated and filtered to the roles the
    actor currently holds in this scope.
    """
    user_id: str
    tenant_id: str
    is_tenant_owner: bool = False
    roles: Tuple[Role, ...] = ()
    project_id: Optional[str] = None
    is_external: bool = False

    def __post_init__(self):
        if isinstance(self.roles, list):
            object.__setattr__(self, "roles", tuple(self.roles))


@dataclass
class EvaluationResult:
    """Result of a single explained evaluation."""
    node: str
    allowed: bool
    reason: str
    allowed_by: List[str] = field(default_factory=list)
    denied_by: List[str] = field(default_factory=list)
    evaluation_time_ms: float = 0.0


def _unique(nodes: Iterable[str]) -> List[str]:
    return list(dict.fromkeys(nodes))


class RolePermissionsPayload(BaseModel):
    """Allow/deny lists as submitted by an administrator."""
    allow: List[str] = Field(default_factory=list, description="Allowed permission nodes")
    deny: List[str] = Field(default_factory=list, description="Denied permission nodes")

    @field_validator("allow", "deny")
    @classmethod
    def validate_known_nodes(cls, value: List[str]) -> List[str]:
        try:
            validate_permission_nodes(value)
        except UnknownPermissionError as exc:
            raise ValueError(exc.message) from exc
        return _unique(value)

    def to_permissions(self) -> RolePermissions:
        return RolePermissions(allow=frozenset(self.allow), deny=frozenset(self.deny))


class RoleCreateRequest(BaseModel):
    """Request model for creating a custom role."""
    name: str = Field(..., min_length=1, max_length=100, description="Role name")
    position: int = Field(..., lt=PROJECT_OWNER_POSITION, description="Seniority; higher outranks lower")
    permissions: RolePermissionsPayload = Field(default_factory=RolePermissionsPayload)
    project_id: Optional[str] = Field(None, description="Project scope, None for tenant-wide")
    description: Optional[str] = Field(None, description="Role description")
    color: Optional[str] = Field(None, description="Display color")

    def to_role(self, role_id: str) -> Role:
        return Role(
            id=role_id,
            name=self.name,
            position=self.position,
            is_system=False,
            permissions=self.permissions.to_permissions(),
            project_id=self.project_id,
            description=self.description,
            color=self.color,
        )


class RoleUpdateRequest(BaseModel):
    """Request model for updating a role. Unset fields are left alone."""
    name: Optional[str] = Field(None, min_length=1, max_length=100, description="Role name")
    position: Optional[int] = Field(None, lt=PROJECT_OWNER_POSITION, description="New position")
    permissions: Optional[RolePermissionsPayload] = Field(None, description="Replacement allow/deny lists")
    description: Optional[str] = Field(None, description="Role description")
    color: Optional[str] = Field(None, description="Display color")

    def apply_to(self, role: Role) -> Role:
        """Return an updated copy of ``role``. Hierarchy and protection checks belong to the caller."""
        changes = {}
        if self.name is not None:
            changes["name"] = self.name
        if self.position is not None:
            changes["position"] = self.position
        if self.permissions is not None:
            changes["permissions"] = self.permissions.to_permissions()
        if self.description is not None:
            changes["description"] = self.description
        if self.color is not None:
            changes["color"] = self.color
        return replace(role, **changes)


class RoleResponse(BaseModel):
    """Response model for role operations."""
    id: str
    name: str
    position: int
    is_system: bool
    system_key: Optional[SystemRoleKey] = None
    project_id: Optional[str] = None
    allow: List[str]
    deny: List[str]
    description: Optional[str] = None
    color: Optional[str] = None

    @classmethod
    def from_role(cls, role: Role) -> "RoleResponse":
        return cls(
            id=role.id,
            name=role.name,
            position=role.position,
            is_system=role.is_system,
            system_key=role.system_key,
            project_id=role.project_id,
            allow=sorted(role.permissions.allow),
            deny=sorted(role.permissions.deny),
            description=role.description,
            color=role.color,
        )

