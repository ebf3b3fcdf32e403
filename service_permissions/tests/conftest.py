"""
Shared fixtures for permission engine tests.
"""

from typing import Iterable, Optional

import pytest
from prometheus_client import CollectorRegistry

from shared.config import ServiceConfig
from shared.metrics import MetricsCollector
from service_permissions.app.registry import ALL_TENANT_PERMISSIONS
from service_permissions.app.roles.models import PermissionEvaluationContext, Role, RolePermissions
from service_permissions.app.service import PermissionService


def make_role(role_id: str, position: int = 0, allow: Iterable[str] = (), deny: Iterable[str] = (),
              project_id: Optional[str] = None, **kwargs) -> Role:
    """Build a custom role without going through request validation."""
    return Role(
        id=role_id,
        name=kwargs.pop("name", role_id.title()),
        position=position,
        permissions=RolePermissions(allow=frozenset(allow), deny=frozenset(deny)),
        project_id=project_id,
        **kwargs
    )


def make_context(roles: Iterable[Role] = (), is_tenant_owner: bool = False,
                 project_id: Optional[str] = None, user_id: str = "user-2",
                 tenant_id: str = "tenant-1") -> PermissionEvaluationContext:
    return PermissionEvaluationContext(
        user_id=user_id,
        tenant_id=tenant_id,
        is_tenant_owner=is_tenant_owner,
        roles=tuple(roles),
        project_id=project_id,
    )


@pytest.fixture
def role_factory():
    """Factory for custom roles."""
    return make_role


@pytest.fixture
def context_factory():
    """Factory for evaluation contexts."""
    return make_context


@pytest.fixture
def admin_role():
    """Admin that may do every tenant action except billing."""
    return make_role(
        "admin",
        position=100,
        allow=ALL_TENANT_PERMISSIONS,
        deny={"tenant.billing.manage"},
    )


@pytest.fixture
def metrics():
    """Metrics collector on an isolated registry."""
    return MetricsCollector("permissions", registry=CollectorRegistry())


@pytest.fixture
def service_config():
    """Service configuration independent of the environment."""
    return ServiceConfig(
        service_name="permissions",
        metrics_enabled=True,
        explain_denials=False,
    )


@pytest.fixture
def permission_service(service_config, metrics):
    """PermissionService wired to the isolated metrics collector."""
    return PermissionService(config=service_config, metrics=metrics)
