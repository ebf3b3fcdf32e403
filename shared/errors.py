"""
Shared error handling for the permission engine.

Every error raised here is a caller contract violation. An ordinary deny is
never an exception: it is a plain ``False``.
"""

from typing import Dict, Any, Iterable, Optional

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Standard error response format."""

    code: str
    message: str
    details: Dict[str, Any] = Field(default_factory=dict)


class PermissionEngineError(Exception):
    """Base exception for the permission engine."""

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        """Convert to error response."""
        return ErrorResponse(
            code=self.code,
            message=self.message,
            details=self.details
        )


class InvalidContextError(PermissionEngineError):
    """Evaluation context is malformed (missing user or tenant)."""

    def __init__(self, message: str = "Invalid evaluation context", details: Optional[Dict[str, Any]] = None):
        super().__init__("INVALID_CONTEXT", message, details)


class UnknownPermissionError(PermissionEngineError):
    """Permission node is not part of the registry."""

    def __init__(self, nodes: Iterable[str], message: Optional[str] = None):
        nodes = sorted(set(nodes))
        super().__init__(
            "UNKNOWN_PERMISSION",
            message or f"Unknown permission node(s): {', '.join(nodes)}",
            {"nodes": nodes}
        )
        self.nodes = nodes


class UnknownLegacyRoleError(PermissionEngineError):
    """Legacy role label outside the known vocabulary."""

    def __init__(self, label: Any, expected: Iterable[str]):
        expected = list(expected)
        super().__init__(
            "UNKNOWN_LEGACY_ROLE",
            f"Unknown legacy role: {label!r}",
            {"label": str(label), "expected": expected}
        )
        self.label = label


class UnknownSystemRoleError(PermissionEngineError):
    """System role key outside the known vocabulary."""

    def __init__(self, key: Any):
        super().__init__("UNKNOWN_SYSTEM_ROLE", f"Unknown system role: {key!r}", {"key": str(key)})
        self.key = key
