from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class PathstoreError(Exception):
    code: str
    message: str
    data: dict[str, Any] | None = None

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"


class ValidationError(PathstoreError):
    pass


class PermissionDenied(PathstoreError):
    """
    Raised at the exact path segment whose permission check failed.

    `data` always carries `operation` (read|write), `key` and `path`.
    """

    @classmethod
    def for_access(cls, operation: str, key: str, path: str) -> "PermissionDenied":
        return cls(
            code="permission.denied",
            message=f"{operation.capitalize()} access denied for key: {key} in path: {path}",
            data={"operation": operation, "key": key, "path": path},
        )

    @property
    def operation(self) -> str | None:
        return (self.data or {}).get("operation")

    @property
    def key(self) -> str | None:
        return (self.data or {}).get("key")

    @property
    def path(self) -> str | None:
        return (self.data or {}).get("path")
