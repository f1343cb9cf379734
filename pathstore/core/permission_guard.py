from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from .permission import Permission


class PermissionGuard:
    """
    Resolves the effective permission of a key.

    Invariant:
    - keys with an explicit override ignore the default policy entirely.
    """

    def __init__(self, permissions: Optional[Mapping[str, Any]] = None, default_policy: Any = Permission.RW):
        self._default_policy = Permission.parse(default_policy)
        self._permissions: Dict[str, Permission] = {}
        for key, level in (permissions or {}).items():
            self._permissions[str(key)] = Permission.parse(level)

    @property
    def default_policy(self) -> Permission:
        return self._default_policy

    @property
    def permissions(self) -> Dict[str, Permission]:
        return dict(self._permissions)

    def permission_of(self, key: str) -> Permission:
        return self._permissions.get(key, self._default_policy)

    def can_read(self, key: str) -> bool:
        return self.permission_of(key).readable

    def can_write(self, key: str) -> bool:
        return self.permission_of(key).writable
