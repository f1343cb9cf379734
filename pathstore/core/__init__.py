from .errors import PathstoreError, PermissionDenied, ValidationError
from .permission import Permission
from .permission_guard import PermissionGuard
from .path import SEPARATOR, split_path
from .store import Store

__all__ = [
  "PathstoreError",
  "PermissionDenied",
  "ValidationError",
  "Permission",
  "PermissionGuard",
  "SEPARATOR",
  "split_path",
  "Store",
]
