from .core import Permission, PermissionDenied, PermissionGuard, PathstoreError, Store, ValidationError
from .config import StoreConfig, load_store_config

__all__ = [
  "Permission",
  "PermissionDenied",
  "PermissionGuard",
  "PathstoreError",
  "Store",
  "StoreConfig",
  "ValidationError",
  "load_store_config",
  "__version__",
]

__version__ = "0.1.0"
