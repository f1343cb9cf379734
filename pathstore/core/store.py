from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Mapping, Optional

from .errors import PermissionDenied
from .path import split_path
from .permission import Permission
from .permission_guard import PermissionGuard
from ..trace.trace_emitter import TraceEmitter

if TYPE_CHECKING:
    from ..config import StoreConfig


class Store:
    """
    Hierarchical key-value container with per-key permissions.

    Paths are colon-delimited ("a:b:c"). Each hop is checked against the
    guard of the Store that owns that key.

    Contracts:
    - read of a missing key returns None; missing permission always raises PermissionDenied.
    - callable values are thunks, invoked on every read (never memoized).
    - write coerces every intermediate segment to a Store, overwriting any
      non-Store value found there.
    - mappings and lists written as values are materialized as nested Stores.
    """

    def __init__(
        self,
        permissions: Optional[Mapping[str, Any]] = None,
        default_policy: Any = Permission.RW,
        *,
        trace: Optional[TraceEmitter] = None,
    ):
        self._guard = PermissionGuard(permissions, default_policy)
        self._storage: Dict[str, Any] = {}
        self._trace = trace

    @classmethod
    def from_config(cls, config: "StoreConfig", *, trace: Optional[TraceEmitter] = None) -> "Store":
        store = cls(config.permissions, config.default_policy, trace=trace)
        store.write_entries(config.entries)
        return store

    @property
    def default_policy(self) -> Permission:
        return self._guard.default_policy

    @property
    def guard(self) -> PermissionGuard:
        return self._guard

    def allowed_to_read(self, key: str) -> bool:
        return self._guard.can_read(key)

    def allowed_to_write(self, key: str) -> bool:
        return self._guard.can_write(key)

    def read(self, path: str) -> Any:
        keys = split_path(path)
        node: Any = self
        for key in keys:
            if not isinstance(node, Store):
                # Indexing into a primitive or a missing key yields nothing.
                return None
            self._require(node, "read", key, path)
            node = node._storage.get(key)
            if callable(node):
                node = node()
        return node

    def write(self, path: str, value: Any) -> Any:
        return self._write(path, value, self._trace)

    def write_entries(self, entries: Mapping[str, Any]) -> None:
        for key, value in entries.items():
            self.write(key, value)

    def entries(self) -> Dict[str, Any]:
        return {k: v for k, v in self._storage.items() if self._guard.can_read(k)}

    def to_dict(self) -> Dict[str, Any]:
        """
        Recursive export of readable keys with thunks resolved.
        """
        out: Dict[str, Any] = {}
        for key, value in self.entries().items():
            if callable(value):
                value = value()
            out[key] = value.to_dict() if isinstance(value, Store) else value
        return out

    def __repr__(self) -> str:
        return f"Store(default_policy={self.default_policy.value!r}, keys={sorted(self._storage.keys())!r})"

    def _write(self, path: str, value: Any, trace: Optional[TraceEmitter]) -> Any:
        keys = split_path(path)
        node = self
        for key in keys[:-1]:
            child = node._storage.get(key)
            if not isinstance(child, Store):
                self._require(node, "write", key, path, trace)
                child = node._new_child()
                node._storage[key] = child
                if trace is not None:
                    trace.emit("container_created", path=path, key=key, operation="write")
            node = child

        last = keys[-1]
        self._require(node, "write", last, path, trace)
        stored = node._normalize(value)
        node._storage[last] = stored
        if trace is not None:
            trace.emit(
                "value_written",
                path=path,
                key=last,
                operation="write",
                data={"value_type": _value_type(stored)},
            )
        return stored

    def _normalize(self, value: Any) -> Any:
        if isinstance(value, Store) or callable(value):
            return value
        if isinstance(value, Mapping):
            items = list(value.items())
        elif isinstance(value, (list, tuple)):
            items = [(str(i), v) for i, v in enumerate(value)]
        else:
            return value

        child = self._new_child()
        for key, v in items:
            child._write(str(key), v, None)
        return child

    def _new_child(self) -> "Store":
        return Store(trace=self._trace)

    def _require(
        self,
        node: "Store",
        operation: str,
        key: str,
        path: str,
        trace: Optional[TraceEmitter] = None,
    ) -> None:
        allowed = node._guard.can_read(key) if operation == "read" else node._guard.can_write(key)
        if allowed:
            return
        err = PermissionDenied.for_access(operation, key, path)
        trace = trace if trace is not None else self._trace
        if trace is not None:
            trace.emit(
                "permission_denied",
                path=path,
                key=key,
                operation=operation,
                message=err.message,
                data={"permission": node._guard.permission_of(key).value},
            )
        raise err


def _value_type(value: Any) -> str:
    if isinstance(value, Store):
        return "store"
    if callable(value):
        return "thunk"
    if value is None:
        return "null"
    return type(value).__name__
