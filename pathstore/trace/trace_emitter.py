from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from .trace_store_jsonl import TraceStoreJSONL


class TraceEmitter:
    def __init__(self, store: TraceStoreJSONL, session_id: str):
        self._store = store
        self._session_id = session_id

    @property
    def session_id(self) -> str:
        return self._session_id

    def emit(
        self,
        event_type: str,
        *,
        path: str | None = None,
        key: str | None = None,
        operation: str | None = None,
        message: str | None = None,
        data: dict[str, Any] | None = None,
    ) -> None:
        event: dict[str, Any] = {
            "ts": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "session_id": self._session_id,
            "event_type": event_type,
        }
        if path is not None:
            event["path"] = path
        if key is not None:
            event["key"] = key
        if operation is not None:
            event["operation"] = operation
        if message is not None:
            event["message"] = message
        if data is not None:
            event["data"] = data

        self._store.append(event)
