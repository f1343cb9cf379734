from __future__ import annotations

import json
from pathlib import Path
from typing import Any


def _to_jsonable(value: Any) -> Any:
    # Stores and thunks are not JSON; record what they are, never their contents.
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, dict):
        return {str(k): _to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_jsonable(v) for v in value]
    if callable(value):
        return "<thunk>"
    return f"<{type(value).__name__}>"


class TraceStoreJSONL:
    """
    Append-only JSONL sink for store audit events.
    """

    def __init__(self, path: Path):
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def append(self, event: dict[str, Any]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        line = json.dumps(_to_jsonable(event), ensure_ascii=False)
        with self._path.open("a", encoding="utf-8") as f:
            f.write(line + "\n")
