from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Iterator


class Replay:
    """
    Reads trace events back from a JSONL file, skipping blank lines.
    """

    def __init__(self, path: Path):
        self._path = path

    def iter_events(self) -> Iterator[Dict[str, Any]]:
        if not self._path.exists():
            return
        with self._path.open("r", encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if not line:
                    continue
                yield json.loads(line)

    def event_types(self) -> list[str]:
        return [e.get("event_type", "") for e in self.iter_events()]
