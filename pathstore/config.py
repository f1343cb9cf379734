from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from pathstore.core.errors import ValidationError
from pathstore.core.permission import Permission
from pathstore.resources import schemas_dir
from pathstore.schema_store import SchemaStore


CONFIG_SCHEMA = "store_config.schema.json"

_SCHEMAS: Optional[SchemaStore] = None


def _schemas() -> SchemaStore:
    global _SCHEMAS
    if _SCHEMAS is None:
        store = SchemaStore(schemas_dir())
        store.load()
        _SCHEMAS = store
    return _SCHEMAS


@dataclass(frozen=True)
class StoreConfig:
    """
    Resolved construction input for a root Store.
    """

    default_policy: Permission = Permission.RW
    permissions: Dict[str, Permission] = field(default_factory=dict)
    entries: Dict[str, Any] = field(default_factory=dict)
    source: Optional[Path] = None


def _read_document(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    suffix = path.suffix.lower()
    try:
        if suffix in (".yml", ".yaml"):
            return yaml.safe_load(text)
        if suffix == ".json":
            return json.loads(text)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ValidationError(
            code="config.invalid",
            message=f"Config file could not be parsed: {path}",
            data={"errors": [str(e)]},
        ) from e
    raise ValidationError(
        code="config.invalid",
        message=f"Unsupported config extension: {path.name}",
        data={"errors": ["expected .yml, .yaml or .json"]},
    )


def parse_store_config(raw: Any, *, source: Optional[Path] = None) -> StoreConfig:
    if raw is None:
        raw = {}
    errors = _schemas().validate(CONFIG_SCHEMA, raw)
    if errors:
        raise ValidationError(
            code="config.invalid",
            message="Store config does not validate against store_config.schema.json",
            data={"errors": errors},
        )

    permissions = {str(k): Permission.parse(v) for k, v in (raw.get("permissions") or {}).items()}
    return StoreConfig(
        default_policy=Permission.parse(raw.get("default_policy", Permission.RW)),
        permissions=permissions,
        entries=dict(raw.get("entries") or {}),
        source=source,
    )


def load_store_config(path: Path) -> StoreConfig:
    p = Path(path).expanduser()
    if not p.exists():
        raise ValidationError(code="config.invalid", message=f"Config file not found: {p}", data={"errors": []})
    return parse_store_config(_read_document(p), source=p)
