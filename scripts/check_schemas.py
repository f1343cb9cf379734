from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from pathstore.config import CONFIG_SCHEMA, load_store_config  # noqa: E402
from pathstore.core.errors import PathstoreError  # noqa: E402
from pathstore.core.store import Store  # noqa: E402
from pathstore.resources import schemas_dir  # noqa: E402
from pathstore.schema_store import SchemaStore  # noqa: E402


def main() -> int:
    store = SchemaStore(schemas_dir())
    store.load()

    if CONFIG_SCHEMA not in store.list_schema_names():
        print("Missing schema: {}".format(CONFIG_SCHEMA))
        return 1

    schema_errors = store.check_schemas()
    if schema_errors:
        print("Schema validation failed:")
        for name, err in schema_errors:
            print("- {}: {}".format(name, err))
        return 1

    # Every shipped example must load and seed a Store under its own permissions.
    failures = []
    for example in sorted((ROOT / "examples").glob("*.example.y*ml")):
        try:
            Store.from_config(load_store_config(example))
        except PathstoreError as e:
            failures.append((example.name, str(e)))

    if failures:
        print("Example configs failed:")
        for name, err in failures:
            print("- {}: {}".format(name, err))
        return 1

    print("Schemas OK")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
