from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any, Optional

from pathstore.config import load_store_config
from pathstore.core.errors import PathstoreError
from pathstore.core.store import Store
from pathstore.trace.replay import Replay
from pathstore.trace.trace_emitter import TraceEmitter
from pathstore.trace.trace_store_jsonl import TraceStoreJSONL


def _format_cli_error(e: Exception) -> str:
    """
    Print-friendly error formatting for CLI commands.
    - Always includes code/message (via __str__) when it's a PathstoreError
    - Includes structured `data` payload when present
    """
    if isinstance(e, PathstoreError) and isinstance(e.data, dict) and e.data:
        return str(e) + "\n" + json.dumps(e.data, ensure_ascii=False, indent=2)
    return str(e)


def _to_output(value: Any) -> Any:
    if isinstance(value, Store):
        return value.to_dict()
    return value


def _print_json(value: Any) -> None:
    print(json.dumps(_to_output(value), ensure_ascii=False, indent=2, default=repr))


def _parse_value(raw: str) -> Any:
    # JSON when it parses, otherwise the literal string.
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


def _build_trace(args: argparse.Namespace) -> Optional[TraceEmitter]:
    trace_path = getattr(args, "trace", None)
    if not trace_path:
        return None
    return TraceEmitter(store=TraceStoreJSONL(Path(trace_path)), session_id=args.session_id)


def _open_store(args: argparse.Namespace) -> Store:
    config = load_store_config(Path(args.config))
    return Store.from_config(config, trace=_build_trace(args))


def cmd_check_config(args: argparse.Namespace) -> int:
    try:
        config = load_store_config(Path(args.config))
    except PathstoreError as e:
        print(_format_cli_error(e))
        return 1
    print(
        "OK: default_policy={} permissions={} entries={}".format(
            config.default_policy.value, len(config.permissions), len(config.entries)
        )
    )
    return 0


def cmd_read(args: argparse.Namespace) -> int:
    try:
        store = _open_store(args)
        value = store.read(args.path)
    except PathstoreError as e:
        print(_format_cli_error(e))
        return 1
    _print_json(value)
    return 0


def cmd_write(args: argparse.Namespace) -> int:
    try:
        store = _open_store(args)
        store.write(args.path, _parse_value(args.value))
    except PathstoreError as e:
        print(_format_cli_error(e))
        return 1
    _print_json(store)
    return 0


def cmd_entries(args: argparse.Namespace) -> int:
    try:
        store = _open_store(args)
    except PathstoreError as e:
        print(_format_cli_error(e))
        return 1
    _print_json({k: _to_output(v) for k, v in store.entries().items()})
    return 0


def cmd_show_trace(args: argparse.Namespace) -> int:
    events = list(Replay(Path(args.trace)).iter_events())

    if args.event_type:
        events = [e for e in events if e.get("event_type") == args.event_type]

    if args.tail is not None and args.tail >= 0:
        events = events[-args.tail :] if args.tail else []

    for e in events:
        if args.pretty:
            print(json.dumps(e, ensure_ascii=False, indent=2))
        else:
            print(json.dumps(e, ensure_ascii=False))
    return 0


def _add_store_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--config", required=True, help="Store config path (YAML or JSON)")
    p.add_argument("--trace", help="Trace output path (jsonl)")
    p.add_argument("--session-id", default="session_cli", help="Session ID for trace correlation")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="pstore", description="pathstore CLI")
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_check = sub.add_parser("check-config", help="Validate a store config file")
    p_check.add_argument("--config", required=True, help="Store config path (YAML or JSON)")
    p_check.set_defaults(func=cmd_check_config)

    p_read = sub.add_parser("read", help="Read a colon-delimited path from a configured store")
    _add_store_args(p_read)
    p_read.add_argument("path", help="Path to read (e.g. a:b:c)")
    p_read.set_defaults(func=cmd_read)

    p_write = sub.add_parser("write", help="Write a value and print the resulting readable store")
    _add_store_args(p_write)
    p_write.add_argument("path", help="Path to write (e.g. a:b:c)")
    p_write.add_argument("value", help="Value (parsed as JSON, falls back to a plain string)")
    p_write.set_defaults(func=cmd_write)

    p_entries = sub.add_parser("entries", help="List readable top-level entries")
    _add_store_args(p_entries)
    p_entries.set_defaults(func=cmd_entries)

    p_show_trace = sub.add_parser("show-trace", help="Show trace events from a JSONL file")
    p_show_trace.add_argument("--trace", required=True, help="Trace path (jsonl)")
    p_show_trace.add_argument("--event-type", help="Filter by event_type")
    p_show_trace.add_argument("--tail", type=int, help="Show only last N events")
    p_show_trace.add_argument("--pretty", action="store_true", help="Pretty-print each event as JSON")
    p_show_trace.set_defaults(func=cmd_show_trace)

    args = parser.parse_args(argv)
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
