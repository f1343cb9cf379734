from __future__ import annotations

from pathlib import Path


def _package_dir(package_name: str) -> Path:
    """
    Return the on-disk directory for an imported package.

    Note:
    Assumes a filesystem-backed install (wheel or editable). Zip imports are not supported.
    """
    module = __import__(package_name, fromlist=["__file__"])
    p = getattr(module, "__file__", None)
    if not isinstance(p, str) or not p:
        raise RuntimeError(f"Cannot resolve package directory for: {package_name}")
    return Path(p).resolve().parent


def schemas_dir() -> Path:
    """
    Directory that holds the JSON Schemas shipped with pathstore.
    """
    return _package_dir("pathstore") / "schemas"
