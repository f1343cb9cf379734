from __future__ import annotations

from enum import Enum
from typing import Any

from .errors import ValidationError


class Permission(str, Enum):
    R = "r"
    W = "w"
    RW = "rw"
    NONE = "none"

    @property
    def readable(self) -> bool:
        return self in (Permission.R, Permission.RW)

    @property
    def writable(self) -> bool:
        return self in (Permission.W, Permission.RW)

    @classmethod
    def parse(cls, value: Any) -> "Permission":
        if isinstance(value, Permission):
            return value
        if isinstance(value, str):
            p = _ALIASES.get(value.strip().lower())
            if p is not None:
                return p
        raise ValidationError(
            code="permission.invalid",
            message=f"Unknown permission level: {value!r}",
            data={"value": repr(value), "allowed": sorted(_ALIASES.keys())},
        )


_ALIASES = {
    "r": Permission.R,
    "read": Permission.R,
    "w": Permission.W,
    "write": Permission.W,
    "rw": Permission.RW,
    "read-write": Permission.RW,
    "none": Permission.NONE,
}
