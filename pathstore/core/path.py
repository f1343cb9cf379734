from __future__ import annotations

from typing import List

from .errors import ValidationError


SEPARATOR = ":"


def split_path(path: str) -> List[str]:
    if not isinstance(path, str) or not path:
        raise ValidationError(code="path.invalid", message="Path must be a non-empty string", data={"path": repr(path)})

    segments = path.split(SEPARATOR)
    if any(not s for s in segments):
        raise ValidationError(
            code="path.invalid",
            message=f"Path segments must be non-empty: {path}",
            data={"path": path},
        )
    return segments
