from __future__ import annotations

from typing import Any, Mapping, Optional

from ..core.enums import BreakType
from ..core.exceptions import ValidationError


def require_break_type(value: Any) -> BreakType:
    if isinstance(value, BreakType):
        return value
    try:
        return BreakType(str(value or BreakType.OTHER.value).strip().lower())
    except ValueError:
        raise ValidationError("Invalid break type")


def parse_coordinate(value: Any, field_name: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be numeric")


def optional_bool(value: Any, field_name: str) -> bool:
    if value is None:
        return False
    if not isinstance(value, bool):
        raise ValidationError(f"{field_name} must be true or false")
    return value


def optional_int(value: Any, field_name: str) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer")


def require_mapping(value: Any, field_name: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ValidationError(f"{field_name} must be an object")
    return value
