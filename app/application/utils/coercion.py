from __future__ import annotations

from typing import Any

from app.domain.entities.selection_state import FieldScalar
from app.domain.entities.service_catalog import FieldDefinition, FieldType

EMPTY_VALUE = ""

_TRUE_WORDS = {"true", "1", "yes", "on", "si", "sí"}


def is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    return False


def coerce_value(field: FieldDefinition, value: Any) -> FieldScalar:
    """Coerce a raw input to the runtime type declared by ``field``."""
    if field.field_type == FieldType.boolean:
        return _coerce_boolean(value)
    if is_empty(value):
        return EMPTY_VALUE
    if field.field_type == FieldType.number:
        return _coerce_number(value)
    return str(value)


def value_to_text(value: Any) -> str:
    """String form used for dependency comparison and flat wire values."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _coerce_boolean(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_WORDS
    return False


def _coerce_number(value: Any) -> FieldScalar:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    try:
        number = float(str(value).strip().replace(",", "."))
    except ValueError:
        return EMPTY_VALUE
    if number != number or number in (float("inf"), float("-inf")):
        return EMPTY_VALUE
    if number.is_integer():
        return int(number)
    return number
