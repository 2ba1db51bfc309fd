from __future__ import annotations

from collections.abc import Sequence

from app.application.utils.coercion import is_empty, value_to_text
from app.domain.entities.selection_state import ServiceInstance
from app.domain.entities.service_catalog import FieldDefinition


def is_visible(
    field: FieldDefinition,
    instance: ServiceInstance,
    all_fields: Sequence[FieldDefinition],
) -> bool:
    """
    Decide whether ``field`` is shown for ``instance``.

    A dependent field is visible only when its parent holds a non-empty value whose
    trimmed text equals the trimmed expected value. An unresolvable parent leaves the
    field visible.
    """
    dependency = field.depends_on
    if dependency is None:
        return True

    parent = _resolve_parent(dependency.on_field_name, all_fields)
    if parent is None:
        return True

    current = instance.get_value(parent.field_id)
    if is_empty(current):
        return False
    return value_to_text(current).strip() == value_to_text(dependency.on_value).strip()


def visible_fields(
    fields: Sequence[FieldDefinition],
    instance: ServiceInstance,
) -> list[FieldDefinition]:
    return [field for field in fields if is_visible(field, instance, fields)]


def _resolve_parent(name: str, all_fields: Sequence[FieldDefinition]) -> FieldDefinition | None:
    key = name.strip()
    for candidate in all_fields:
        if candidate.name == key:
            return candidate
    for candidate in all_fields:
        if candidate.field_id == key:
            return candidate
    return None
