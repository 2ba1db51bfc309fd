from __future__ import annotations

from dataclasses import dataclass

from app.application.utils.coercion import is_empty
from app.domain.entities.selection_state import FieldScalar, SelectionState
from app.domain.entities.service_catalog import ServiceCatalog

DEFAULT_CATEGORY = "General"


@dataclass(frozen=True)
class ReviewField:
    field_id: str
    label: str
    display_value: str


@dataclass(frozen=True)
class ReviewInstance:
    position: int  # 1-based, as shown to the client
    quantity: int
    fields: tuple[ReviewField, ...]
    notes: str


@dataclass(frozen=True)
class ReviewService:
    service_id: str
    name: str
    description: str
    total_quantity: int
    instances: tuple[ReviewInstance, ...]


@dataclass(frozen=True)
class ReviewCategory:
    name: str
    services: tuple[ReviewService, ...]


def project_review(selection: SelectionState, catalog: ServiceCatalog | None = None) -> list[ReviewCategory]:
    """Group the selection by category for the confirmation screen. Stored values are shown as is."""
    grouped: dict[str, list[ReviewService]] = {}

    for selected in selection.services:
        definition = catalog.get_service(selected.service_id) if catalog else None
        instances = []
        for position, instance in enumerate(selected.instances, start=1):
            fields = []
            for item in instance.additional_data:
                if is_empty(item.value):
                    continue
                field = definition.get_field(item.field_id) if definition else None
                label = field.label if field else f"Field {item.field_id}"
                fields.append(ReviewField(field_id=item.field_id, label=label, display_value=display_value(item.value)))
            instances.append(
                ReviewInstance(
                    position=position,
                    quantity=instance.quantity,
                    fields=tuple(fields),
                    notes=instance.notes,
                )
            )

        category = selected.category_name or DEFAULT_CATEGORY
        grouped.setdefault(category, []).append(
            ReviewService(
                service_id=selected.service_id,
                name=selected.service_name,
                description=selected.service_description,
                total_quantity=selected.total_quantity,
                instances=tuple(instances),
            )
        )

    return [ReviewCategory(name=name, services=tuple(services)) for name, services in grouped.items()]


def display_value(value: FieldScalar) -> str:
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
