from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from pydantic import ValidationError

from app.application.dto.catalog_record import CatalogFieldDTO, CatalogServiceRecordDTO
from app.application.utils.coercion import value_to_text
from app.domain.entities.service_catalog import (
    FieldDefinition,
    FieldDependency,
    FieldType,
    ServiceCatalog,
    ServiceCategory,
    ServiceDefinition,
)

logger = logging.getLogger(__name__)

_BACKEND_FIELD_TYPES: dict[str, FieldType] = {
    "text": FieldType.short_text,
    "short_text": FieldType.short_text,
    "textarea": FieldType.long_text,
    "long_text": FieldType.long_text,
    "number": FieldType.number,
    "select": FieldType.single_select,
    "single_select": FieldType.single_select,
    "checkbox": FieldType.boolean,
    "boolean": FieldType.boolean,
    "date": FieldType.date,
}


@dataclass(frozen=True)
class CatalogProjection:
    catalog: ServiceCatalog
    warnings: list[str] = field(default_factory=list)


@dataclass
class _CategoryBucket:
    category_id: str
    name: str
    code: str
    services: list[ServiceDefinition] = field(default_factory=list)


def project_catalog(records: list[dict[str, Any]]) -> CatalogProjection:
    """
    Turn the flat backend service listing into categories -> services -> ordered fields.

    Malformed records are skipped and reported in ``warnings``; the rest of the
    listing is still projected.
    """
    warnings: list[str] = []
    buckets: dict[str, _CategoryBucket] = {}

    for position, raw in enumerate(records):
        try:
            record = CatalogServiceRecordDTO.model_validate(raw)
        except ValidationError as e:
            _warn(warnings, f"Skipping malformed service record at position {position}", reason=str(e.errors()[:1]))
            continue

        category_id = record.category_ref()
        if category_id is None:
            _warn(
                warnings,
                f"Skipping service {record.id} without a category reference",
                service_id=str(record.id),
            )
            continue

        bucket = buckets.get(category_id)
        if bucket is None:
            category = record.category
            bucket = _CategoryBucket(
                category_id=category_id,
                name=category.name if category and category.name else f"Category {category_id}",
                code=category.code if category else "",
            )
            buckets[category_id] = bucket

        service_id = str(record.id).strip()
        fields = _project_fields(service_id, record.additional_fields or [], warnings)
        bucket.services.append(
            ServiceDefinition(
                service_id=service_id,
                name=record.name,
                code=record.code,
                category_id=bucket.category_id,
                category_name=bucket.name,
                fields=tuple(fields),
            )
        )

    categories = tuple(
        ServiceCategory(
            category_id=bucket.category_id,
            name=bucket.name,
            code=bucket.code,
            services=tuple(bucket.services),
        )
        for bucket in buckets.values()
    )
    return CatalogProjection(catalog=ServiceCatalog(categories=categories), warnings=warnings)


def _project_fields(
    service_id: str,
    raw_fields: list[CatalogFieldDTO],
    warnings: list[str],
) -> list[FieldDefinition]:
    indexed = list(enumerate(raw_fields))
    # sorted() is stable, so equal display orders keep their input order
    indexed.sort(key=lambda item: item[1].display_order if item[1].display_order is not None else item[0])

    fields: list[FieldDefinition] = []
    for position, raw in indexed:
        field_type = _BACKEND_FIELD_TYPES.get((raw.type or "").strip().lower())
        if field_type is None:
            _warn(
                warnings,
                f"Unknown field type {raw.type!r} on service {service_id}, treating as short text",
                service_id=service_id,
                field_id=str(raw.id),
            )
            field_type = FieldType.short_text

        depends_on = None
        if raw.depends_on_field and raw.depends_on_value is not None:
            depends_on = FieldDependency(
                on_field_name=raw.depends_on_field.strip(),
                on_value=value_to_text(raw.depends_on_value),
            )

        fields.append(
            FieldDefinition(
                field_id=str(raw.id).strip(),
                name=raw.schema_name(),
                label=raw.label or raw.schema_name(),
                field_type=field_type,
                required=raw.required,
                options=tuple(option for option in (raw.options or []) if option.strip()),
                display_order=raw.display_order if raw.display_order is not None else position,
                depends_on=depends_on,
                placeholder=raw.placeholder,
                min_value=raw.min_value,
                max_value=raw.max_value,
            )
        )

    known = {f.name for f in fields} | {f.field_id for f in fields}
    for definition in fields:
        if definition.depends_on and definition.depends_on.on_field_name not in known:
            _warn(
                warnings,
                f"Field {definition.name} on service {service_id} depends on unknown field "
                f"{definition.depends_on.on_field_name!r}",
                service_id=service_id,
                field_id=definition.field_id,
            )
    return fields


def _warn(warnings: list[str], message: str, **context: str) -> None:
    warnings.append(message)
    logger.warning(message, extra=context)
