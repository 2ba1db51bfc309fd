from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class FieldType(str, Enum):
    short_text = "short_text"
    long_text = "long_text"
    number = "number"
    single_select = "single_select"
    boolean = "boolean"
    date = "date"


@dataclass(frozen=True)
class FieldDependency:
    on_field_name: str
    on_value: str


@dataclass(frozen=True)
class FieldDefinition:
    field_id: str
    name: str  # schema field name, what dependencies point at
    label: str
    field_type: FieldType = FieldType.short_text
    required: bool = False
    options: tuple[str, ...] = ()
    display_order: int = 0
    depends_on: FieldDependency | None = None
    placeholder: str | None = None
    min_value: float | None = None
    max_value: float | None = None


@dataclass(frozen=True)
class ServiceDefinition:
    service_id: str
    name: str
    code: str
    category_id: str
    category_name: str
    fields: tuple[FieldDefinition, ...] = ()

    @property
    def has_additional_fields(self) -> bool:
        return len(self.fields) > 0

    @property
    def description(self) -> str:
        return f"{self.code} - {self.name}"

    def get_field(self, field_id: str) -> FieldDefinition | None:
        for field in self.fields:
            if field.field_id == field_id:
                return field
        return None


@dataclass(frozen=True)
class ServiceCategory:
    category_id: str
    name: str
    code: str
    services: tuple[ServiceDefinition, ...] = ()

    @property
    def description(self) -> str:
        return f"Services of {self.name}"


@dataclass(frozen=True)
class ServiceCatalog:
    """Read-only category tree loaded once per process."""

    categories: tuple[ServiceCategory, ...] = ()

    def all_services(self) -> list[ServiceDefinition]:
        return [service for category in self.categories for service in category.services]

    def get_service(self, service_id: str) -> ServiceDefinition | None:
        key = str(service_id).strip()
        for category in self.categories:
            for service in category.services:
                if service.service_id == key:
                    return service
        return None

    def get_category(self, category_id: str) -> ServiceCategory | None:
        for category in self.categories:
            if category.category_id == category_id:
                return category
        return None
