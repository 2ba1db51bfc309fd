from __future__ import annotations

from dataclasses import dataclass
from typing import Union

FieldScalar = Union[str, int, float, bool]


@dataclass(frozen=True)
class FieldValue:
    field_id: str
    value: FieldScalar = ""


@dataclass(frozen=True)
class ServiceInstance:
    instance_id: str
    quantity: int = 1
    additional_data: tuple[FieldValue, ...] = ()
    notes: str = ""

    def get_value(self, field_id: str) -> FieldScalar | None:
        for item in self.additional_data:
            if item.field_id == field_id:
                return item.value
        return None


def sum_instance_quantities(instances: tuple[ServiceInstance, ...]) -> int:
    """Total units for a schema-less service: one instance may stand for N units."""
    return sum(instance.quantity for instance in instances)


def count_samples(instances: tuple[ServiceInstance, ...]) -> int:
    """Total units for a schema-bearing service: each instance is one physical sample."""
    return len(instances)


@dataclass(frozen=True)
class SelectedService:
    service_id: str
    service_name: str
    service_description: str
    instances: tuple[ServiceInstance, ...]
    has_additional_fields: bool = False  # captured at selection time
    category_id: str | None = None
    category_name: str | None = None

    @property
    def total_quantity(self) -> int:
        if self.has_additional_fields:
            return count_samples(self.instances)
        return sum_instance_quantities(self.instances)

    def get_instance(self, instance_id: str) -> ServiceInstance | None:
        for instance in self.instances:
            if instance.instance_id == instance_id:
                return instance
        return None


@dataclass(frozen=True)
class SelectionState:
    services: tuple[SelectedService, ...] = ()

    @property
    def is_empty(self) -> bool:
        return len(self.services) == 0

    def get_service(self, service_id: str) -> SelectedService | None:
        for service in self.services:
            if service.service_id == service_id:
                return service
        return None

    def is_selected(self, service_id: str) -> bool:
        return self.get_service(service_id) is not None
