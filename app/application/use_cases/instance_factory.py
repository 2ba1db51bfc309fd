from __future__ import annotations

import uuid
from collections.abc import Callable
from dataclasses import replace

from app.application.utils.coercion import EMPTY_VALUE
from app.domain.entities.selection_state import FieldValue, ServiceInstance
from app.domain.entities.service_catalog import ServiceDefinition


def _new_instance_id() -> str:
    return str(uuid.uuid4())


class InstanceFactory:
    """Create samples for a service with one value slot per declared field."""

    def __init__(self, id_factory: Callable[[], str] | None = None) -> None:
        self._id_factory = id_factory or _new_instance_id

    def new_id(self) -> str:
        return self._id_factory()

    def create(self, service: ServiceDefinition, quantity: int = 1) -> ServiceInstance:
        return ServiceInstance(
            instance_id=self.new_id(),
            quantity=1 if service.has_additional_fields else max(1, int(quantity)),
            additional_data=tuple(FieldValue(field_id=f.field_id, value=EMPTY_VALUE) for f in service.fields),
            notes="",
        )

    def clone(self, instance: ServiceInstance) -> ServiceInstance:
        return replace(instance, instance_id=self.new_id())
