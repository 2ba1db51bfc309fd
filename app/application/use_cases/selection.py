from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import replace
from typing import Any

from app.application.use_cases.instance_factory import InstanceFactory
from app.application.utils.coercion import coerce_value
from app.domain.entities.selection_state import (
    FieldValue,
    SelectedService,
    SelectionState,
    ServiceInstance,
)
from app.domain.entities.service_catalog import ServiceCatalog, ServiceDefinition


class SelectionStore:
    """
    Hold the selected services of one request session.

    Every operation replaces ``state`` with a new immutable SelectionState. Calls that
    would break an invariant (quantity edits on samples, unknown ids, ...) are ignored.
    """

    def __init__(
        self,
        catalog: ServiceCatalog,
        instance_factory: InstanceFactory | None = None,
        state: SelectionState | None = None,
    ) -> None:
        self._catalog = catalog
        self._factory = instance_factory or InstanceFactory()
        self._state = state or SelectionState()
        self._logger = logging.getLogger(__name__)

    @property
    def state(self) -> SelectionState:
        return self._state

    @property
    def catalog(self) -> ServiceCatalog:
        return self._catalog

    def add_simple_service(self, service_id: str, quantity: int = 1) -> SelectionState:
        service = self._catalog.get_service(service_id)
        if service is None:
            return self._ignore("add_simple_service", "unknown service", service_id=service_id)
        if service.has_additional_fields:
            return self._ignore("add_simple_service", "service declares additional fields", service_id=service_id)
        if self._state.is_selected(service.service_id):
            return self._ignore("add_simple_service", "service already selected", service_id=service_id)

        instance = self._factory.create(service, quantity=quantity)
        return self._commit(self._state.services + (self._select(service, (instance,)),))

    def add_configured_service(
        self,
        service_id: str,
        instances: Sequence[ServiceInstance],
    ) -> SelectionState:
        service = self._catalog.get_service(service_id)
        if service is None:
            return self._ignore("add_configured_service", "unknown service", service_id=service_id)
        if not service.has_additional_fields:
            return self._ignore("add_configured_service", "service has no additional fields", service_id=service_id)
        if not instances:
            return self._ignore("add_configured_service", "no instances given", service_id=service_id)

        samples = tuple(replace(instance, quantity=1) for instance in instances)
        existing = self._state.get_service(service.service_id)
        if existing is None:
            return self._commit(self._state.services + (self._select(service, samples),))
        return self._replace_service(replace(existing, instances=existing.instances + samples))

    def update_instance_quantity(self, service_id: str, instance_id: str, quantity: int) -> SelectionState:
        selected = self._state.get_service(service_id)
        if selected is None or selected.get_instance(instance_id) is None:
            return self._ignore("update_instance_quantity", "unknown instance", service_id=service_id, instance_id=instance_id)
        if selected.has_additional_fields:
            return self._ignore("update_instance_quantity", "samples are pinned to quantity 1", service_id=service_id, instance_id=instance_id)

        return self._map_instance(selected, instance_id, lambda inst: replace(inst, quantity=max(1, int(quantity))))

    def duplicate_instance(self, service_id: str, instance_id: str) -> SelectionState:
        selected = self._state.get_service(service_id)
        original = selected.get_instance(instance_id) if selected else None
        if selected is None or original is None:
            return self._ignore("duplicate_instance", "unknown instance", service_id=service_id, instance_id=instance_id)

        copy = self._factory.clone(original)
        return self._replace_service(replace(selected, instances=selected.instances + (copy,)))

    def remove_instance(self, service_id: str, instance_id: str) -> SelectionState:
        selected = self._state.get_service(service_id)
        if selected is None or selected.get_instance(instance_id) is None:
            return self._ignore("remove_instance", "unknown instance", service_id=service_id, instance_id=instance_id)

        remaining = tuple(inst for inst in selected.instances if inst.instance_id != instance_id)
        if not remaining:
            return self.remove_service(service_id)
        return self._replace_service(replace(selected, instances=remaining))

    def remove_service(self, service_id: str) -> SelectionState:
        return self._commit(tuple(s for s in self._state.services if s.service_id != service_id))

    def set_field_value(self, service_id: str, instance_id: str, field_id: str, value: Any) -> SelectionState:
        selected = self._state.get_service(service_id)
        service = self._catalog.get_service(service_id)
        field = service.get_field(field_id) if service else None
        if selected is None or selected.get_instance(instance_id) is None:
            return self._ignore("set_field_value", "unknown instance", service_id=service_id, instance_id=instance_id)
        if field is None:
            return self._ignore("set_field_value", "unknown field", service_id=service_id, field_id=field_id)

        coerced = coerce_value(field, value)
        return self._map_instance(selected, instance_id, lambda inst: store_field_value(inst, field_id, coerced))

    def set_instance_notes(self, service_id: str, instance_id: str, notes: str) -> SelectionState:
        selected = self._state.get_service(service_id)
        if selected is None or selected.get_instance(instance_id) is None:
            return self._ignore("set_instance_notes", "unknown instance", service_id=service_id, instance_id=instance_id)
        return self._map_instance(selected, instance_id, lambda inst: replace(inst, notes=notes or ""))

    def replace_instance(self, service_id: str, instance: ServiceInstance) -> SelectionState:
        """Swap in an edited copy of an existing instance (same instance id)."""
        selected = self._state.get_service(service_id)
        if selected is None or selected.get_instance(instance.instance_id) is None:
            return self._ignore(
                "replace_instance", "unknown instance", service_id=service_id, instance_id=instance.instance_id
            )
        if selected.has_additional_fields:
            instance = replace(instance, quantity=1)
        return self._map_instance(selected, instance.instance_id, lambda _: instance)

    def clear(self) -> SelectionState:
        return self._commit(())

    def _select(self, service: ServiceDefinition, instances: tuple[ServiceInstance, ...]) -> SelectedService:
        return SelectedService(
            service_id=service.service_id,
            service_name=service.name,
            service_description=service.description,
            instances=instances,
            has_additional_fields=service.has_additional_fields,
            category_id=service.category_id,
            category_name=service.category_name,
        )

    def _map_instance(
        self,
        selected: SelectedService,
        instance_id: str,
        update: Callable[[ServiceInstance], ServiceInstance],
    ) -> SelectionState:
        instances = tuple(update(inst) if inst.instance_id == instance_id else inst for inst in selected.instances)
        return self._replace_service(replace(selected, instances=instances))

    def _replace_service(self, updated: SelectedService) -> SelectionState:
        return self._commit(
            tuple(updated if s.service_id == updated.service_id else s for s in self._state.services)
        )

    def _commit(self, services: tuple[SelectedService, ...]) -> SelectionState:
        self._state = SelectionState(services=services)
        return self._state

    def _ignore(self, operation: str, reason: str, **context: str) -> SelectionState:
        self._logger.debug("Ignoring %s", operation, extra={"reason": reason, **context})
        return self._state


def store_field_value(instance: ServiceInstance, field_id: str, value: Any) -> ServiceInstance:
    """Write ``value`` into the slot for ``field_id``, appending a slot if none exists."""
    if any(item.field_id == field_id for item in instance.additional_data):
        data = tuple(
            FieldValue(field_id=field_id, value=value) if item.field_id == field_id else item
            for item in instance.additional_data
        )
    else:
        data = instance.additional_data + (FieldValue(field_id=field_id, value=value),)
    return replace(instance, additional_data=data)
