from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any

from app.application.use_cases.instance_factory import InstanceFactory
from app.application.use_cases.selection import SelectionStore, store_field_value
from app.application.use_cases.validation import validate_instance
from app.application.utils.coercion import coerce_value
from app.application.utils.dependency import visible_fields
from app.domain.entities.selection_state import SelectionState, ServiceInstance
from app.domain.entities.service_catalog import FieldDefinition, ServiceDefinition


MISSING_INSTANCE_MESSAGE = "Sample is no longer selected"


@dataclass(frozen=True)
class DraftSaveResult:
    saved: bool
    state: SelectionState
    errors: dict[str, dict[str, str]] = field(default_factory=dict)  # instance_id -> field_id -> message


class InstanceDraft:
    """
    Staged configuration of one service's samples, kept apart from the SelectionStore.

    Nothing reaches the store until ``save`` succeeds; dropping the draft discards it.
    """

    def __init__(
        self,
        service: ServiceDefinition,
        instances: list[ServiceInstance],
        factory: InstanceFactory,
        editing_instance_id: str | None = None,
    ) -> None:
        self._service = service
        self._instances = list(instances)
        self._factory = factory
        self._editing_instance_id = editing_instance_id
        self._logger = logging.getLogger(__name__)

    @classmethod
    def for_new(cls, service: ServiceDefinition, factory: InstanceFactory) -> "InstanceDraft":
        return cls(service, [factory.create(service)], factory)

    @classmethod
    def for_existing(
        cls,
        service: ServiceDefinition,
        instance: ServiceInstance,
        factory: InstanceFactory,
    ) -> "InstanceDraft":
        return cls(service, [instance], factory, editing_instance_id=instance.instance_id)

    @property
    def service(self) -> ServiceDefinition:
        return self._service

    @property
    def instances(self) -> list[ServiceInstance]:
        return list(self._instances)

    @property
    def is_editing(self) -> bool:
        return self._editing_instance_id is not None

    def add_instance(self) -> ServiceInstance | None:
        if self.is_editing:
            return None
        instance = self._factory.create(self._service)
        self._instances.append(instance)
        return instance

    def remove_instance(self, instance_id: str) -> None:
        if self.is_editing:
            return
        self._instances = [inst for inst in self._instances if inst.instance_id != instance_id]

    def set_field_value(self, instance_id: str, field_id: str, value: Any) -> None:
        definition = self._service.get_field(field_id)
        if definition is None:
            self._logger.debug(
                "Ignoring draft value for unknown field",
                extra={"service_id": self._service.service_id, "field_id": field_id},
            )
            return
        coerced = coerce_value(definition, value)
        self._update(instance_id, lambda inst: store_field_value(inst, field_id, coerced))

    def set_notes(self, instance_id: str, notes: str) -> None:
        self._update(instance_id, lambda inst: replace(inst, notes=notes or ""))

    def visible_fields(self, instance_id: str) -> list[FieldDefinition]:
        instance = self._get(instance_id)
        if instance is None:
            return []
        return visible_fields(self._service.fields, instance)

    def validate(self) -> dict[str, dict[str, str]]:
        errors: dict[str, dict[str, str]] = {}
        for instance in self._instances:
            instance_errors = validate_instance(self._service, instance)
            if instance_errors:
                errors[instance.instance_id] = instance_errors
        return errors

    def save(self, store: SelectionStore) -> DraftSaveResult:
        if not self._instances:
            return DraftSaveResult(saved=False, state=store.state)

        errors = self.validate()
        if errors:
            self._logger.info(
                "Instance configuration rejected",
                extra={"service_id": self._service.service_id, "reason": f"{len(errors)} invalid sample(s)"},
            )
            return DraftSaveResult(saved=False, state=store.state, errors=errors)

        if self.is_editing:
            selected = store.state.get_service(self._service.service_id)
            if selected is None or selected.get_instance(self._editing_instance_id) is None:
                self._logger.info(
                    "Edited sample is no longer selected",
                    extra={"service_id": self._service.service_id, "instance_id": self._editing_instance_id},
                )
                return DraftSaveResult(
                    saved=False,
                    state=store.state,
                    errors={self._editing_instance_id: {"instance_id": MISSING_INSTANCE_MESSAGE}},
                )
            state = store.replace_instance(self._service.service_id, self._instances[0])
        else:
            state = store.add_configured_service(self._service.service_id, self._instances)
        return DraftSaveResult(saved=True, state=state)

    def _get(self, instance_id: str) -> ServiceInstance | None:
        for instance in self._instances:
            if instance.instance_id == instance_id:
                return instance
        return None

    def _update(self, instance_id: str, update) -> None:
        self._instances = [update(inst) if inst.instance_id == instance_id else inst for inst in self._instances]
