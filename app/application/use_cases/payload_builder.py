from __future__ import annotations

import logging

from app.application.use_cases.instance_factory import InstanceFactory
from app.domain.entities.selection_state import (
    FieldValue,
    SelectedService,
    SelectionState,
    ServiceInstance,
)
from app.domain.entities.service_catalog import ServiceCatalog
from app.domain.entities.service_request import (
    PayloadFieldValue,
    PayloadInstance,
    PayloadService,
    RequestForm,
    SubmissionPayload,
)

logger = logging.getLogger(__name__)


def build_payload(form: RequestForm, selection: SelectionState) -> SubmissionPayload:
    """
    Flatten the selection and the top-level form into the submission object.

    Stored values are copied verbatim, including values of fields that are currently
    hidden by a dependency.
    """
    return SubmissionPayload(
        form=form,
        services=tuple(_payload_service(selected) for selected in selection.services),
    )


def _payload_service(selected: SelectedService) -> PayloadService:
    return PayloadService(
        service_id=selected.service_id,
        instances=tuple(
            PayloadInstance(
                quantity=instance.quantity,
                additional_data=tuple(
                    PayloadFieldValue(field_id=item.field_id, value=item.value)
                    for item in instance.additional_data
                ),
                notes=instance.notes,
            )
            for instance in selected.instances
        ),
    )


def rehydrate(
    payload: SubmissionPayload,
    catalog: ServiceCatalog,
    instance_factory: InstanceFactory | None = None,
) -> SelectionState:
    """Rebuild a SelectionState from a payload, assigning fresh instance ids."""
    factory = instance_factory or InstanceFactory()
    services: list[SelectedService] = []
    seen: set[str] = set()

    for item in payload.services:
        if item.service_id in seen or not item.instances:
            logger.warning("Skipping payload service entry", extra={"service_id": item.service_id})
            continue
        seen.add(item.service_id)

        definition = catalog.get_service(item.service_id)
        has_fields = definition.has_additional_fields if definition else any(i.additional_data for i in item.instances)
        instances = tuple(
            ServiceInstance(
                instance_id=factory.new_id(),
                quantity=1 if has_fields else max(1, instance.quantity),
                additional_data=tuple(
                    FieldValue(field_id=value.field_id, value=value.value) for value in instance.additional_data
                ),
                notes=instance.notes,
            )
            for instance in item.instances
        )
        services.append(
            SelectedService(
                service_id=item.service_id,
                service_name=definition.name if definition else item.service_id,
                service_description=definition.description if definition else item.service_id,
                instances=instances,
                has_additional_fields=has_fields,
                category_id=definition.category_id if definition else None,
                category_name=definition.category_name if definition else None,
            )
        )

    return SelectionState(services=tuple(services))
