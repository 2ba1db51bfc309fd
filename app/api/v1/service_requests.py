from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from app.api.v1.schemas import (
    AddSimpleServiceSchema,
    CatalogResponseSchema,
    DraftInstanceSchema,
    DraftSaveResponseSchema,
    DraftSchema,
    FieldDefinitionSchema,
    FieldDependencySchema,
    FieldValueSchema,
    InstanceUpdateSchema,
    NotesSchema,
    OpenDraftSchema,
    PayloadInstanceSchema,
    PayloadSchema,
    PayloadServiceSchema,
    RequestFormSchema,
    RequestFormUpdateSchema,
    ReviewCategorySchema,
    ReviewFieldSchema,
    ReviewInstanceSchema,
    ReviewResponseSchema,
    ReviewServiceSchema,
    SelectedServiceSchema,
    ServiceCategorySchema,
    ServiceDefinitionSchema,
    ServiceInstanceSchema,
    SessionSchema,
    SetFieldValueSchema,
    SubmitResponseSchema,
    ValidationErrorsSchema,
)
from app.application.exceptions import (
    CatalogContractError,
    CatalogUpstreamError,
    SessionNotFoundError,
    SubmissionContractError,
    SubmissionUpstreamError,
)
from app.application.use_cases.instance_draft import InstanceDraft
from app.application.use_cases.load_catalog import LoadCatalogUseCase
from app.application.use_cases.payload_builder import build_payload
from app.application.use_cases.request_session import RequestSessionUseCase
from app.application.use_cases.review_projector import project_review
from app.application.use_cases.submit_request import SubmitServiceRequestUseCase
from app.application.use_cases.validation import validate_request
from app.application.utils.dependency import visible_fields
from app.domain.entities.selection_session import SelectionSession
from app.domain.entities.selection_state import ServiceInstance
from app.domain.entities.service_catalog import FieldDefinition
from app.domain.entities.service_request import REQUEST_FORM_FIELDS, RequestForm
from app.wiring.dependencies import get_catalog_loader, get_request_session_use_case, get_submit_use_case

router = APIRouter()


@router.get("/catalog", response_model=CatalogResponseSchema)
def get_catalog(refresh: bool = False, loader: LoadCatalogUseCase = Depends(get_catalog_loader)):
    try:
        projection = loader.execute(refresh=refresh)
    except (CatalogUpstreamError, CatalogContractError) as e:
        raise HTTPException(status_code=502, detail=str(e))

    return CatalogResponseSchema(
        categories=[
            ServiceCategorySchema(
                id=category.category_id,
                name=category.name,
                code=category.code,
                description=category.description,
                services=[
                    ServiceDefinitionSchema(
                        id=service.service_id,
                        name=service.name,
                        code=service.code,
                        description=service.description,
                        category_id=service.category_id,
                        has_additional_fields=service.has_additional_fields,
                        fields=[_field_schema(f) for f in service.fields],
                    )
                    for service in category.services
                ],
            )
            for category in projection.catalog.categories
        ],
        warnings=projection.warnings,
    )


@router.post("/sessions", response_model=SessionSchema, status_code=201)
def start_session(uc: RequestSessionUseCase = Depends(get_request_session_use_case)):
    return _session_schema(uc.start())


@router.get("/sessions/{session_id}", response_model=SessionSchema)
def get_session(session_id: str, uc: RequestSessionUseCase = Depends(get_request_session_use_case)):
    return _session_schema(_run(lambda: uc.get(session_id)))


@router.delete("/sessions/{session_id}", status_code=204)
def discard_session(session_id: str, uc: RequestSessionUseCase = Depends(get_request_session_use_case)):
    _run(lambda: uc.discard(session_id))


@router.put("/sessions/{session_id}/form", response_model=SessionSchema)
def update_form(
    session_id: str,
    req: RequestFormUpdateSchema,
    uc: RequestSessionUseCase = Depends(get_request_session_use_case),
):
    return _session_schema(_run(lambda: uc.update_form(session_id, req.model_dump(exclude_none=True))))


@router.post("/sessions/{session_id}/services/simple", response_model=SessionSchema)
def add_simple_service(
    session_id: str,
    req: AddSimpleServiceSchema,
    uc: RequestSessionUseCase = Depends(get_request_session_use_case),
):
    session = _run(lambda: uc.mutate(session_id, lambda store: store.add_simple_service(req.service_id, req.quantity)))
    return _session_schema(session)


@router.delete("/sessions/{session_id}/services/{service_id}", response_model=SessionSchema)
def remove_service(
    session_id: str,
    service_id: str,
    uc: RequestSessionUseCase = Depends(get_request_session_use_case),
):
    return _session_schema(_run(lambda: uc.mutate(session_id, lambda store: store.remove_service(service_id))))


@router.patch("/sessions/{session_id}/services/{service_id}/instances/{instance_id}", response_model=SessionSchema)
def update_instance(
    session_id: str,
    service_id: str,
    instance_id: str,
    req: InstanceUpdateSchema,
    uc: RequestSessionUseCase = Depends(get_request_session_use_case),
):
    def apply(store):
        if req.quantity is not None:
            store.update_instance_quantity(service_id, instance_id, req.quantity)
        if req.notes is not None:
            store.set_instance_notes(service_id, instance_id, req.notes)

    return _session_schema(_run(lambda: uc.mutate(session_id, apply)))


@router.post(
    "/sessions/{session_id}/services/{service_id}/instances/{instance_id}/duplicate",
    response_model=SessionSchema,
)
def duplicate_instance(
    session_id: str,
    service_id: str,
    instance_id: str,
    uc: RequestSessionUseCase = Depends(get_request_session_use_case),
):
    session = _run(lambda: uc.mutate(session_id, lambda store: store.duplicate_instance(service_id, instance_id)))
    return _session_schema(session)


@router.delete("/sessions/{session_id}/services/{service_id}/instances/{instance_id}", response_model=SessionSchema)
def remove_instance(
    session_id: str,
    service_id: str,
    instance_id: str,
    uc: RequestSessionUseCase = Depends(get_request_session_use_case),
):
    session = _run(lambda: uc.mutate(session_id, lambda store: store.remove_instance(service_id, instance_id)))
    return _session_schema(session)


@router.put(
    "/sessions/{session_id}/services/{service_id}/instances/{instance_id}/fields/{field_id}",
    response_model=SessionSchema,
)
def set_field_value(
    session_id: str,
    service_id: str,
    instance_id: str,
    field_id: str,
    req: SetFieldValueSchema,
    uc: RequestSessionUseCase = Depends(get_request_session_use_case),
):
    session = _run(
        lambda: uc.mutate(session_id, lambda store: store.set_field_value(service_id, instance_id, field_id, req.value))
    )
    return _session_schema(session)


@router.get(
    "/sessions/{session_id}/services/{service_id}/instances/{instance_id}/visible-fields",
    response_model=list[FieldDefinitionSchema],
)
def get_visible_fields(
    session_id: str,
    service_id: str,
    instance_id: str,
    uc: RequestSessionUseCase = Depends(get_request_session_use_case),
    loader: LoadCatalogUseCase = Depends(get_catalog_loader),
):
    session = _run(lambda: uc.get(session_id))
    selected = session.selection.get_service(service_id)
    instance = selected.get_instance(instance_id) if selected else None
    service = _run(lambda: loader.catalog().get_service(service_id))
    if instance is None or service is None:
        raise HTTPException(status_code=404, detail="Instance not found")
    return [_field_schema(f) for f in visible_fields(service.fields, instance)]


@router.post("/sessions/{session_id}/draft", response_model=DraftSchema)
def open_draft(
    session_id: str,
    req: OpenDraftSchema,
    uc: RequestSessionUseCase = Depends(get_request_session_use_case),
):
    draft = _run(lambda: uc.open_draft(session_id, req.service_id, req.instance_id))
    if draft is None:
        raise HTTPException(status_code=400, detail="Service cannot be configured")
    return _draft_schema(draft)


@router.get("/sessions/{session_id}/draft", response_model=DraftSchema)
def get_draft(session_id: str, uc: RequestSessionUseCase = Depends(get_request_session_use_case)):
    return _draft_schema(_require_draft(uc, session_id))


@router.post("/sessions/{session_id}/draft/instances", response_model=DraftSchema)
def add_draft_instance(session_id: str, uc: RequestSessionUseCase = Depends(get_request_session_use_case)):
    return _draft_schema(_edit_draft(uc, session_id, lambda draft: draft.add_instance()))


@router.delete("/sessions/{session_id}/draft/instances/{instance_id}", response_model=DraftSchema)
def remove_draft_instance(
    session_id: str,
    instance_id: str,
    uc: RequestSessionUseCase = Depends(get_request_session_use_case),
):
    return _draft_schema(_edit_draft(uc, session_id, lambda draft: draft.remove_instance(instance_id)))


@router.put("/sessions/{session_id}/draft/instances/{instance_id}/fields/{field_id}", response_model=DraftSchema)
def set_draft_field_value(
    session_id: str,
    instance_id: str,
    field_id: str,
    req: SetFieldValueSchema,
    uc: RequestSessionUseCase = Depends(get_request_session_use_case),
):
    return _draft_schema(_edit_draft(uc, session_id, lambda draft: draft.set_field_value(instance_id, field_id, req.value)))


@router.put("/sessions/{session_id}/draft/instances/{instance_id}/notes", response_model=DraftSchema)
def set_draft_notes(
    session_id: str,
    instance_id: str,
    req: NotesSchema,
    uc: RequestSessionUseCase = Depends(get_request_session_use_case),
):
    return _draft_schema(_edit_draft(uc, session_id, lambda draft: draft.set_notes(instance_id, req.notes)))


@router.post("/sessions/{session_id}/draft/save", response_model=DraftSaveResponseSchema)
def save_draft(session_id: str, uc: RequestSessionUseCase = Depends(get_request_session_use_case)):
    result = _run(lambda: uc.save_draft(session_id))
    if result is None:
        raise HTTPException(status_code=404, detail="No draft open")
    return DraftSaveResponseSchema(saved=result.saved, errors=result.errors, session=_session_schema(uc.get(session_id)))


@router.delete("/sessions/{session_id}/draft", status_code=204)
def discard_draft(session_id: str, uc: RequestSessionUseCase = Depends(get_request_session_use_case)):
    _run(lambda: uc.discard_draft(session_id))


@router.get("/sessions/{session_id}/errors", response_model=ValidationErrorsSchema)
def get_errors(session_id: str, uc: RequestSessionUseCase = Depends(get_request_session_use_case)):
    session = _run(lambda: uc.get(session_id))
    errors = validate_request(session.form, session.selection)
    return ValidationErrorsSchema(is_valid=not errors, errors=errors)


@router.get("/sessions/{session_id}/review", response_model=ReviewResponseSchema)
def get_review(
    session_id: str,
    uc: RequestSessionUseCase = Depends(get_request_session_use_case),
    loader: LoadCatalogUseCase = Depends(get_catalog_loader),
):
    session = _run(lambda: uc.get(session_id))
    categories = project_review(session.selection, _run(loader.catalog))
    return ReviewResponseSchema(
        categories=[
            ReviewCategorySchema(
                name=category.name,
                services=[
                    ReviewServiceSchema(
                        service_id=service.service_id,
                        name=service.name,
                        description=service.description,
                        total_quantity=service.total_quantity,
                        instances=[
                            ReviewInstanceSchema(
                                position=instance.position,
                                quantity=instance.quantity,
                                fields=[
                                    ReviewFieldSchema(field_id=f.field_id, label=f.label, display_value=f.display_value)
                                    for f in instance.fields
                                ],
                                notes=instance.notes,
                            )
                            for instance in service.instances
                        ],
                    )
                    for service in category.services
                ],
            )
            for category in categories
        ]
    )


@router.get("/sessions/{session_id}/payload", response_model=PayloadSchema)
def get_payload(session_id: str, uc: RequestSessionUseCase = Depends(get_request_session_use_case)):
    session = _run(lambda: uc.get(session_id))
    payload = build_payload(session.form, session.selection)
    return PayloadSchema(
        form=_form_schema(payload.form),
        services=[
            PayloadServiceSchema(
                service_id=service.service_id,
                instances=[
                    PayloadInstanceSchema(
                        quantity=instance.quantity,
                        additional_data=[
                            FieldValueSchema(field_id=v.field_id, value=v.value) for v in instance.additional_data
                        ],
                        notes=instance.notes,
                    )
                    for instance in service.instances
                ],
            )
            for service in payload.services
        ],
    )


@router.post("/sessions/{session_id}/submit", response_model=SubmitResponseSchema, status_code=201)
def submit(session_id: str, uc: SubmitServiceRequestUseCase = Depends(get_submit_use_case)):
    try:
        result = uc.execute(session_id)
    except SessionNotFoundError:
        raise HTTPException(status_code=404, detail="Session not found")
    except (SubmissionUpstreamError, SubmissionContractError) as e:
        raise HTTPException(status_code=502, detail=str(e))

    if not result.submitted:
        raise HTTPException(status_code=422, detail={"errors": result.errors})
    return SubmitResponseSchema(request_id=result.request_id)


def _run(call):
    try:
        return call()
    except SessionNotFoundError:
        raise HTTPException(status_code=404, detail="Session not found")
    except (CatalogUpstreamError, CatalogContractError) as e:
        raise HTTPException(status_code=502, detail=str(e))


def _require_draft(uc: RequestSessionUseCase, session_id: str) -> InstanceDraft:
    draft = _run(lambda: uc.get_draft(session_id))
    if draft is None:
        raise HTTPException(status_code=404, detail="No draft open")
    return draft


def _edit_draft(uc: RequestSessionUseCase, session_id: str, operation) -> InstanceDraft:
    draft = _run(lambda: uc.edit_draft(session_id, operation))
    if draft is None:
        raise HTTPException(status_code=404, detail="No draft open")
    return draft


def _field_schema(field: FieldDefinition) -> FieldDefinitionSchema:
    return FieldDefinitionSchema(
        id=field.field_id,
        name=field.name,
        label=field.label,
        type=field.field_type.value,
        required=field.required,
        options=list(field.options),
        display_order=field.display_order,
        depends_on=(
            FieldDependencySchema(on_field_name=field.depends_on.on_field_name, on_value=field.depends_on.on_value)
            if field.depends_on
            else None
        ),
        placeholder=field.placeholder,
        min_value=field.min_value,
        max_value=field.max_value,
    )


def _form_schema(form: RequestForm) -> RequestFormSchema:
    return RequestFormSchema(**{name: getattr(form, name) for name in REQUEST_FORM_FIELDS})


def _instance_payload(instance: ServiceInstance) -> dict:
    return {
        "instance_id": instance.instance_id,
        "quantity": instance.quantity,
        "additional_data": [FieldValueSchema(field_id=v.field_id, value=v.value) for v in instance.additional_data],
        "notes": instance.notes,
    }


def _session_schema(session: SelectionSession) -> SessionSchema:
    return SessionSchema(
        session_id=session.session_id,
        form=_form_schema(session.form),
        selected_services=[
            SelectedServiceSchema(
                service_id=selected.service_id,
                service_name=selected.service_name,
                service_description=selected.service_description,
                category_name=selected.category_name,
                has_additional_fields=selected.has_additional_fields,
                total_quantity=selected.total_quantity,
                instances=[ServiceInstanceSchema(**_instance_payload(i)) for i in selected.instances],
            )
            for selected in session.selection.services
        ],
        has_draft=session.draft is not None,
    )


def _draft_schema(draft: InstanceDraft) -> DraftSchema:
    return DraftSchema(
        service_id=draft.service.service_id,
        editing=draft.is_editing,
        instances=[
            DraftInstanceSchema(
                **_instance_payload(instance),
                visible_field_ids=[f.field_id for f in draft.visible_fields(instance.instance_id)],
            )
            for instance in draft.instances
        ],
    )
