from __future__ import annotations

from dataclasses import dataclass

from app.domain.entities.selection_state import FieldScalar

REQUEST_FORM_FIELDS = (
    "name",
    "email",
    "phone",
    "company",
    "identification",
    "project_name",
    "description",
    "location",
)


@dataclass(frozen=True)
class RequestForm:
    name: str = ""
    email: str = ""
    phone: str = ""
    company: str = ""
    identification: str = ""
    project_name: str = ""
    description: str = ""
    location: str = ""


@dataclass(frozen=True)
class PayloadFieldValue:
    field_id: str
    value: FieldScalar


@dataclass(frozen=True)
class PayloadInstance:
    quantity: int
    additional_data: tuple[PayloadFieldValue, ...]
    notes: str


@dataclass(frozen=True)
class PayloadService:
    service_id: str
    instances: tuple[PayloadInstance, ...]


@dataclass(frozen=True)
class SubmissionPayload:
    form: RequestForm
    services: tuple[PayloadService, ...]
