from __future__ import annotations

import re
from datetime import date

from app.application.utils.coercion import is_empty
from app.application.utils.dependency import visible_fields
from app.domain.entities.selection_state import SelectionState, ServiceInstance
from app.domain.entities.service_catalog import FieldType, ServiceDefinition
from app.domain.entities.service_request import RequestForm

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

NAME_MIN_LENGTH = 2
DESCRIPTION_MIN_LENGTH = 10

REQUIRED_FIELD_MESSAGES: dict[str, str] = {
    "name": "Name is required",
    "email": "Email is required",
    "phone": "Phone is required",
    "company": "Company is required",
    "identification": "Identification is required",
    "project_name": "Project name is required",
    "description": "Description is required",
    "location": "Project location is required",
}


def validate_request(form: RequestForm, selection: SelectionState) -> dict[str, str]:
    """
    Check the top-level contact/project data and that at least one service is selected.

    Returns a mapping of field name to error message; a missing key means the field is valid.
    """
    errors: dict[str, str] = {}

    for field_name, message in REQUIRED_FIELD_MESSAGES.items():
        if not str(getattr(form, field_name) or "").strip():
            errors[field_name] = message

    if "name" not in errors and len(form.name.strip()) < NAME_MIN_LENGTH:
        errors["name"] = f"Name must be at least {NAME_MIN_LENGTH} characters"
    if "email" not in errors and not EMAIL_PATTERN.match(form.email.strip()):
        errors["email"] = "Email address is not valid"
    if "description" not in errors and len(form.description.strip()) < DESCRIPTION_MIN_LENGTH:
        errors["description"] = f"Description must be at least {DESCRIPTION_MIN_LENGTH} characters"

    if selection.is_empty:
        errors["selected_services"] = "At least one service must be selected"

    return errors


def validate_instance(service: ServiceDefinition, instance: ServiceInstance) -> dict[str, str]:
    """Check one sample against its service schema. Hidden fields are never checked."""
    errors: dict[str, str] = {}

    for field in visible_fields(service.fields, instance):
        value = instance.get_value(field.field_id)
        if is_empty(value):
            if field.required:
                errors[field.field_id] = f"{field.label} is required"
            continue

        if field.field_type == FieldType.number:
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                errors[field.field_id] = f"{field.label} must be a number"
            elif field.min_value is not None and value < field.min_value:
                errors[field.field_id] = f"{field.label} must be at least {field.min_value:g}"
            elif field.max_value is not None and value > field.max_value:
                errors[field.field_id] = f"{field.label} must be at most {field.max_value:g}"
        elif field.field_type == FieldType.single_select:
            if field.options and str(value) not in field.options:
                errors[field.field_id] = f"{field.label} must be one of: {', '.join(field.options)}"
        elif field.field_type == FieldType.date:
            try:
                date.fromisoformat(str(value))
            except ValueError:
                errors[field.field_id] = f"{field.label} must be a date (YYYY-MM-DD)"

    return errors
