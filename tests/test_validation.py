"""
Tests for the two validation passes: top-level request data and per-sample schema.
"""

from __future__ import annotations

from dataclasses import replace

from app.application.use_cases.selection import store_field_value
from app.application.use_cases.validation import validate_instance, validate_request
from app.domain.entities.selection_state import SelectionState
from app.domain.entities.service_request import REQUEST_FORM_FIELDS, RequestForm

FILLED_FORM = RequestForm(
    name="Ana Gómez",
    email="ana@constructora.co",
    phone="+57 300 000 0000",
    company="Constructora Andina",
    identification="900123456",
    project_name="Torre Norte",
    description="Soil study for a six floor residential building.",
    location="Bogotá",
)


def test_empty_form_and_selection_report_every_error():
    errors = validate_request(RequestForm(), SelectionState())

    assert set(errors) == set(REQUEST_FORM_FIELDS) | {"selected_services"}


def test_filled_form_with_one_service_is_valid(store):
    store.add_simple_service("103", 1)

    assert validate_request(FILLED_FORM, store.state) == {}


def test_whitespace_only_values_are_missing(store):
    store.add_simple_service("103", 1)

    errors = validate_request(replace(FILLED_FORM, phone="   "), store.state)

    assert set(errors) == {"phone"}


def test_email_pattern(store):
    store.add_simple_service("103", 1)

    for bad in ("ana", "ana@", "ana@host", "ana @host.co"):
        errors = validate_request(replace(FILLED_FORM, email=bad), store.state)
        assert "email" in errors, bad


def test_minimum_lengths(store):
    store.add_simple_service("103", 1)

    errors = validate_request(replace(FILLED_FORM, name="A", description="Too short"), store.state)

    assert set(errors) == {"name", "description"}
    assert "2" in errors["name"]
    assert "10" in errors["description"]


def test_instance_required_visible_fields(catalog, factory):
    service = catalog.get_service("201")
    instance = factory.create(service)

    errors = validate_instance(service, instance)

    # surfaceNotes is hidden until depth == surface, and optional anyway
    assert set(errors) == {"2001"}


def test_hidden_required_field_is_not_checked(catalog, factory, store):
    service = catalog.get_service("301")
    store.add_configured_service("301", [factory.create(service)])
    iid = store.state.services[0].instances[0].instance_id
    for field_id, value in {
        "3001": "Cylinder",
        "3003": "Column C-3",
        "3004": 3000,
        "3005": "M-01",
        "3006": "2026-10-01",
        "3007": "28",
    }.items():
        store.set_field_value("301", iid, field_id, value)
    instance = store.state.services[0].instances[0]

    assert validate_instance(service, instance) == {}

    store.set_field_value("301", iid, "3001", "Core")
    errors = validate_instance(service, store.state.services[0].instances[0])

    assert set(errors) == {"3002"}


def test_instance_number_bounds_select_options_and_dates(catalog, factory, store):
    service = catalog.get_service("101")
    store.add_configured_service("101", [factory.create(service)])
    iid = store.state.services[0].instances[0].instance_id
    store.set_field_value("101", iid, "1001", "Lote 4")
    store.set_field_value("101", iid, "1002", 500)
    store.set_field_value("101", iid, "1003", 80)

    errors = validate_instance(service, store.state.services[0].instances[0])

    assert set(errors) == {"1003"}
    assert "60" in errors["1003"]

    profile = catalog.get_service("201")
    sample = factory.create(profile)
    sample = store_field_value(sample, "2001", "bedrock")
    sample = store_field_value(sample, "2003", "01/10/2026")

    assert set(validate_instance(profile, sample)) == {"2001", "2003"}
