"""
Tests for projecting the flat backend service listing into the category tree.
"""

from __future__ import annotations

from app.application.use_cases.catalog_projector import project_catalog
from app.application.use_cases.instance_factory import InstanceFactory
from app.application.use_cases.selection import store_field_value
from app.application.utils.coercion import coerce_value
from app.application.utils.dependency import is_visible
from app.domain.entities.service_catalog import FieldType


def _record(service_id, category_id, fields=None, category_name="Geotechnics"):
    return {
        "id": service_id,
        "categoryId": category_id,
        "code": f"S-{service_id}",
        "name": f"Service {service_id}",
        "category": {"id": category_id, "code": f"C{category_id}", "name": category_name},
        "additionalFields": fields or [],
    }


def test_groups_services_by_category_in_first_appearance_order():
    """Categories keep the order in which they first appear; metadata comes from the first record."""
    records = [
        _record(1, 10, category_name="Laboratory"),
        _record(2, 20, category_name="Concrete"),
        _record(3, 10, category_name="Renamed later"),
    ]

    projection = project_catalog(records)

    categories = projection.catalog.categories
    assert [c.category_id for c in categories] == ["10", "20"]
    assert categories[0].name == "Laboratory"
    assert [s.service_id for s in categories[0].services] == ["1", "3"]
    assert categories[0].services[1].category_name == "Laboratory"
    assert projection.warnings == []


def test_sorts_fields_by_display_order_with_stable_ties():
    """Fields sort ascending by display order; equal orders keep input order."""
    fields = [
        {"id": 1, "fieldName": "c", "label": "C", "type": "text", "displayOrder": 2},
        {"id": 2, "fieldName": "a", "label": "A", "type": "text", "displayOrder": 1},
        {"id": 3, "fieldName": "b", "label": "B", "type": "text", "displayOrder": 2},
    ]

    service = project_catalog([_record(1, 10, fields)]).catalog.get_service("1")

    assert [f.name for f in service.fields] == ["a", "c", "b"]


def test_has_additional_fields_is_derived_from_schema():
    with_fields = _record(1, 10, [{"id": 1, "fieldName": "x", "label": "X", "type": "number"}])
    without_fields = _record(2, 10)

    catalog = project_catalog([with_fields, without_fields]).catalog

    assert catalog.get_service("1").has_additional_fields is True
    assert catalog.get_service("2").has_additional_fields is False


def test_maps_backend_field_types_and_dependency():
    fields = [
        {"id": 1, "fieldName": "kind", "label": "Kind", "type": "select", "options": ["Core", "Beam", " "]},
        {"id": 2, "fieldName": "diameter", "label": "Diameter", "type": "number",
         "dependsOnField": "kind", "dependsOnValue": "Core", "min": 10, "max": 200},
        {"id": 3, "fieldName": "notes", "label": "Notes", "type": "textarea"},
        {"id": 4, "fieldName": "cured", "label": "Cured", "type": "checkbox"},
        {"id": 5, "fieldName": "cast", "label": "Cast", "type": "date"},
    ]

    service = project_catalog([_record(1, 10, fields)]).catalog.get_service("1")
    kind, diameter, notes, cured, cast = service.fields

    assert kind.field_type == FieldType.single_select
    assert kind.options == ("Core", "Beam")
    assert diameter.field_type == FieldType.number
    assert diameter.depends_on.on_field_name == "kind"
    assert diameter.depends_on.on_value == "Core"
    assert diameter.min_value == 10
    assert diameter.max_value == 200
    assert notes.field_type == FieldType.long_text
    assert cured.field_type == FieldType.boolean
    assert cast.field_type == FieldType.date


def test_skips_record_without_category_reference():
    """A malformed record is reported as a warning; the rest of the listing still projects."""
    broken = {"id": 9, "code": "X", "name": "No category", "additionalFields": []}

    projection = project_catalog([broken, _record(1, 10)])

    assert projection.catalog.get_service("9") is None
    assert projection.catalog.get_service("1") is not None
    assert len(projection.warnings) == 1
    assert "category" in projection.warnings[0]


def test_skips_structurally_invalid_record():
    projection = project_catalog([{"categoryId": 10}, _record(1, 10)])

    assert [s.service_id for s in projection.catalog.all_services()] == ["1"]
    assert len(projection.warnings) == 1


def test_category_reference_from_nested_category():
    record = _record(1, 10)
    del record["categoryId"]

    projection = project_catalog([record])

    assert projection.catalog.get_service("1").category_id == "10"


def test_unknown_field_type_falls_back_to_short_text_with_warning():
    fields = [{"id": 1, "fieldName": "x", "label": "X", "type": "color"}]

    projection = project_catalog([_record(1, 10, fields)])

    assert projection.catalog.get_service("1").fields[0].field_type == FieldType.short_text
    assert len(projection.warnings) == 1


def test_warns_on_dependency_to_undeclared_field():
    fields = [
        {"id": 1, "fieldName": "x", "label": "X", "type": "text", "dependsOnField": "missing", "dependsOnValue": "y"},
    ]

    projection = project_catalog([_record(1, 10, fields)])

    assert projection.catalog.get_service("1").fields[0].depends_on is not None
    assert any("missing" in warning for warning in projection.warnings)


def test_null_additional_fields_projects_schema_less_service():
    record = _record(1, 10)
    record["additionalFields"] = None

    service = project_catalog([record]).catalog.get_service("1")

    assert service.fields == ()
    assert service.description == "S-1 - Service 1"


def test_non_text_dependency_values_match_coerced_parents():
    """Boolean and integral float dependency values compare against the stored parent value."""
    records = [
        _record(
            1,
            10,
            fields=[
                {"id": 10, "fieldName": "flag", "label": "Flag", "type": "checkbox"},
                {"id": 11, "fieldName": "flagDetail", "label": "Detail", "type": "text",
                 "dependsOnField": "flag", "dependsOnValue": True},
                {"id": 12, "fieldName": "floors", "label": "Floors", "type": "number"},
                {"id": 13, "fieldName": "floorNotes", "label": "Notes", "type": "text",
                 "dependsOnField": "floors", "dependsOnValue": 5.0},
            ],
        )
    ]

    service = project_catalog(records).catalog.get_service("1")
    instance = InstanceFactory(id_factory=lambda: "i-1").create(service)
    flag_detail, floor_notes = service.get_field("11"), service.get_field("13")

    assert flag_detail.depends_on.on_value == "true"
    assert floor_notes.depends_on.on_value == "5"

    instance = store_field_value(instance, "10", coerce_value(service.get_field("10"), "yes"))
    instance = store_field_value(instance, "12", coerce_value(service.get_field("12"), "5"))

    assert is_visible(flag_detail, instance, service.fields) is True
    assert is_visible(floor_notes, instance, service.fields) is True

    instance = store_field_value(instance, "10", False)

    assert is_visible(flag_detail, instance, service.fields) is False
