"""
Tests for flattening a selection into the submission payload and back.
"""

from __future__ import annotations

from dataclasses import replace

from app.application.use_cases.instance_draft import InstanceDraft
from app.application.use_cases.payload_builder import build_payload, rehydrate
from app.application.utils.dependency import is_visible
from app.domain.entities.service_request import RequestForm


def _values(selection):
    return [
        (s.service_id, [(i.quantity, i.additional_data, i.notes) for i in s.instances])
        for s in selection.services
    ]


def test_payload_shape(catalog, factory, store):
    store.add_simple_service("103", 3)
    draft = InstanceDraft.for_new(catalog.get_service("201"), factory)
    draft.set_field_value(draft.instances[0].instance_id, "2001", "deep")
    draft.set_notes(draft.instances[0].instance_id, "B-1")
    draft.save(store)
    form = RequestForm(name="Ana")

    payload = build_payload(form, store.state)

    assert payload.form is form
    assert [s.service_id for s in payload.services] == ["103", "201"]
    simple, profile = payload.services
    assert simple.instances[0].quantity == 3
    assert simple.instances[0].additional_data == ()
    assert profile.instances[0].quantity == 1
    assert [(v.field_id, v.value) for v in profile.instances[0].additional_data] == [
        ("2001", "deep"),
        ("2002", ""),
        ("2003", ""),
    ]
    assert profile.instances[0].notes == "B-1"


def test_hidden_field_value_is_kept_in_payload(catalog, factory, store):
    """A value entered while visible stays stored and is submitted after its field is hidden."""
    service = catalog.get_service("201")
    store.add_configured_service("201", [factory.create(service)])
    iid = store.state.services[0].instances[0].instance_id
    notes_field = service.get_field("2002")

    store.set_field_value("201", iid, "2001", "surface")
    assert is_visible(notes_field, store.state.services[0].instances[0], service.fields) is True
    store.set_field_value("201", iid, "2002", "Organic top layer")

    store.set_field_value("201", iid, "2001", "deep")
    instance = store.state.services[0].instances[0]
    assert is_visible(notes_field, instance, service.fields) is False
    assert instance.get_value("2002") == "Organic top layer"

    payload = build_payload(RequestForm(), store.state)
    data = {v.field_id: v.value for v in payload.services[0].instances[0].additional_data}

    assert data["2002"] == "Organic top layer"


def test_round_trip_preserves_services_instances_and_values(catalog, factory, store):
    store.add_simple_service("202", 2)
    iid = store.state.services[0].instances[0].instance_id
    store.duplicate_instance("202", iid)
    store.update_instance_quantity("202", iid, 5)
    concrete = catalog.get_service("301")
    store.add_configured_service("301", [factory.create(concrete), factory.create(concrete)])
    for instance in store.state.get_service("301").instances:
        store.set_field_value("301", instance.instance_id, "3001", "Cylinder")
        store.set_field_value("301", instance.instance_id, "3004", 4000)
        store.set_field_value("301", instance.instance_id, "3008", True)

    payload = build_payload(RequestForm(), store.state)
    restored = rehydrate(payload, catalog, factory)

    assert _values(restored) == _values(store.state)
    assert [s.total_quantity for s in restored.services] == [s.total_quantity for s in store.state.services]
    assert [s.service_name for s in restored.services] == ["Grain size analysis", "Concrete cylinder compression test"]
    original_ids = {i.instance_id for s in store.state.services for i in s.instances}
    restored_ids = {i.instance_id for s in restored.services for i in s.instances}
    assert original_ids.isdisjoint(restored_ids)


def test_rehydrate_unknown_service_falls_back_to_id(catalog, factory, store):
    store.add_simple_service("103", 1)
    payload = build_payload(RequestForm(), store.state)

    renamed = replace(payload, services=(replace(payload.services[0], service_id="999"),))
    restored = rehydrate(renamed, catalog, factory)

    assert restored.services[0].service_name == "999"
    assert restored.services[0].category_name is None
