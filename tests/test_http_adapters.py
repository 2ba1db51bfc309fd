"""
Tests for the backend catalog and submission clients.
"""

from __future__ import annotations

import json

import httpx
import pytest

from app.application.exceptions import (
    CatalogContractError,
    CatalogUpstreamError,
    SubmissionContractError,
    SubmissionUpstreamError,
)
from app.domain.entities.service_request import (
    PayloadFieldValue,
    PayloadInstance,
    PayloadService,
    RequestForm,
    SubmissionPayload,
)
from app.infrastructure.catalog.http_catalog import HttpServiceCatalog
from app.infrastructure.submission.http_submission import HttpSubmission, to_backend_request

BASE_URL = "https://backend.test/api"


def _client(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler))


def _payload() -> SubmissionPayload:
    return SubmissionPayload(
        form=RequestForm(
            name="Ana Torres",
            email="ana@constructora.co",
            phone="3001234567",
            company="Constructora Andina",
            identification="900123456",
            project_name="Torre Norte",
            description="Soil study for a ten floor building",
            location="Medellin",
        ),
        services=(
            PayloadService(service_id="103", instances=(PayloadInstance(quantity=2, additional_data=(), notes=""),)),
            PayloadService(
                service_id="301",
                instances=(
                    PayloadInstance(
                        quantity=1,
                        additional_data=(PayloadFieldValue("3004", 4000), PayloadFieldValue("3008", True)),
                        notes="",
                    ),
                    PayloadInstance(quantity=1, additional_data=(PayloadFieldValue("3004", ""),), notes="Beam B-1"),
                ),
            ),
        ),
    )


def test_catalog_fetch_sends_token_and_unwraps_data():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["auth"] = request.headers.get("Authorization")
        return httpx.Response(200, json={"data": [{"id": 1, "name": "Manual test pit"}]})

    records = HttpServiceCatalog(base_url=BASE_URL + "/", api_token="secret", client=_client(handler)).fetch_catalog()

    assert records == [{"id": 1, "name": "Manual test pit"}]
    assert seen == {"url": BASE_URL + "/services", "auth": "Bearer secret"}


def test_catalog_fetch_accepts_bare_list():
    client = _client(lambda request: httpx.Response(200, json=[]))

    assert HttpServiceCatalog(base_url=BASE_URL, api_token="", client=client).fetch_catalog() == []


def test_catalog_fetch_maps_errors():
    failing = _client(lambda request: httpx.Response(503, json={"message": "down"}))
    wrong_shape = _client(lambda request: httpx.Response(200, json={"items": []}))

    with pytest.raises(CatalogUpstreamError):
        HttpServiceCatalog(base_url=BASE_URL, api_token="", client=failing).fetch_catalog()
    with pytest.raises(CatalogContractError):
        HttpServiceCatalog(base_url=BASE_URL, api_token="", client=wrong_shape).fetch_catalog()


def test_catalog_fetch_maps_connection_errors():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(CatalogUpstreamError):
        HttpServiceCatalog(base_url=BASE_URL, api_token="", client=_client(handler)).fetch_catalog()


def test_backend_request_body():
    body = to_backend_request(_payload())

    assert body["name"] == "Ana Torres"
    assert body["nameProject"] == "Torre Norte"
    assert body["location"] == "Medellin"
    simple, concrete = body["selectedServices"]
    assert simple == {"serviceId": 103, "quantity": 2}
    assert concrete["serviceId"] == 301
    assert concrete["quantity"] == 2
    assert concrete["additionalValues"] == [
        {"fieldName": "instance_1_field_3004", "fieldValue": "4000"},
        {"fieldName": "instance_1_field_3008", "fieldValue": "true"},
        {"fieldName": "instance_2_field_3004", "fieldValue": ""},
        {"fieldName": "instance_2_notes", "fieldValue": "Beam B-1"},
    ]


def test_submission_returns_created_id():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        return httpx.Response(201, json={"data": {"id": 77}})

    request_id = HttpSubmission(base_url=BASE_URL, api_token="", client=_client(handler)).submit(_payload())

    assert request_id == "77"
    assert seen["url"] == BASE_URL + "/service-requests"
    assert seen["body"]["email"] == "ana@constructora.co"


def test_submission_maps_errors():
    rejected = _client(lambda request: httpx.Response(400, json={"message": "bad"}))
    no_id = _client(lambda request: httpx.Response(201, json={"ok": True}))

    with pytest.raises(SubmissionUpstreamError):
        HttpSubmission(base_url=BASE_URL, api_token="", client=rejected).submit(_payload())
    with pytest.raises(SubmissionContractError):
        HttpSubmission(base_url=BASE_URL, api_token="", client=no_id).submit(_payload())
