from __future__ import annotations

import logging
from typing import Any

import httpx

from app.application.exceptions import SubmissionContractError, SubmissionUpstreamError
from app.application.ports.submission import SubmissionPort
from app.application.utils.coercion import value_to_text
from app.core.config import settings
from app.domain.entities.service_request import PayloadService, SubmissionPayload


class HttpSubmission(SubmissionPort):
    def __init__(
        self,
        base_url: str | None = None,
        api_token: str | None = None,
        timeout: float | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self._base_url = (base_url or settings.BACKEND_BASE_URL or "").rstrip("/")
        self._api_token = api_token if api_token is not None else settings.BACKEND_API_TOKEN
        self._client = client or httpx.Client(timeout=timeout or settings.HTTP_TIMEOUT_SECONDS)
        self._logger = logging.getLogger(__name__)

        if not self._base_url:
            raise ValueError("BACKEND_BASE_URL is required for HTTP submission")

    def submit(self, payload: SubmissionPayload) -> str:
        url = f"{self._base_url}/service-requests"
        headers = {"Content-Type": "application/json"}
        if self._api_token:
            headers["Authorization"] = f"Bearer {self._api_token}"

        try:
            response = self._client.post(url, json=to_backend_request(payload), headers=headers)
            response.raise_for_status()
        except httpx.HTTPError as e:
            self._logger.error("Error submitting service request", extra={"error": str(e)})
            raise SubmissionUpstreamError(f"Service request submission failed: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            raise SubmissionContractError("Service request response is not JSON") from e

        request_id = _extract_id(data)
        if request_id is None:
            raise SubmissionContractError("No request ID returned from service-request API")

        self._logger.info("Service request created", extra={"request_id": request_id})
        return request_id


def to_backend_request(payload: SubmissionPayload) -> dict[str, Any]:
    """Serialize a payload to the backend create-request body."""
    form = payload.form
    return {
        "name": form.name,
        "nameProject": form.project_name,
        "location": form.location,
        "identification": form.identification,
        "phone": form.phone,
        "email": form.email,
        "company": form.company,
        "description": form.description,
        "selectedServices": [_backend_service(service) for service in payload.services],
    }


def _backend_service(service: PayloadService) -> dict[str, Any]:
    values: list[dict[str, str]] = []
    # instance-prefixed names keep values of different samples apart in the flat list
    for index, instance in enumerate(service.instances, start=1):
        for item in instance.additional_data:
            values.append({"fieldName": f"instance_{index}_field_{item.field_id}", "fieldValue": value_to_text(item.value)})
        if instance.notes:
            values.append({"fieldName": f"instance_{index}_notes", "fieldValue": instance.notes})

    body: dict[str, Any] = {
        "serviceId": int(service.service_id) if service.service_id.isdigit() else service.service_id,
        "quantity": sum(instance.quantity for instance in service.instances),
    }
    if values:
        body["additionalValues"] = values
    return body


def _extract_id(data: Any) -> str | None:
    if not isinstance(data, dict):
        return None
    request_id = data.get("id")
    if request_id is None and isinstance(data.get("data"), dict):
        request_id = data["data"].get("id")
    return str(request_id) if request_id is not None else None
