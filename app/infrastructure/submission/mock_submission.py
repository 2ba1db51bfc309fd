from __future__ import annotations

import logging

from app.application.ports.submission import SubmissionPort
from app.domain.entities.service_request import SubmissionPayload


class MockSubmission(SubmissionPort):
    def __init__(self) -> None:
        self._requests: dict[str, SubmissionPayload] = {}
        self._logger = logging.getLogger(__name__)

    def submit(self, payload: SubmissionPayload) -> str:
        request_id = f"mock_request_{len(self._requests) + 1}"
        self._requests[request_id] = payload
        self._logger.info(
            "Mock service request created",
            extra={"request_id": request_id, "reason": f"{len(payload.services)} service(s)"},
        )
        return request_id

    def get(self, request_id: str) -> SubmissionPayload | None:
        return self._requests.get(request_id)
