from __future__ import annotations

import logging
from dataclasses import dataclass, field

from app.application.exceptions import SessionNotFoundError, SubmissionContractError, SubmissionUpstreamError
from app.application.ports.session_store import SelectionSessionStorePort
from app.application.ports.submission import SubmissionPort
from app.application.use_cases.payload_builder import build_payload
from app.application.use_cases.validation import validate_request


@dataclass(frozen=True)
class SubmitResult:
    request_id: str | None
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def submitted(self) -> bool:
        return self.request_id is not None


class SubmitServiceRequestUseCase:
    def __init__(self, submission: SubmissionPort, sessions: SelectionSessionStorePort) -> None:
        self._submission = submission
        self._sessions = sessions
        self._logger = logging.getLogger(__name__)

    def execute(self, session_id: str) -> SubmitResult:
        """
        Validate and submit a session's request.

        On success the session is discarded. If the backend fails the session is left
        as it was and the error propagates, so the client can retry without re-entering data.
        """
        session = self._sessions.get(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)

        errors = validate_request(session.form, session.selection)
        if errors:
            self._logger.info(
                "Service request not submitted",
                extra={"session_id": session_id, "reason": ",".join(sorted(errors))},
            )
            return SubmitResult(request_id=None, errors=errors)

        payload = build_payload(session.form, session.selection)
        try:
            request_id = self._submission.submit(payload)
        except (SubmissionUpstreamError, SubmissionContractError) as e:
            self._logger.error("Service request submission failed", extra={"session_id": session_id, "error": str(e)})
            raise

        self._sessions.delete(session_id)
        self._logger.info("Service request submitted", extra={"session_id": session_id, "request_id": request_id})
        return SubmitResult(request_id=request_id)
