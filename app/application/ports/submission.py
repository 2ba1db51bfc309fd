from __future__ import annotations

from abc import ABC, abstractmethod

from app.domain.entities.service_request import SubmissionPayload


class SubmissionPort(ABC):
    @abstractmethod
    def submit(self, payload: SubmissionPayload) -> str:
        """Send a service request. Returns the created request identifier."""
        raise NotImplementedError
