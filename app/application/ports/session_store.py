from abc import ABC, abstractmethod

from app.domain.entities.selection_session import SelectionSession


class SelectionSessionStorePort(ABC):
    @abstractmethod
    def create(self) -> SelectionSession:
        raise NotImplementedError

    @abstractmethod
    def get(self, session_id: str) -> SelectionSession | None:
        raise NotImplementedError

    @abstractmethod
    def save(self, session: SelectionSession) -> None:
        raise NotImplementedError

    @abstractmethod
    def delete(self, session_id: str) -> None:
        raise NotImplementedError
