from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import replace
from typing import Any

from app.application.exceptions import SessionNotFoundError
from app.application.ports.session_store import SelectionSessionStorePort
from app.application.use_cases.instance_draft import DraftSaveResult, InstanceDraft
from app.application.use_cases.instance_factory import InstanceFactory
from app.application.use_cases.load_catalog import LoadCatalogUseCase
from app.application.use_cases.selection import SelectionStore
from app.domain.entities.selection_session import SelectionSession
from app.domain.entities.service_request import REQUEST_FORM_FIELDS


class RequestSessionUseCase:
    """Entry points for one client's request session: form edits, selection mutations, drafts."""

    def __init__(
        self,
        sessions: SelectionSessionStorePort,
        catalog_loader: LoadCatalogUseCase,
        instance_factory: InstanceFactory | None = None,
    ) -> None:
        self._sessions = sessions
        self._catalog_loader = catalog_loader
        self._factory = instance_factory or InstanceFactory()
        self._logger = logging.getLogger(__name__)

    def start(self) -> SelectionSession:
        session = self._sessions.create()
        self._logger.info("Request session started", extra={"session_id": session.session_id})
        return session

    def get(self, session_id: str) -> SelectionSession:
        session = self._sessions.get(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    def discard(self, session_id: str) -> None:
        self.get(session_id)
        self._sessions.delete(session_id)
        self._logger.info("Request session discarded", extra={"session_id": session_id})

    def selection_store(self, session: SelectionSession) -> SelectionStore:
        return SelectionStore(self._catalog_loader.catalog(), self._factory, state=session.selection)

    def update_form(self, session_id: str, updates: dict[str, Any]) -> SelectionSession:
        session = self.get(session_id)
        changes = {key: str(value) for key, value in updates.items() if key in REQUEST_FORM_FIELDS and value is not None}
        session.form = replace(session.form, **changes)
        return self._save(session)

    def mutate(self, session_id: str, operation: Callable[[SelectionStore], Any]) -> SelectionSession:
        """Run one SelectionStore operation against the session and persist the new state."""
        session = self.get(session_id)
        store = self.selection_store(session)
        operation(store)
        session.selection = store.state
        return self._save(session)

    def open_draft(self, session_id: str, service_id: str, instance_id: str | None = None) -> InstanceDraft | None:
        session = self.get(session_id)
        service = self._catalog_loader.catalog().get_service(service_id)
        if service is None or not service.has_additional_fields:
            self._logger.debug("Ignoring draft for service", extra={"session_id": session_id, "service_id": service_id})
            return None

        if instance_id is None:
            draft = InstanceDraft.for_new(service, self._factory)
        else:
            selected = session.selection.get_service(service.service_id)
            instance = selected.get_instance(instance_id) if selected else None
            if instance is None:
                return None
            draft = InstanceDraft.for_existing(service, instance, self._factory)

        session.draft = draft
        self._save(session)
        return draft

    def get_draft(self, session_id: str) -> InstanceDraft | None:
        return self.get(session_id).draft

    def edit_draft(self, session_id: str, operation: Callable[[InstanceDraft], Any]) -> InstanceDraft | None:
        session = self.get(session_id)
        if session.draft is None:
            return None
        operation(session.draft)
        self._save(session)
        return session.draft

    def save_draft(self, session_id: str) -> DraftSaveResult | None:
        session = self.get(session_id)
        if session.draft is None:
            return None
        store = self.selection_store(session)
        result = session.draft.save(store)
        if result.saved:
            session.selection = result.state
            session.draft = None
        self._save(session)
        return result

    def discard_draft(self, session_id: str) -> None:
        session = self.get(session_id)
        session.draft = None
        self._save(session)

    def _save(self, session: SelectionSession) -> SelectionSession:
        session.updated_at = time.time()
        self._sessions.save(session)
        return session
