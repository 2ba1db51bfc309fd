from __future__ import annotations

import json
import logging
import re
import threading
import time
import uuid
from pathlib import Path
from typing import Any

from app.application.ports.session_store import SelectionSessionStorePort
from app.application.use_cases.instance_draft import InstanceDraft
from app.domain.entities.selection_session import SelectionSession
from app.domain.entities.selection_state import (
    FieldValue,
    SelectedService,
    SelectionState,
    ServiceInstance,
)
from app.domain.entities.service_request import REQUEST_FORM_FIELDS, RequestForm

_SESSION_ID = re.compile(r"^[A-Za-z0-9_-]+$")


class JsonSessionStore(SelectionSessionStorePort):
    """Keep one JSON file per request session. Drafts stay in memory only."""

    def __init__(self, data_dir: str = "./data/sessions") -> None:
        self._data_dir = Path(data_dir)
        self._data_dir.mkdir(parents=True, exist_ok=True)
        self._locks: dict[str, threading.Lock] = {}
        self._lock_lock = threading.Lock()  # Lock for managing locks dict
        self._drafts: dict[str, InstanceDraft] = {}
        self._logger = logging.getLogger(__name__)

    def _get_lock(self, session_id: str) -> threading.Lock:
        """Get or create a lock for a session_id."""
        with self._lock_lock:
            if session_id not in self._locks:
                self._locks[session_id] = threading.Lock()
            return self._locks[session_id]

    def _get_file_path(self, session_id: str) -> Path:
        return self._data_dir / f"{session_id}.json"

    def create(self) -> SelectionSession:
        now = time.time()
        session = SelectionSession(session_id=uuid.uuid4().hex, created_at=now, updated_at=now)
        self.save(session)
        return session

    def get(self, session_id: str) -> SelectionSession | None:
        if not _SESSION_ID.match(session_id or ""):
            return None
        file_path = self._get_file_path(session_id)
        if not file_path.exists():
            return None
        with self._get_lock(session_id):
            # deleted while waiting for the lock
            if not file_path.exists():
                return None
            try:
                with open(file_path, "r", encoding="utf-8") as f:
                    data = json.load(f)
            except (json.JSONDecodeError, IOError) as e:
                self._logger.warning("Unreadable session file", extra={"session_id": session_id, "error": str(e)})
                return None

        session = deserialize_session(data)
        session.draft = self._drafts.get(session_id)
        return session

    def save(self, session: SelectionSession) -> None:
        if session.draft is None:
            self._drafts.pop(session.session_id, None)
        else:
            self._drafts[session.session_id] = session.draft

        file_path = self._get_file_path(session.session_id)
        temp_path = file_path.with_suffix(".json.tmp")
        with self._get_lock(session.session_id):
            try:
                with open(temp_path, "w", encoding="utf-8") as f:
                    json.dump(serialize_session(session), f, indent=2, ensure_ascii=False)
                # Atomic rename
                temp_path.replace(file_path)
            except Exception:
                if temp_path.exists():
                    temp_path.unlink()
                raise

    def delete(self, session_id: str) -> None:
        self._drafts.pop(session_id, None)
        with self._get_lock(session_id):
            self._get_file_path(session_id).unlink(missing_ok=True)
        with self._lock_lock:
            self._locks.pop(session_id, None)


def serialize_session(session: SelectionSession) -> dict[str, Any]:
    return {
        "session_id": session.session_id,
        "form": {name: getattr(session.form, name) for name in REQUEST_FORM_FIELDS},
        "selection": serialize_selection(session.selection),
        "created_at": session.created_at,
        "updated_at": session.updated_at,
        "version": 1,
    }


def deserialize_session(data: dict[str, Any]) -> SelectionSession:
    form_data = data.get("form") or {}
    return SelectionSession(
        session_id=data["session_id"],
        form=RequestForm(**{name: str(form_data.get(name) or "") for name in REQUEST_FORM_FIELDS}),
        selection=deserialize_selection(data.get("selection") or {}),
        created_at=data.get("created_at"),
        updated_at=data.get("updated_at"),
    )


def serialize_selection(state: SelectionState) -> dict[str, Any]:
    return {
        "services": [
            {
                "service_id": service.service_id,
                "service_name": service.service_name,
                "service_description": service.service_description,
                "has_additional_fields": service.has_additional_fields,
                "category_id": service.category_id,
                "category_name": service.category_name,
                "instances": [
                    {
                        "instance_id": instance.instance_id,
                        "quantity": instance.quantity,
                        "additional_data": [
                            {"field_id": item.field_id, "value": item.value} for item in instance.additional_data
                        ],
                        "notes": instance.notes,
                    }
                    for instance in service.instances
                ],
            }
            for service in state.services
        ]
    }


def deserialize_selection(data: dict[str, Any]) -> SelectionState:
    services = []
    for service in data.get("services", []):
        instances = tuple(
            ServiceInstance(
                instance_id=instance["instance_id"],
                quantity=int(instance.get("quantity", 1)),
                additional_data=tuple(
                    FieldValue(field_id=str(item["field_id"]), value=item.get("value", ""))
                    for item in instance.get("additional_data", [])
                ),
                notes=instance.get("notes") or "",
            )
            for instance in service.get("instances", [])
        )
        # a stored service without samples would break the selection invariant
        if not instances:
            continue
        services.append(
            SelectedService(
                service_id=str(service["service_id"]),
                service_name=service.get("service_name") or "",
                service_description=service.get("service_description") or "",
                instances=instances,
                has_additional_fields=bool(service.get("has_additional_fields", False)),
                category_id=service.get("category_id"),
                category_name=service.get("category_name"),
            )
        )
    return SelectionState(services=tuple(services))
