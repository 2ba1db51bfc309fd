from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from app.domain.entities.selection_state import SelectionState
from app.domain.entities.service_request import RequestForm

if TYPE_CHECKING:
    from app.application.use_cases.instance_draft import InstanceDraft


@dataclass
class SelectionSession:
    """Per-client working set, created on page entry and discarded on submission."""

    session_id: str
    form: RequestForm = RequestForm()
    selection: SelectionState = SelectionState()
    draft: "InstanceDraft | None" = None  # modal-local, never persisted
    created_at: float | None = None
    updated_at: float | None = None
