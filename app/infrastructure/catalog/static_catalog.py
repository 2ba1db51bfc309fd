from __future__ import annotations

import copy
from typing import Any

from app.application.ports.service_catalog import ServiceCatalogPort
from app.infrastructure.catalog.catalog_data import SERVICE_RECORDS


class StaticServiceCatalog(ServiceCatalogPort):
    def __init__(self, records: list[dict[str, Any]] | None = None) -> None:
        self._records = records if records is not None else SERVICE_RECORDS

    def fetch_catalog(self) -> list[dict[str, Any]]:
        return copy.deepcopy(self._records)
