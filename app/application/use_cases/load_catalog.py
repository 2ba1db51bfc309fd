from __future__ import annotations

import logging
import threading

from app.application.exceptions import CatalogContractError
from app.application.ports.service_catalog import ServiceCatalogPort
from app.application.use_cases.catalog_projector import CatalogProjection, project_catalog
from app.domain.entities.service_catalog import ServiceCatalog


class LoadCatalogUseCase:
    """Fetch the service catalog once and keep the projection for the rest of the process."""

    def __init__(self, source: ServiceCatalogPort) -> None:
        self._source = source
        self._projection: CatalogProjection | None = None
        self._lock = threading.Lock()
        self._logger = logging.getLogger(__name__)

    @property
    def is_loaded(self) -> bool:
        return self._projection is not None

    def execute(self, refresh: bool = False) -> CatalogProjection:
        with self._lock:
            if self._projection is not None and not refresh:
                return self._projection

            records = self._source.fetch_catalog()
            if not isinstance(records, list):
                raise CatalogContractError(f"Catalog source returned {type(records).__name__}, expected a list")

            projection = project_catalog(records)
            self._logger.info(
                "Service catalog loaded",
                extra={
                    "reason": (
                        f"{len(projection.catalog.categories)} categories, "
                        f"{len(projection.catalog.all_services())} services, "
                        f"{len(projection.warnings)} warnings"
                    )
                },
            )
            self._projection = projection
            return projection

    def catalog(self) -> ServiceCatalog:
        return self.execute().catalog
