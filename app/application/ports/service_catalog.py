from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class ServiceCatalogPort(ABC):
    @abstractmethod
    def fetch_catalog(self) -> list[dict[str, Any]]:
        """Fetch the flat list of raw service records, each carrying its category and fields."""
        raise NotImplementedError
