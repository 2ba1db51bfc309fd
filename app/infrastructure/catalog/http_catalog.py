from __future__ import annotations

import logging
from typing import Any

import httpx

from app.application.exceptions import CatalogContractError, CatalogUpstreamError
from app.application.ports.service_catalog import ServiceCatalogPort
from app.core.config import settings


class HttpServiceCatalog(ServiceCatalogPort):
    def __init__(
        self,
        base_url: str | None = None,
        api_token: str | None = None,
        timeout: float | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self._base_url = (base_url or settings.BACKEND_BASE_URL or "").rstrip("/")
        self._api_token = api_token if api_token is not None else settings.BACKEND_API_TOKEN
        self._client = client or httpx.Client(timeout=timeout or settings.HTTP_TIMEOUT_SECONDS)
        self._logger = logging.getLogger(__name__)

        if not self._base_url:
            raise ValueError("BACKEND_BASE_URL is required for the HTTP service catalog")

    def fetch_catalog(self) -> list[dict[str, Any]]:
        url = f"{self._base_url}/services"
        headers = {"Accept": "application/json"}
        if self._api_token:
            headers["Authorization"] = f"Bearer {self._api_token}"

        try:
            response = self._client.get(url, headers=headers)
            response.raise_for_status()
        except httpx.HTTPError as e:
            self._logger.error("Error fetching service catalog", extra={"error": str(e)})
            raise CatalogUpstreamError(f"Service catalog unavailable: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            raise CatalogContractError("Service catalog response is not JSON") from e

        if isinstance(data, dict):
            data = data.get("data")
        if not isinstance(data, list):
            raise CatalogContractError("Service catalog response does not contain a list of services")
        return data
