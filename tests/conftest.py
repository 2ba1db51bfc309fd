from __future__ import annotations

import itertools

import pytest

from app.application.use_cases.catalog_projector import project_catalog
from app.application.use_cases.instance_factory import InstanceFactory
from app.application.use_cases.selection import SelectionStore
from app.domain.entities.service_catalog import ServiceCatalog
from app.infrastructure.catalog.catalog_data import SERVICE_RECORDS


@pytest.fixture
def catalog() -> ServiceCatalog:
    return project_catalog(SERVICE_RECORDS).catalog


@pytest.fixture
def factory() -> InstanceFactory:
    counter = itertools.count(1)
    return InstanceFactory(id_factory=lambda: f"inst-{next(counter)}")


@pytest.fixture
def store(catalog: ServiceCatalog, factory: InstanceFactory) -> SelectionStore:
    return SelectionStore(catalog, factory)
