from functools import lru_cache
import logging

from app.core.config import settings
from app.application.ports.service_catalog import ServiceCatalogPort
from app.application.ports.session_store import SelectionSessionStorePort
from app.application.ports.submission import SubmissionPort
from app.application.use_cases.instance_factory import InstanceFactory
from app.application.use_cases.load_catalog import LoadCatalogUseCase
from app.application.use_cases.request_session import RequestSessionUseCase
from app.application.use_cases.submit_request import SubmitServiceRequestUseCase
from app.infrastructure.catalog.http_catalog import HttpServiceCatalog
from app.infrastructure.catalog.static_catalog import StaticServiceCatalog
from app.infrastructure.store.json_store import JsonSessionStore
from app.infrastructure.store.memory_store import MemorySessionStore
from app.infrastructure.submission.http_submission import HttpSubmission
from app.infrastructure.submission.mock_submission import MockSubmission


def _use_backend() -> bool:
    return bool(settings.BACKEND_BASE_URL) and settings.ENV.lower() not in {"dev", "local"}


@lru_cache
def get_service_catalog() -> ServiceCatalogPort:
    logger = logging.getLogger(__name__)
    if not _use_backend():
        logger.info("Using StaticServiceCatalog (backend missing, or ENV=dev/local)")
        return StaticServiceCatalog()
    return HttpServiceCatalog()


@lru_cache
def get_submission() -> SubmissionPort:
    if not _use_backend():
        return MockSubmission()
    return HttpSubmission()


@lru_cache
def get_session_store() -> SelectionSessionStorePort:
    if settings.SESSION_STORE.lower() == "json":
        return JsonSessionStore(data_dir=settings.SESSION_DATA_DIR)
    return MemorySessionStore()


@lru_cache
def get_catalog_loader() -> LoadCatalogUseCase:
    return LoadCatalogUseCase(source=get_service_catalog())


@lru_cache
def get_instance_factory() -> InstanceFactory:
    return InstanceFactory()


def get_request_session_use_case() -> RequestSessionUseCase:
    return RequestSessionUseCase(
        sessions=get_session_store(),
        catalog_loader=get_catalog_loader(),
        instance_factory=get_instance_factory(),
    )


def get_submit_use_case() -> SubmitServiceRequestUseCase:
    return SubmitServiceRequestUseCase(
        submission=get_submission(),
        sessions=get_session_store(),
    )
