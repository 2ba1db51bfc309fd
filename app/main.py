import logging

from fastapi import FastAPI

from app.api.v1.service_requests import router as service_requests_router
from app.core.config import settings

LOG_CONTEXT_KEYS = ("session_id", "service_id", "instance_id", "field_id", "request_id", "reason", "error")


class ContextFormatter(logging.Formatter):
    """Append the ``extra={...}`` context of a record as key=value pairs."""

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        context = [
            f"{key}={getattr(record, key)}" for key in LOG_CONTEXT_KEYS if getattr(record, key, None) not in (None, "")
        ]
        return f"{base} | {' '.join(context)}" if context else base


def configure_logging(level: str) -> None:
    handler = logging.StreamHandler()
    handler.setFormatter(ContextFormatter("%(asctime)s %(levelname)s:%(name)s:%(message)s"))

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    root.handlers.clear()
    root.addHandler(handler)


configure_logging(settings.LOG_LEVEL)

app = FastAPI(title="Geolab Service Requests", version="1.0.0")

app.include_router(service_requests_router, prefix="/api/v1", tags=["service-requests"])


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
