"""Process-wide log setup plus one access line per HTTP request."""
import json
import logging
import time
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Request

from bakery.config import Settings, get_settings

access_logger = logging.getLogger("bakery.access")

# Attributes passed through ``extra=`` that the JSON output keeps.
CONTEXT_FIELDS = ("method", "path", "status_code", "duration_ms", "subject_id")


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for field in CONTEXT_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                payload[field] = value
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True)


def setup_logging(settings: Optional[Settings] = None) -> None:
    settings = settings or get_settings()
    level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    handler = logging.StreamHandler()
    if settings.LOG_JSON:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(
            logging.Formatter(
                fmt="%(asctime)s %(levelname)s %(name)s - %(message)s",
                datefmt="%Y-%m-%dT%H:%M:%S",
            )
        )

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()
    root.addHandler(handler)

    # Requests are logged by bakery.access; uvicorn's own lines would duplicate them.
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def install_request_logging(app: FastAPI) -> None:
    @app.middleware("http")
    async def log_request(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        duration_ms = round((time.perf_counter() - started) * 1000, 2)

        principal = getattr(request.state, "principal", None)
        access_logger.info(
            "%s %s -> %s (%.2f ms)",
            request.method,
            request.url.path,
            response.status_code,
            duration_ms,
            extra={
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": duration_ms,
                "subject_id": principal.subject_id if principal else None,
            },
        )
        return response


__all__ = ["CONTEXT_FIELDS", "JsonFormatter", "install_request_logging", "setup_logging"]
