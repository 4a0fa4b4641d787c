"""FastAPI application entrypoint."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from hospital_scheduling.routers import get_api_router
from hospital_scheduling.services.db import init_db
from hospital_scheduling.services.errors import ValidationFailure
from hospital_scheduling.utils.config import get_settings
from hospital_scheduling.utils.logging_config import setup_logging

LOGGER = logging.getLogger(__name__)

settings = get_settings()
setup_logging()


@asynccontextmanager
async def lifespan(_: FastAPI):
    init_db()
    yield


app = FastAPI(title=settings.app_name, version=settings.app_version, lifespan=lifespan)
app.include_router(get_api_router())


@app.exception_handler(ValidationFailure)
async def validation_failure_handler(request: Request, exc: ValidationFailure) -> JSONResponse:
    """Render every rejected request as a bad request carrying the rule's message."""

    LOGGER.warning(
        "Request %s %s rejected: kind=%s message=%s",
        request.method,
        request.url.path,
        exc.kind.value,
        exc.message,
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": exc.message, "kind": exc.kind.value},
    )


@app.get("/health")
def health_check() -> dict[str, str]:
    """Return service health status."""

    return {"status": "ok"}


@app.get("/version")
def version() -> dict[str, str]:
    """Return application version metadata."""

    return {"version": settings.app_version}
