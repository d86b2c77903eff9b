"""Translate domain errors into HTTP responses"""

import logging

import redis
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from eventdesk.errors import AdmissionError, FetchError, NotFoundError, ValidationError
from eventdesk.services.admission import AdmissionState

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ValidationError)
    async def _validation_error_handler(request: Request, exc: ValidationError):
        return JSONResponse(
            status_code=400,
            content={"detail": exc.message, "errors": exc.errors},
        )

    @app.exception_handler(NotFoundError)
    async def _not_found_handler(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(AdmissionError)
    async def _admission_error_handler(request: Request, exc: AdmissionError):
        status_code = 409 if exc.state == AdmissionState.FULL else 403
        return JSONResponse(
            status_code=status_code,
            content={"detail": exc.message, "state": AdmissionState(exc.state).value},
        )

    @app.exception_handler(FetchError)
    async def _fetch_error_handler(request: Request, exc: FetchError):
        logger.warning(f"Store unavailable for {request.url.path}: {exc}")
        return JSONResponse(
            status_code=503,
            content={"detail": "Storage is temporarily unavailable, please retry"},
        )

    @app.exception_handler(redis.RedisError)
    async def _redis_error_handler(request: Request, exc: redis.RedisError):
        logger.warning(f"Draft store unavailable for {request.url.path}: {exc}")
        return JSONResponse(
            status_code=503,
            content={"detail": "Draft storage is temporarily unavailable"},
        )
