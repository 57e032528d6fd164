"""Domain exceptions and their HTTP mapping."""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse


class AffiliateError(Exception):
    """Base class for errors raised by the service layer."""

    status_code = 500
    code = "internal_server_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class AuthorizationError(AffiliateError):
    status_code = 401
    code = "unauthorized"


class NotFoundError(AffiliateError):
    status_code = 404
    code = "not_found"


class EventIngestionError(AffiliateError):
    """The event-ingestion API rejected a batch."""

    code = "event_ingestion_failed"

    def __init__(self, datasource: str, status_code: int, body: str) -> None:
        super().__init__(f"Ingestion into {datasource!r} failed with HTTP {status_code}: {body[:200]}")
        self.datasource = datasource
        self.upstream_status = status_code


async def _affiliate_error_handler(request: Request, exc: AffiliateError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": {"code": exc.code, "message": exc.message}},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AffiliateError, _affiliate_error_handler)
