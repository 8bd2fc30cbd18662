"""Custom exception classes and handlers."""

import logging

from fastapi import FastAPI, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class BusinessLogicError(Exception):
    """Raised for domain-specific validation errors."""

    def __init__(self, detail: str, status_code: int = status.HTTP_422_UNPROCESSABLE_ENTITY):
        self.detail = detail
        self.status_code = status_code
        super().__init__(detail)


class ValidationError(BusinessLogicError):
    """User-correctable input problem detected before anything is written."""


class StoreError(BusinessLogicError):
    """The data layer rejected or failed a write."""

    def __init__(self, detail: str, status_code: int = status.HTTP_409_CONFLICT):
        super().__init__(detail, status_code=status_code)


def register_exception_handlers(app: FastAPI) -> None:
    """Attach shared exception handlers to the FastAPI app."""

    @app.exception_handler(BusinessLogicError)
    async def _business_error_handler(_: FastAPI, exc: BusinessLogicError):
        if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error("%s: %s", type(exc).__name__, exc.detail)
        return JSONResponse(
            {"success": False, "message": exc.detail},
            status_code=exc.status_code,
        )
