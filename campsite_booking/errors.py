# campsite_booking/errors.py
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class BookingError(Exception):
    """Base class for every failure a core operation can report."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, extra: Optional[Dict[str, Any]] = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.extra = extra or {}
        if status_code is not None:
            self.status_code = status_code


class ValidationError(BookingError):
    status_code = status.HTTP_400_BAD_REQUEST


class AuthError(BookingError):
    status_code = status.HTTP_401_UNAUTHORIZED


class PermissionDenied(BookingError):
    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(BookingError):
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(BookingError):
    # The booking API has always answered business-rule conflicts with 400.
    status_code = status.HTTP_400_BAD_REQUEST


class StorageError(BookingError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


def error_to_response(exc: BookingError) -> JSONResponse:
    content: Dict[str, Any] = {"detail": exc.message}
    content.update(exc.extra)
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthError) else None
    return JSONResponse(status_code=exc.status_code, content=content, headers=headers)


async def booking_error_handler(request: Request, exc: BookingError) -> JSONResponse:
    if isinstance(exc, StorageError):
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return error_to_response(exc)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BookingError, booking_error_handler)
