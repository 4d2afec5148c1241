"""
Error taxonomy shared by services, the decision workflow and the routers.

Every service failure is a ``ServiceError`` carrying the HTTP status it maps
to and a caller-visible ``data`` payload. ``DeliveryError`` is the exception:
it never reaches the HTTP layer.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ServiceError(Exception):
    status: int = 500

    def __init__(self, data="Internal server error", status: int | None = None):
        super().__init__(data)
        self.data = data
        if status is not None:
            self.status = status


class InvalidArgument(ServiceError):
    status = 400


class Unauthorized(ServiceError):
    status = 401


class Forbidden(ServiceError):
    status = 403


class NotFound(ServiceError):
    status = 404


class Conflict(ServiceError):
    status = 409


class ValidationFailed(ServiceError):
    status = 422


class InternalError(ServiceError):
    status = 500


class DeliveryError(Exception):
    """Outbound notification could not be delivered."""


async def service_error_handler(request: Request, exc: ServiceError):
    if exc.status >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.data)
        return JSONResponse(status_code=exc.status, content={"error": "Internal server error"})
    return JSONResponse(status_code=exc.status, content={"error": exc.data})


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
