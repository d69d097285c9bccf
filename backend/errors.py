"""Error taxonomy and translation of service errors to HTTP responses."""
import enum
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

INTERNAL_ERROR_DETAIL = "Internal server error"
NOT_FOUND_DETAIL = "Not found"


class ErrorKind(enum.Enum):
    """How a request-path failure is surfaced to the client."""

    NOT_FOUND = "not_found"
    TRANSIENT = "transient"
    INTERNAL = "internal"


class ServiceError(Exception):
    """Base for failures raised while serving a request."""

    kind: ErrorKind = ErrorKind.INTERNAL


class NotFound(ServiceError):
    """A lookup matched no row."""

    kind = ErrorKind.NOT_FOUND


class PoolExhausted(ServiceError):
    """No pooled connection became free within the pool timeout."""

    kind = ErrorKind.TRANSIENT


class ConnectionFailed(ServiceError):
    """A new database connection could not be established (credentials, TLS, network)."""

    kind = ErrorKind.TRANSIENT


class QueryFailed(ServiceError):
    """A query or statement failed on an acquired connection."""

    kind = ErrorKind.INTERNAL


class ConstraintViolation(QueryFailed):
    """A write was rejected by a storage constraint (foreign key, not-null, unique)."""


class StartupError(Exception):
    """Fatal error during process startup. The service must not serve traffic."""


class ConfigError(StartupError):
    pass


class TrustStoreError(StartupError):
    pass


class MigrationError(StartupError):
    pass


def translate(error: ServiceError) -> tuple[int, dict]:
    """Map a service error to (status code, response body). Bodies never carry error detail."""
    kind = error.kind
    if kind is ErrorKind.NOT_FOUND:
        return status.HTTP_404_NOT_FOUND, {"detail": NOT_FOUND_DETAIL}
    if kind is ErrorKind.TRANSIENT:
        return status.HTTP_500_INTERNAL_SERVER_ERROR, {"detail": INTERNAL_ERROR_DETAIL}
    if kind is ErrorKind.INTERNAL:
        return status.HTTP_500_INTERNAL_SERVER_ERROR, {"detail": INTERNAL_ERROR_DETAIL}
    raise AssertionError(f"Unhandled error kind: {kind}")


def _log(error: ServiceError, request: Request) -> None:
    where = f"{request.method} {request.url.path}"
    if error.kind is ErrorKind.NOT_FOUND:
        logger.debug("%s: %s", where, error)
    else:
        # exc_info carries the driver exception chained as __cause__.
        logger.error("Internal server error on %s: %r", where, error, exc_info=error)


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    _log(exc, request)
    status_code, body = translate(exc)
    return JSONResponse(status_code=status_code, content=body)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed path ids behave like an unmatched path; anything else is an opaque 500."""
    if any(err.get("loc", ("",))[0] == "path" for err in exc.errors()):
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": NOT_FOUND_DETAIL})
    logger.error("Rejected request %s %s: %s", request.method, request.url.path, exc.errors())
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": INTERNAL_ERROR_DETAIL},
    )


def register_error_handlers(app: FastAPI) -> None:
    """Install handlers so no service error leaves the app untranslated."""
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
