from typing import Any, Dict, Optional
from fastapi import HTTPException, status
import logging

logger = logging.getLogger(__name__)


def error_response(
    message: str,
    field_errors: Dict[str, str],
    code: int = status.HTTP_422_UNPROCESSABLE_ENTITY,
) -> HTTPException:
    """Return an HTTPException with a consistent structure and log details."""
    logger.error("%s %s", message, field_errors)
    detail = {"message": message, "field_errors": field_errors}
    return HTTPException(status_code=code, detail=detail)


class ServiceError(Exception):
    """Base class for failures raised by the crud/service layer.

    Carries the same ``message``/``field_errors`` pair that
    :func:`error_response` puts on the wire, so the API layer can translate
    any of them without knowing which operation failed.
    """

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, field_errors: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.message = message
        self.field_errors: Dict[str, str] = dict(field_errors or {})

    def to_http(self) -> HTTPException:
        return error_response(self.message, self.field_errors, self.status_code)


class ValidationError(ServiceError):
    """Required input is missing; nothing was persisted."""

    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY


class NotFoundError(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND


class InvalidArgumentError(ServiceError):
    """An identifier could not be read as an integer."""

    status_code = status.HTTP_400_BAD_REQUEST


def coerce_id(value: Any, field: str = "id", label: str = "Record") -> int:
    """Return ``value`` as an int id or raise :class:`InvalidArgumentError`."""
    if isinstance(value, bool):
        raise InvalidArgumentError(f"{label} ID must be a valid integer", {field: "invalid"})
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        raise InvalidArgumentError(f"{label} ID must be a valid integer", {field: "invalid"})
