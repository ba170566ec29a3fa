from __future__ import annotations


class ServiceError(Exception):
    """Base for business-rule failures; carries the HTTP status it maps to."""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ServiceError):
    """Malformed or out-of-range input (ids, pagination parameters, lookups)."""

    status_code = 400


class ConflictError(ServiceError):
    """Duplicate name/CPF or a delete blocked by dependent rows."""

    status_code = 400


class NotFoundError(ServiceError):
    status_code = 404
