"""Domain errors raised by the clinic operations.

Each error carries a machine-readable ``code`` (kept in server logs) and the
HTTP status it maps to. Clients only ever receive ``{"error": message}``.
"""
from typing import Optional


class ClinicError(Exception):
    status_code = 500
    code = "internal_error"
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(ClinicError):
    status_code = 400
    code = "validation_error"
    default_message = "Invalid request"


class UnauthorizedError(ClinicError):
    status_code = 401
    code = "unauthorized"
    default_message = "Unauthorized"


class NotFoundError(ClinicError):
    status_code = 404
    code = "not_found"
    default_message = "Not found"


class InsufficientStockError(ClinicError):
    status_code = 400
    code = "insufficient_stock"
    default_message = "Insufficient stock"


class ConflictError(ClinicError):
    status_code = 409
    code = "conflict"
    default_message = "Resource already exists"


class InvalidStateError(ClinicError):
    status_code = 409
    code = "invalid_state"
    default_message = "Invalid state transition"


class OperationFailedError(ClinicError):
    """Opaque wrapper for unexpected faults; the cause is only logged."""

    status_code = 500
    code = "operation_failed"
