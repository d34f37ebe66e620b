"""Common exception helpers for the backend services."""
from __future__ import annotations

from typing import Any


class AppError(Exception):
    """Base exception for application specific errors."""

    status_code = 500
    error_code = "app_error"
    default_detail = "An unexpected error occurred."

    def __init__(self, detail: str | None = None, *, extra: dict[str, Any] | None = None) -> None:
        super().__init__(detail or self.default_detail)
        self.detail = detail or self.default_detail
        self.extra = extra or {}


class StoreUnavailable(AppError):
    """Raised when the relational store cannot be reached at startup."""

    error_code = "store_unavailable"
    default_detail = "Database connection failed."


class DomainError(AppError):
    """Normalized domain error surfaced to API handlers."""


class BadRequestError(DomainError):
    status_code = 400
    error_code = "bad_request"
    default_detail = "Invalid request."


class MissingParameterError(BadRequestError):
    error_code = "missing_parameter"
    default_detail = "Missing parameter."


class InvalidParameterError(BadRequestError):
    error_code = "invalid_parameter"
    default_detail = "Invalid parameter."


class InvalidInputError(BadRequestError):
    error_code = "invalid_input"
    default_detail = "Invalid input."


class UnauthorizedError(DomainError):
    status_code = 401
    error_code = "unauthorized"
    default_detail = "Unauthorized"


class InvalidCredentialsError(UnauthorizedError):
    error_code = "invalid_credentials"
    default_detail = "Invalid credentials"


class NotFoundError(DomainError):
    status_code = 404
    error_code = "not_found"
    default_detail = "Resource not found."


class InternalError(DomainError):
    status_code = 500
    error_code = "internal_error"
    default_detail = "Internal server error."
