"""
tasksapi.errors

Typed error taxonomy shared by every layer.

Responsibilities:
- Give each failure a stable machine-readable `code` and an HTTP status.
- Keep storage-engine details out of client-facing messages.
"""

from __future__ import annotations

from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_401_UNAUTHORIZED,
    HTTP_404_NOT_FOUND,
    HTTP_409_CONFLICT,
    HTTP_500_INTERNAL_SERVER_ERROR,
)


class ServiceError(Exception):
    status_code: int = HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "ServiceError"
    default_message: str = "Service error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


# --- 400 ---------------------------------------------------------------------


class ValidationError(ServiceError):
    status_code = HTTP_400_BAD_REQUEST
    code = "ValidationError"
    default_message = "Invalid input"


# --- 401 ---------------------------------------------------------------------


class AuthError(ServiceError):
    status_code = HTTP_401_UNAUTHORIZED
    code = "AuthError"
    default_message = "Not authenticated"


class MissingToken(AuthError):
    code = "MissingToken"
    default_message = "Missing token"


class MalformedToken(AuthError):
    code = "MalformedToken"
    default_message = "Token is malformed or has an invalid signature"


class Expired(AuthError):
    code = "Expired"
    default_message = "Token has expired"


class IdentityMismatch(AuthError):
    code = "IdentityMismatch"
    default_message = "Token does not grant access to this identity"


class InvalidSecret(AuthError):
    code = "InvalidSecret"
    default_message = "Invalid secret"


# --- 404 ---------------------------------------------------------------------


class NotFoundError(ServiceError):
    status_code = HTTP_404_NOT_FOUND
    code = "NotFoundError"
    default_message = "Not found"


class UnknownIdentity(NotFoundError):
    code = "UnknownIdentity"
    default_message = "Unknown identity"


class NotFound(NotFoundError):
    code = "NotFound"
    default_message = "Task not found"


class InvalidField(NotFoundError):
    code = "InvalidField"
    default_message = "Unknown field"


# --- 409 ---------------------------------------------------------------------


class ConflictError(ServiceError):
    status_code = HTTP_409_CONFLICT
    code = "ConflictError"
    default_message = "Conflict"


class DuplicateIdentity(ConflictError):
    code = "DuplicateIdentity"
    default_message = "Identity already registered"


class NamespaceConflict(ConflictError):
    code = "NamespaceConflict"
    default_message = "Namespace already exists"


# --- 500 ---------------------------------------------------------------------


class InternalError(ServiceError):
    status_code = HTTP_500_INTERNAL_SERVER_ERROR
    code = "InternalError"
    default_message = "Internal error"


class StorageError(InternalError):
    code = "StorageError"
    default_message = "Storage failure"


# --- Module Notes -----------------------------------------------------------
# Exception handlers in `tasksapi.api.errors` translate these into JSON bodies of the
# form {"error": code, "message": message}.
