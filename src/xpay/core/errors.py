"""
Exception types raised by the X-Pay SDK.

Every failure surfaced by the SDK is an :class:`XPayError`. The ``kind``
attribute discriminates the failure class so callers can branch on it
without importing every subclass; the subclasses exist so ``except`` clauses
can target a single kind.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Mapping, Optional

__all__ = [
    "AuthenticationError",
    "ErrorKind",
    "NetworkError",
    "PermissionDeniedError",
    "RequestTimeoutError",
    "ResourceNotFoundError",
    "ValidationError",
    "XPayError",
]


class ErrorKind(str, Enum):
    GENERIC = "generic"
    AUTHENTICATION = "authentication"
    VALIDATION = "validation"
    NETWORK = "network"
    TIMEOUT = "timeout"
    NOT_FOUND = "not_found"
    PERMISSION = "permission"


class XPayError(Exception):
    """
    Base error carrying a machine-readable ``code``, an optional HTTP
    ``status`` mirror and optional structured ``details``.
    """

    kind: ErrorKind = ErrorKind.GENERIC
    default_message: str = "X-Pay error"
    default_code: str = "XPAY_ERROR"
    default_status: Optional[int] = None

    def __init__(
        self,
        message: Optional[str] = None,
        code: Optional[str] = None,
        status: Optional[int] = None,
        details: Optional[Mapping[str, Any]] = None,
        *,
        cause: Optional[BaseException] = None,
    ) -> None:
        self.message = message if message is not None else self.default_message
        self.code = code if code is not None else self.default_code
        self.status = status if status is not None else self.default_status
        self.details = dict(details) if details is not None else None
        self.cause = cause
        super().__init__(self.message)
        if cause is not None:
            self.__cause__ = cause

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(message={self.message!r}, code={self.code!r}, "
            f"status={self.status!r})"
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "message": self.message,
            "code": self.code,
            "status": self.status,
            "details": self.details,
        }


class _FixedKindError(XPayError):
    # Kinds below pin their code and status; only message/details vary.
    def __init__(
        self,
        message: Optional[str] = None,
        details: Optional[Mapping[str, Any]] = None,
        *,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message, details=details, cause=cause)


class AuthenticationError(_FixedKindError):
    kind = ErrorKind.AUTHENTICATION
    default_message = "Authentication failed"
    default_code = "AUTHENTICATION_ERROR"
    default_status = 401


class ValidationError(_FixedKindError):
    kind = ErrorKind.VALIDATION
    default_message = "Validation failed"
    default_code = "VALIDATION_ERROR"
    default_status = 400


class NetworkError(_FixedKindError):
    kind = ErrorKind.NETWORK
    default_message = "Network error"
    default_code = "NETWORK_ERROR"


class RequestTimeoutError(_FixedKindError):
    kind = ErrorKind.TIMEOUT
    default_message = "Request timeout"
    default_code = "TIMEOUT"
    default_status = 408


class ResourceNotFoundError(_FixedKindError):
    kind = ErrorKind.NOT_FOUND
    default_message = "Resource not found"
    default_code = "NOT_FOUND"
    default_status = 404


class PermissionDeniedError(_FixedKindError):
    kind = ErrorKind.PERMISSION
    default_message = "Permission denied"
    default_code = "PERMISSION_DENIED"
    default_status = 403
