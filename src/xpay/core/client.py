"""
HTTP client for the X-Pay API.

:class:`HttpClient` performs exactly one request per call and is the only
place where transport failures and HTTP status codes are translated into
:mod:`xpay.core.errors` exceptions.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

import requests

from .config import XPayConfig
from .errors import (
    AuthenticationError,
    NetworkError,
    PermissionDeniedError,
    RequestTimeoutError,
    ResourceNotFoundError,
    ValidationError,
    XPayError,
)

__all__ = [
    "CONNECT_TIMEOUT_SECONDS",
    "SDK_VERSION",
    "ApiResponse",
    "HttpClient",
]

CONNECT_TIMEOUT_SECONDS = 10
SDK_NAME = "xpay-python-sdk"
SDK_VERSION = "1.0.0"

_CLIENT_ERRORS = {
    400: ValidationError,
    401: AuthenticationError,
    403: PermissionDeniedError,
    404: ResourceNotFoundError,
}


@dataclass(frozen=True)
class ApiResponse:
    """The uniform envelope every successful call is decoded into."""

    success: bool
    data: Any
    message: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def from_body(cls, body: Any) -> "ApiResponse":
        if not isinstance(body, Mapping):
            return cls(success=True, data=body)
        return cls(
            success=body.get("success") is not False,
            data=body["data"] if body.get("data") is not None else body,
            message=body.get("message"),
            error=body.get("error"),
        )


def _error_data(response: requests.Response) -> Dict[str, Any]:
    if not response.content:
        return {}
    try:
        decoded = response.json()
    except ValueError:
        return {}
    return decoded if isinstance(decoded, dict) else {}


class HttpClient:
    """
    Issue requests against ``config.resolved_base_url``.

    A custom :class:`requests.Session` can be supplied for proxies, adapters
    or tests; otherwise one is created per client.
    """

    def __init__(
        self,
        config: XPayConfig,
        *,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.config = config
        self.session = session or requests.Session()

    @property
    def headers(self) -> Dict[str, str]:
        return {
            "X-API-Key": self.config.api_key,
            "Content-Type": "application/json",
            "User-Agent": f"{SDK_NAME}/{SDK_VERSION}",
            "X-SDK-Version": SDK_VERSION,
            "X-Environment": self.config.resolved_environment,
        }

    def get(self, path: str) -> ApiResponse:
        return self.request("GET", path)

    def post(self, path: str, data: Optional[Mapping[str, Any]] = None) -> ApiResponse:
        return self.request("POST", path, data)

    def put(self, path: str, data: Optional[Mapping[str, Any]] = None) -> ApiResponse:
        return self.request("PUT", path, data)

    def delete(self, path: str) -> ApiResponse:
        return self.request("DELETE", path)

    def request(
        self,
        method: str,
        path: str,
        data: Optional[Mapping[str, Any]] = None,
    ) -> ApiResponse:
        url = f"{self.config.resolved_base_url}{path}"
        kwargs: Dict[str, Any] = {
            "headers": self.headers,
            "timeout": (CONNECT_TIMEOUT_SECONDS, self.config.timeout),
        }
        if data is not None and method != "GET":
            kwargs["json"] = dict(data)

        logging.info("X-Pay %s %s", method, url)
        try:
            response = self.session.request(method, url, **kwargs)
        except requests.exceptions.ConnectionError as exc:
            logging.warning("Could not connect to %s: %s", url, exc)
            raise NetworkError("Failed to connect to X-Pay API", cause=exc) from exc
        except requests.exceptions.RequestException as exc:
            if isinstance(exc, requests.exceptions.Timeout) or "timeout" in str(exc):
                logging.warning("%s %s timed out: %s", method, url, exc)
                raise RequestTimeoutError("Request timeout", cause=exc) from exc
            logging.warning("%s %s failed: %s", method, url, exc)
            raise NetworkError(str(exc), cause=exc) from exc

        return self._handle_response(method, url, response)

    def _handle_response(self, method: str, url: str, response: requests.Response) -> ApiResponse:
        status = response.status_code

        if 400 <= status < 500:
            error_data = _error_data(response)
            message = error_data.get("message") or (
                f"Client error: {method} {url} resulted in a {status} {response.reason or ''}".rstrip()
            )
            logging.warning("X-Pay responded with %s to %s %s: %s", status, method, url, message)
            error_cls = _CLIENT_ERRORS.get(status)
            if error_cls is not None:
                raise error_cls(message, error_data)
            raise XPayError(
                message,
                error_data.get("error_code") or "CLIENT_ERROR",
                status,
                error_data,
            )

        if 500 <= status < 600:
            error_data = _error_data(response)
            logging.warning("X-Pay responded with %s to %s %s", status, method, url)
            raise XPayError(
                error_data.get("message") or "Server error occurred",
                error_data.get("error_code") or "SERVER_ERROR",
                status,
                error_data,
            )

        try:
            body = response.json()
        except ValueError as exc:
            raise XPayError("Invalid JSON response", "INVALID_RESPONSE", cause=exc) from exc

        return ApiResponse.from_body(body)
