"""
Webhook signature verification and event validation.

X-Pay signs each delivery with HMAC-SHA256 over the raw request body using
the endpoint's shared secret, and sends the hex digest (optionally prefixed
with ``sha256=``) in the ``X-XPay-Signature`` header.
"""

from __future__ import annotations

import hashlib
import hmac
import json
import logging
from typing import Any, Dict, List, Mapping, Optional, Union

from .config import WebhookSettings

__all__ = [
    "SIGNATURE_PREFIX",
    "SUPPORTED_EVENTS",
    "WebhookPayloadError",
    "WebhookRejected",
    "generate_signature",
    "get_supported_events",
    "is_supported_event",
    "parse_webhook_payload",
    "validate_webhook_event",
    "verify_signature",
    "verify_webhook_request",
]

SIGNATURE_PREFIX = "sha256="

SUPPORTED_EVENTS = (
    "payment.created",
    "payment.succeeded",
    "payment.failed",
    "payment.cancelled",
    "payment.refunded",
    "refund.created",
    "refund.succeeded",
    "refund.failed",
    "customer.created",
    "customer.updated",
)

_REQUIRED_EVENT_FIELDS = ("id", "type", "created_at", "data")

Payload = Union[str, bytes]


class WebhookPayloadError(ValueError):
    """Raised when a webhook body is empty, malformed or not a JSON object."""


class WebhookRejected(Exception):
    """
    An incoming webhook request that must be refused.

    ``status`` is the HTTP status the receiving endpoint should answer with.
    """

    def __init__(self, status: int, message: str) -> None:
        super().__init__(message)
        self.status = status
        self.message = message


def _to_bytes(value: Payload) -> bytes:
    return value.encode("utf-8") if isinstance(value, str) else value


def _hex_digest(payload: Payload, secret: Payload) -> str:
    return hmac.new(_to_bytes(secret), _to_bytes(payload), hashlib.sha256).hexdigest()


def generate_signature(payload: Payload, secret: Payload) -> str:
    """Return the signature header value X-Pay would send for ``payload``."""
    return SIGNATURE_PREFIX + _hex_digest(payload, secret)


def verify_signature(payload: Payload, signature: Optional[str], secret: Optional[Payload]) -> bool:
    """
    Check ``signature`` against the HMAC of ``payload``.

    Never raises: empty arguments and any failure while computing or
    comparing the digest yield ``False``.
    """
    if not payload or not signature or not secret:
        return False

    try:
        provided = signature[len(SIGNATURE_PREFIX):] if signature.startswith(SIGNATURE_PREFIX) else signature
        computed = _hex_digest(payload, secret)
        return hmac.compare_digest(computed, provided)
    except (TypeError, ValueError, AttributeError):
        logging.debug("Webhook signature could not be compared", exc_info=True)
        return False


def parse_webhook_payload(payload: Payload) -> Dict[str, Any]:
    if not payload:
        raise WebhookPayloadError("Empty payload provided")

    try:
        decoded = json.loads(payload)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise WebhookPayloadError(f"Invalid JSON payload: {exc}") from exc

    if not isinstance(decoded, dict):
        raise WebhookPayloadError("Webhook payload must be a JSON object")
    return decoded


def get_supported_events() -> List[str]:
    return list(SUPPORTED_EVENTS)


def is_supported_event(event_type: str) -> bool:
    return event_type in SUPPORTED_EVENTS


def _non_empty_str(value: Any) -> bool:
    return isinstance(value, str) and value != ""


def validate_webhook_event(event: Mapping[str, Any]) -> bool:
    """Return ``True`` when ``event`` has the shape of a supported X-Pay event."""
    if not isinstance(event, Mapping):
        return False
    if any(name not in event for name in _REQUIRED_EVENT_FIELDS):
        return False
    if not all(_non_empty_str(event[name]) for name in ("id", "type", "created_at")):
        return False
    if not isinstance(event["data"], Mapping):
        return False
    return is_supported_event(event["type"])


def verify_webhook_request(
    payload: Optional[Payload],
    signature: Optional[str],
    settings: WebhookSettings,
) -> Dict[str, Any]:
    """
    Authenticate and decode one incoming webhook delivery.

    Intended for use from whatever web framework receives the webhook: pass
    the raw body and the signature header value, and translate a
    :class:`WebhookRejected` into an HTTP response with its ``status``.
    """
    if not settings.secret:
        raise WebhookRejected(500, "Webhook secret not configured")

    if settings.verify_signature:
        if not signature:
            raise WebhookRejected(400, "Missing webhook signature")
        if payload is None:
            raise WebhookRejected(400, "Unable to read request payload")
        if not verify_signature(payload, signature, settings.secret):
            logging.warning("Rejected webhook with invalid signature")
            raise WebhookRejected(401, "Invalid webhook signature")

    try:
        event = parse_webhook_payload(payload or b"")
    except WebhookPayloadError as exc:
        raise WebhookRejected(400, f"Invalid webhook payload: {exc}") from exc

    if not validate_webhook_event(event):
        raise WebhookRejected(400, "Invalid webhook event structure")

    logging.info("Accepted webhook event %s (%s)", event["id"], event["type"])
    return event
