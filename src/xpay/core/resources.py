"""
Merchant-scoped resource clients: payments, customers and webhook endpoints.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, TypeVar, Union
from urllib.parse import quote, urlencode

from . import currency, webhooks
from .client import ApiResponse, HttpClient
from .errors import XPayError
from .types import (
    CreateCustomerRequest,
    CreateWebhookRequest,
    Customer,
    CustomerList,
    Payment,
    PaymentList,
    PaymentRequest,
    WebhookEndpoint,
)

__all__ = [
    "Customers",
    "Payments",
    "Webhooks",
]

T = TypeVar("T")

PAYMENT_LIST_PARAMS = ("limit", "offset", "status", "customer_id", "created_after", "created_before")
CUSTOMER_LIST_PARAMS = ("limit", "offset", "email", "name", "created_after", "created_before")


def _query_string(params: Optional[Mapping[str, Any]], allowed: Iterable[str]) -> str:
    if not params:
        return ""
    selected = {
        name: _query_value(params[name])
        for name in allowed
        if params.get(name) is not None
    }
    return f"?{urlencode(selected)}" if selected else ""


def _query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "1" if value else ""
    return str(value)


def _build(factory: Callable[[Mapping[str, Any]], T], data: Any, label: str) -> T:
    if not isinstance(data, Mapping):
        raise XPayError(f"Malformed {label} in response", "INVALID_RESPONSE", details={"data": data})
    try:
        return factory(data)
    except KeyError as exc:
        raise XPayError(
            f"Malformed {label} in response: missing {exc.args[0]!r}",
            "INVALID_RESPONSE",
            details=dict(data),
            cause=exc,
        ) from exc
    except (TypeError, ValueError) as exc:
        raise XPayError(
            f"Malformed {label} in response: {exc}",
            "INVALID_RESPONSE",
            details=dict(data),
            cause=exc,
        ) from exc


def _items(data: Any, key: str) -> List[Any]:
    if isinstance(data, Mapping):
        return list(data.get(key) or [])
    return []


class _Resource:
    name = ""

    def __init__(self, client: HttpClient, merchant_id: str) -> None:
        self.client = client
        self.merchant_id = merchant_id

    def _path(self, *parts: str) -> str:
        segments = [self.name, *(quote(str(part), safe="") for part in parts)]
        return f"/v1/api/merchants/{quote(self.merchant_id, safe='')}/" + "/".join(segments)


class Payments(_Resource):
    """Create and inspect payments for one merchant."""

    name = "payments"

    def create(self, request: Union[PaymentRequest, Mapping[str, Any]]) -> Payment:
        """
        Submit a payment.

        A missing currency is filled in with the payment method's default,
        and the final currency is checked against the method before any
        request is sent.
        """
        body = self._prepare(request)
        response = self.client.post(self._path(), body)
        return _build(Payment.from_mapping, response.data, "payment")

    def retrieve(self, payment_id: str) -> Payment:
        response = self.client.get(self._path(payment_id))
        return _build(Payment.from_mapping, response.data, "payment")

    def list(self, params: Optional[Mapping[str, Any]] = None) -> PaymentList:
        response = self.client.get(self._path() + _query_string(params, PAYMENT_LIST_PARAMS))
        data = response.data if isinstance(response.data, Mapping) else {}
        return PaymentList(
            payments=[_build(Payment.from_mapping, item, "payment") for item in _items(data, "payments")],
            total=int(data.get("total") or 0),
        )

    def cancel(self, payment_id: str) -> Payment:
        response = self.client.post(self._path(payment_id, "cancel"))
        return _build(Payment.from_mapping, response.data, "payment")

    def confirm(self, payment_id: str, confirmation: Optional[Mapping[str, Any]] = None) -> Payment:
        """Confirm a payment whose method needs an explicit confirmation step."""
        response = self.client.post(f"/v1/payments/{quote(payment_id, safe='')}/confirm", confirmation)
        return _build(Payment.from_mapping, response.data, "payment")

    @staticmethod
    def get_supported_currencies(payment_method: str) -> List[str]:
        return currency.get_supported_currencies(payment_method)

    @staticmethod
    def to_smallest_unit(amount: Union[Decimal, int, float, str], currency_code: str) -> int:
        return currency.to_smallest_unit(amount, currency_code)

    @staticmethod
    def from_smallest_unit(amount: int, currency_code: str) -> Decimal:
        return currency.from_smallest_unit(amount, currency_code)

    @staticmethod
    def format_amount(
        amount: Union[Decimal, int, float, str],
        currency_code: str,
        is_smallest_unit: bool = True,
    ) -> str:
        return currency.format_amount(amount, currency_code, is_smallest_unit)

    @staticmethod
    def _prepare(request: Union[PaymentRequest, Mapping[str, Any]]) -> Dict[str, Any]:
        if isinstance(request, PaymentRequest):
            body = request.to_dict()
        else:
            body = {key: value for key, value in request.items() if value is not None}

        payment_method = body.get("payment_method")
        if not payment_method:
            raise ValueError("payment_method is required")

        if body.get("currency") is None:
            body["currency"] = currency.get_default_currency(payment_method)
            logging.debug("Defaulted currency for %s to %s", payment_method, body["currency"])

        currency.validate_currency(payment_method, body["currency"])
        return body


class Customers(_Resource):
    name = "customers"

    def create(self, request: Union[CreateCustomerRequest, Mapping[str, Any]]) -> Customer:
        body = request.to_dict() if isinstance(request, CreateCustomerRequest) else dict(request)
        response = self.client.post(self._path(), body)
        return _build(Customer.from_mapping, response.data, "customer")

    def retrieve(self, customer_id: str) -> Customer:
        response = self.client.get(self._path(customer_id))
        return _build(Customer.from_mapping, response.data, "customer")

    def update(self, customer_id: str, changes: Mapping[str, Any]) -> Customer:
        response = self.client.put(self._path(customer_id), changes)
        return _build(Customer.from_mapping, response.data, "customer")

    def delete(self, customer_id: str) -> bool:
        response = self.client.delete(self._path(customer_id))
        return _deleted(response)

    def list(self, params: Optional[Mapping[str, Any]] = None) -> CustomerList:
        response = self.client.get(self._path() + _query_string(params, CUSTOMER_LIST_PARAMS))
        data = response.data if isinstance(response.data, Mapping) else {}
        return CustomerList(
            customers=[_build(Customer.from_mapping, item, "customer") for item in _items(data, "customers")],
            total=int(data.get("total") or 0),
            has_more=bool(data.get("has_more", False)),
        )


class Webhooks(_Resource):
    """
    Manage webhook endpoints. Signature helpers are exposed as static
    methods so receivers can use them without a configured client.
    """

    name = "webhooks"

    verify_signature = staticmethod(webhooks.verify_signature)
    parse_payload = staticmethod(webhooks.parse_webhook_payload)
    validate_event = staticmethod(webhooks.validate_webhook_event)
    get_supported_events = staticmethod(webhooks.get_supported_events)

    def create(self, request: Union[CreateWebhookRequest, Mapping[str, Any]]) -> WebhookEndpoint:
        body = request.to_dict() if isinstance(request, CreateWebhookRequest) else dict(request)
        response = self.client.post(self._path(), body)
        return _build(WebhookEndpoint.from_mapping, response.data, "webhook endpoint")

    def list(self) -> List[WebhookEndpoint]:
        response = self.client.get(self._path())
        return [
            _build(WebhookEndpoint.from_mapping, item, "webhook endpoint")
            for item in _items(response.data, "webhooks")
        ]

    def retrieve(self, webhook_id: str) -> WebhookEndpoint:
        response = self.client.get(self._path(webhook_id))
        return _build(WebhookEndpoint.from_mapping, response.data, "webhook endpoint")

    def update(self, webhook_id: str, changes: Mapping[str, Any]) -> WebhookEndpoint:
        response = self.client.put(self._path(webhook_id), changes)
        return _build(WebhookEndpoint.from_mapping, response.data, "webhook endpoint")

    def delete(self, webhook_id: str) -> bool:
        response = self.client.delete(self._path(webhook_id))
        return _deleted(response)

    def test(self, webhook_id: str) -> Dict[str, Any]:
        """Ask X-Pay to send a test event to the endpoint."""
        response = self.client.post(self._path(webhook_id, "test"))
        return dict(response.data) if isinstance(response.data, Mapping) else {"result": response.data}


def _deleted(response: ApiResponse) -> bool:
    if isinstance(response.data, Mapping):
        return bool(response.data.get("deleted", False))
    return False
