"""
Typed request and response objects exchanged with the X-Pay API.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional

__all__ = [
    "CreateCustomerRequest",
    "CreateWebhookRequest",
    "Customer",
    "CustomerList",
    "Payment",
    "PaymentList",
    "PaymentMethodData",
    "PaymentRequest",
    "WebhookEndpoint",
]

# fromisoformat on 3.10 only accepts 3 or 6 fractional digits
_FRACTION = re.compile(r"\.(\d+)(?=[+-]\d{2}:?\d{2}$|$)")


def _parse_timestamp(value: Any) -> Optional[datetime]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    text = str(value)
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    text = _FRACTION.sub(lambda match: "." + match.group(1)[:6].ljust(6, "0"), text, count=1)
    return datetime.fromisoformat(text)


def _compact(values: Mapping[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in values.items() if value is not None}


@dataclass(frozen=True)
class PaymentMethodData:
    payment_method_types: Optional[List[str]] = None
    phone_number: Optional[str] = None
    wallet_id: Optional[str] = None
    pin: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return _compact(
            {
                "payment_method_types": self.payment_method_types,
                "phone_number": self.phone_number,
                "wallet_id": self.wallet_id,
                "pin": self.pin,
            }
        )


@dataclass(frozen=True)
class PaymentRequest:
    """
    Parameters for creating a payment.

    ``amount`` is a decimal string in major units (``"10.00"``). When
    ``currency`` is omitted the payment method's default currency is used.
    """

    amount: str
    payment_method: str
    currency: Optional[str] = None
    description: Optional[str] = None
    customer_id: Optional[str] = None
    payment_method_data: Optional[PaymentMethodData] = None
    metadata: Optional[Dict[str, Any]] = None
    success_url: Optional[str] = None
    cancel_url: Optional[str] = None
    webhook_url: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return _compact(
            {
                "amount": self.amount,
                "payment_method": self.payment_method,
                "currency": self.currency,
                "description": self.description,
                "customer_id": self.customer_id,
                "payment_method_data": (
                    self.payment_method_data.to_dict()
                    if self.payment_method_data is not None
                    else None
                ),
                "metadata": self.metadata,
                "success_url": self.success_url,
                "cancel_url": self.cancel_url,
                "webhook_url": self.webhook_url,
            }
        )


@dataclass(frozen=True)
class Payment:
    id: str
    status: str
    amount: str
    currency: str
    payment_method: str
    description: Optional[str] = None
    customer_id: Optional[str] = None
    client_secret: Optional[str] = None
    reference_id: Optional[str] = None
    transaction_url: Optional[str] = None
    instructions: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Payment":
        return cls(
            id=data["id"],
            status=data["status"],
            amount=str(data["amount"]),
            currency=data["currency"],
            payment_method=data["payment_method"],
            description=data.get("description"),
            customer_id=data.get("customer_id"),
            client_secret=data.get("client_secret"),
            reference_id=data.get("reference_id"),
            transaction_url=data.get("transaction_url"),
            instructions=data.get("instructions"),
            metadata=data.get("metadata"),
            created_at=_parse_timestamp(data.get("created_at")),
            updated_at=_parse_timestamp(data.get("updated_at")),
        )


@dataclass(frozen=True)
class PaymentList:
    payments: List[Payment] = field(default_factory=list)
    total: int = 0


@dataclass(frozen=True)
class CreateCustomerRequest:
    email: str
    name: str
    phone: Optional[str] = None
    description: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        return _compact(
            {
                "email": self.email,
                "name": self.name,
                "phone": self.phone,
                "description": self.description,
                "metadata": self.metadata,
            }
        )


@dataclass(frozen=True)
class Customer:
    id: str
    email: str
    name: str
    phone: Optional[str] = None
    description: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Customer":
        return cls(
            id=data["id"],
            email=data["email"],
            name=data["name"],
            phone=data.get("phone"),
            description=data.get("description"),
            metadata=data.get("metadata"),
            created_at=_parse_timestamp(data.get("created_at")),
            updated_at=_parse_timestamp(data.get("updated_at")),
        )


@dataclass(frozen=True)
class CustomerList:
    customers: List[Customer] = field(default_factory=list)
    total: int = 0
    has_more: bool = False


@dataclass(frozen=True)
class CreateWebhookRequest:
    url: str
    events: List[str]
    description: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return _compact(
            {
                "url": self.url,
                "events": list(self.events),
                "description": self.description,
            }
        )


@dataclass(frozen=True)
class WebhookEndpoint:
    id: str
    url: str
    events: List[str]
    environment: str
    is_active: bool
    secret: str
    description: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "WebhookEndpoint":
        return cls(
            id=data["id"],
            url=data["url"],
            events=list(data["events"]),
            environment=data["environment"],
            is_active=bool(data["is_active"]),
            secret=data["secret"],
            description=data.get("description"),
            created_at=_parse_timestamp(data.get("created_at")),
        )
