"""
Supported currencies, per-payment-method currency rules and amount helpers.

Amounts travel to and from the API as decimal strings (``"10.00"``) and are
handled internally as integers in the currency's smallest unit.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from types import MappingProxyType
from typing import List, Mapping, Optional, Tuple

from .errors import ValidationError

__all__ = [
    "PAYMENT_METHOD_CURRENCIES",
    "SUPPORTED_CURRENCIES",
    "CurrencyInfo",
    "PaymentMethodCurrencyRule",
    "format_amount",
    "from_smallest_unit",
    "get_currency_info",
    "get_default_currency",
    "get_supported_currencies",
    "is_supported_currency",
    "parse_api_amount",
    "to_api_amount",
    "to_smallest_unit",
    "validate_currency",
]

FALLBACK_CURRENCY = "USD"


@dataclass(frozen=True)
class CurrencyInfo:
    code: str
    name: str
    symbol: str
    decimal_places: int
    smallest_unit_name: str


@dataclass(frozen=True)
class PaymentMethodCurrencyRule:
    payment_method: str
    supported_currencies: Tuple[str, ...]
    default_currency: str
    regions: Tuple[str, ...]


SUPPORTED_CURRENCIES: Mapping[str, CurrencyInfo] = MappingProxyType(
    {
        "USD": CurrencyInfo("USD", "US Dollar", "$", 2, "cents"),
        "GHS": CurrencyInfo("GHS", "Ghanaian Cedi", "₵", 2, "pesewas"),
        "EUR": CurrencyInfo("EUR", "Euro", "€", 2, "cents"),
        "GBP": CurrencyInfo("GBP", "British Pound", "£", 2, "pence"),
    }
)


def _rule(method: str, currencies: Tuple[str, ...], default: str, regions: Tuple[str, ...]):
    return method, PaymentMethodCurrencyRule(method, currencies, default, regions)


PAYMENT_METHOD_CURRENCIES: Mapping[str, PaymentMethodCurrencyRule] = MappingProxyType(
    dict(
        [
            _rule("stripe", ("USD", "EUR", "GBP", "GHS"), "USD", ("US", "EU", "GB", "GH")),
            _rule("momo", ("GHS",), "GHS", ("GH",)),
            _rule("momo_liberia", ("USD",), "USD", ("LR",)),
            _rule("momo_nigeria", ("USD",), "USD", ("NG",)),
            _rule("momo_uganda", ("USD",), "USD", ("UG",)),
            _rule("momo_rwanda", ("USD",), "USD", ("RW",)),
            _rule("xpay_wallet", ("USD", "GHS", "EUR"), "USD", ("US", "GH", "EU")),
        ]
    )
)


def _require_currency(currency: str) -> CurrencyInfo:
    info = SUPPORTED_CURRENCIES.get(currency)
    if info is None:
        raise ValidationError(f"Unsupported currency: {currency}")
    return info


def _as_decimal(amount: Decimal | int | float | str) -> Decimal:
    if isinstance(amount, Decimal):
        return amount
    try:
        # str() keeps float literals such as 10.1 from expanding to their binary value.
        return Decimal(str(amount))
    except InvalidOperation as exc:
        raise ValidationError(f"Invalid amount: {amount!r}") from exc


def is_supported_currency(currency: str) -> bool:
    return currency in SUPPORTED_CURRENCIES


def get_currency_info(currency: str) -> Optional[CurrencyInfo]:
    return SUPPORTED_CURRENCIES.get(currency)


def to_smallest_unit(amount: Decimal | int | float | str, currency: str) -> int:
    """Convert a major-unit amount to the smallest unit, e.g. dollars to cents."""
    info = _require_currency(currency)
    scaled = _as_decimal(amount).scaleb(info.decimal_places)
    return int(scaled.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def from_smallest_unit(amount: int, currency: str) -> Decimal:
    """Convert a smallest-unit amount back to major units, e.g. cents to dollars."""
    info = _require_currency(currency)
    return Decimal(int(amount)).scaleb(-info.decimal_places)


def format_amount(
    amount: Decimal | int | float | str,
    currency: str,
    is_smallest_unit: bool = True,
) -> str:
    """Render ``amount`` with the currency symbol, e.g. ``$1,050.00``."""
    info = _require_currency(currency)
    if is_smallest_unit:
        display = from_smallest_unit(int(_as_decimal(amount)), currency)
    else:
        display = _as_decimal(amount)
    quantum = Decimal(1).scaleb(-info.decimal_places)
    display = display.quantize(quantum, rounding=ROUND_HALF_UP)
    return f"{info.symbol}{display:,.{info.decimal_places}f}"


def parse_api_amount(amount: str, currency: str) -> int:
    """Turn an API decimal string such as ``"10.50"`` into smallest units."""
    return to_smallest_unit(amount, currency)


def to_api_amount(amount: int, currency: str) -> str:
    """Render smallest units as the API's decimal string, e.g. ``1050`` -> ``"10.50"``."""
    info = _require_currency(currency)
    return f"{from_smallest_unit(amount, currency):.{info.decimal_places}f}"


def get_default_currency(payment_method: str) -> str:
    # Unknown methods fall back to USD rather than raising.
    rule = PAYMENT_METHOD_CURRENCIES.get(payment_method)
    return rule.default_currency if rule is not None else FALLBACK_CURRENCY


def get_supported_currencies(payment_method: str) -> List[str]:
    rule = PAYMENT_METHOD_CURRENCIES.get(payment_method)
    return list(rule.supported_currencies) if rule is not None else []


def validate_currency(payment_method: str, currency: str) -> None:
    rule = PAYMENT_METHOD_CURRENCIES.get(payment_method)
    if rule is None:
        raise ValidationError(f"Unsupported payment method: {payment_method}")

    if currency not in rule.supported_currencies:
        supported = ", ".join(rule.supported_currencies)
        raise ValidationError(
            f"Currency {currency} is not supported for payment method {payment_method}. "
            f"Supported currencies: {supported}"
        )
