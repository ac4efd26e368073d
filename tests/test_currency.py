from decimal import Decimal

import pytest

from xpay import ValidationError
from xpay.core import currency


def test_supported_currency_table():
    assert set(currency.SUPPORTED_CURRENCIES) == {"USD", "GHS", "EUR", "GBP"}
    assert all(info.decimal_places == 2 for info in currency.SUPPORTED_CURRENCIES.values())


def test_tables_are_read_only():
    with pytest.raises(TypeError):
        currency.SUPPORTED_CURRENCIES["JPY"] = None
    with pytest.raises(TypeError):
        currency.PAYMENT_METHOD_CURRENCIES["cash"] = None


@pytest.mark.parametrize(
    "amount, code, expected",
    [
        (10.00, "USD", 1000),
        (10.50, "USD", 1050),
        ("25.99", "EUR", 2599),
        (Decimal("0.01"), "GBP", 1),
        (0.125, "GHS", 13),
        (19.99, "USD", 1999),
    ],
)
def test_to_smallest_unit(amount, code, expected):
    assert currency.to_smallest_unit(amount, code) == expected


def test_from_smallest_unit():
    assert currency.from_smallest_unit(1050, "USD") == Decimal("10.50")
    assert currency.from_smallest_unit(2500, "GBP") == Decimal("25")
    assert currency.from_smallest_unit(1, "EUR") == Decimal("0.01")


@pytest.mark.parametrize("code", ["USD", "GHS", "EUR", "GBP"])
@pytest.mark.parametrize("amount", ["10.50", "0.01", "999.99", "1234.00"])
def test_smallest_unit_conversion_is_reversible(code, amount):
    smallest = currency.to_smallest_unit(amount, code)
    assert currency.from_smallest_unit(smallest, code) == Decimal(amount)


@pytest.mark.parametrize(
    "func, args",
    [
        (currency.to_smallest_unit, (10.0, "JPY")),
        (currency.from_smallest_unit, (1000, "JPY")),
        (currency.format_amount, (10.0, "JPY", False)),
    ],
)
def test_unknown_currency_is_rejected(func, args):
    with pytest.raises(ValidationError, match="Unsupported currency: JPY"):
        func(*args)


def test_format_amount_major_units():
    assert currency.format_amount(10.00, "USD", False) == "$10.00"
    assert currency.format_amount(10.50, "USD", False) == "$10.50"
    assert currency.format_amount(25.99, "EUR", False) == "€25.99"
    assert currency.format_amount(100, "GBP", False) == "£100.00"
    assert currency.format_amount("50.25", "GHS", False) == "₵50.25"


def test_format_amount_from_smallest_unit_is_default():
    assert currency.format_amount(1000, "USD") == "$10.00"
    assert currency.format_amount(1050, "USD", True) == "$10.50"
    assert currency.format_amount(123456, "USD") == "$1,234.56"


def test_api_amount_helpers():
    assert currency.parse_api_amount("10.50", "USD") == 1050
    assert currency.to_api_amount(1050, "USD") == "10.50"
    assert currency.to_api_amount(1000, "GHS") == "10.00"


def test_default_currency():
    assert currency.get_default_currency("stripe") == "USD"
    assert currency.get_default_currency("momo") == "GHS"
    assert currency.get_default_currency("momo_rwanda") == "USD"
    assert currency.get_default_currency("unknown_method") == "USD"


def test_supported_currencies():
    assert currency.get_supported_currencies("stripe") == ["USD", "EUR", "GBP", "GHS"]
    assert currency.get_supported_currencies("xpay_wallet") == ["USD", "GHS", "EUR"]
    assert currency.get_supported_currencies("unknown") == []


def test_validate_currency_accepts_supported_pairs():
    currency.validate_currency("stripe", "GBP")
    currency.validate_currency("momo", "GHS")
    currency.validate_currency("momo_liberia", "USD")


def test_validate_currency_unknown_method():
    with pytest.raises(ValidationError, match="Unsupported payment method: cash"):
        currency.validate_currency("cash", "USD")


def test_validate_currency_lists_supported():
    with pytest.raises(ValidationError) as info:
        currency.validate_currency("stripe", "JPY")
    assert info.value.message == (
        "Currency JPY is not supported for payment method stripe. "
        "Supported currencies: USD, EUR, GBP, GHS"
    )


def test_momo_only_takes_cedis():
    with pytest.raises(ValidationError):
        currency.validate_currency("momo", "USD")


def test_currency_info():
    info = currency.get_currency_info("USD")
    assert info.name == "US Dollar"
    assert info.symbol == "$"
    assert info.smallest_unit_name == "cents"
    assert currency.get_currency_info("UNKNOWN") is None
    assert currency.is_supported_currency("GHS")
    assert not currency.is_supported_currency("XYZ")


def test_invalid_amount():
    with pytest.raises(ValidationError, match="Invalid amount"):
        currency.to_smallest_unit("ten dollars", "USD")
