from datetime import datetime, timezone

import pytest

from xpay import (
    CreateCustomerRequest,
    CreateWebhookRequest,
    PaymentMethodData,
    PaymentRequest,
    ResourceNotFoundError,
    ValidationError,
    XPayError,
)
from xpay.core.resources import PAYMENT_LIST_PARAMS, _query_string
from tests.utils import make_response, payment_body

BASE = "https://server.xpay-bits.com/v1/api/merchants/merchant_123"


def _customer(**overrides):
    body = {
        "id": "cus_1",
        "email": "ama@example.com",
        "name": "Ama Mensah",
        "created_at": "2024-02-01T08:00:00+00:00",
    }
    body.update(overrides)
    return body


def _webhook(**overrides):
    body = {
        "id": "wh_1",
        "url": "https://shop.example.com/hooks/xpay",
        "events": ["payment.succeeded"],
        "environment": "sandbox",
        "is_active": True,
        "secret": "whsec_abc",
        "created_at": "2024-02-01T08:00:00Z",
    }
    body.update(overrides)
    return body


# payments

def test_create_payment(xpay, session):
    session.queue(make_response(201, {"data": payment_body()}))

    payment = xpay.payments.create(
        PaymentRequest(
            amount="10.00",
            payment_method="stripe",
            currency="USD",
            description="Order #1001",
            payment_method_data=PaymentMethodData(payment_method_types=["card"]),
        )
    )

    call = session.last
    assert call["method"] == "POST"
    assert call["url"] == f"{BASE}/payments"
    assert call["json"] == {
        "amount": "10.00",
        "payment_method": "stripe",
        "currency": "USD",
        "description": "Order #1001",
        "payment_method_data": {"payment_method_types": ["card"]},
    }
    assert payment.id == "pay_123"
    assert payment.amount == "10.00"
    assert payment.client_secret == "pi_secret"
    assert payment.created_at == datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)
    assert payment.updated_at is None


def test_create_payment_fills_in_default_currency(xpay, session):
    session.queue(make_response(201, {"data": payment_body(currency="GHS", payment_method="momo")}))

    xpay.payments.create(PaymentRequest(amount="5.00", payment_method="momo"))

    assert session.last["json"]["currency"] == "GHS"


def test_create_payment_accepts_plain_mapping(xpay, session):
    session.queue(make_response(201, {"data": payment_body()}))

    xpay.payments.create({"amount": "10.00", "payment_method": "xpay_wallet", "currency": None})

    assert session.last["json"] == {"amount": "10.00", "payment_method": "xpay_wallet", "currency": "USD"}


def test_create_payment_rejects_unsupported_currency_before_sending(xpay, session):
    with pytest.raises(ValidationError, match="Supported currencies: GHS"):
        xpay.payments.create(PaymentRequest(amount="5.00", payment_method="momo", currency="USD"))
    assert session.calls == []


def test_create_payment_rejects_unknown_method_before_sending(xpay, session):
    with pytest.raises(ValidationError, match="Unsupported payment method: cash"):
        xpay.payments.create(PaymentRequest(amount="5.00", payment_method="cash"))
    assert session.calls == []


def test_retrieve_payment(xpay, session):
    session.queue(make_response(200, {"data": payment_body(status="succeeded")}))
    payment = xpay.payments.retrieve("pay_123")
    assert session.last["url"] == f"{BASE}/payments/pay_123"
    assert payment.status == "succeeded"


@pytest.mark.parametrize(
    "stamp, micros",
    [
        ("2024-01-15T10:30:00.12345Z", 123450),
        ("2024-01-15T10:30:00.123456789Z", 123456),
        ("2024-01-15T10:30:00.5+00:00", 500000),
    ],
)
def test_retrieve_payment_with_uneven_fractional_seconds(xpay, session, stamp, micros):
    session.queue(make_response(200, {"data": payment_body(created_at=stamp)}))
    payment = xpay.payments.retrieve("pay_123")
    assert payment.created_at == datetime(2024, 1, 15, 10, 30, 0, micros, tzinfo=timezone.utc)


def test_retrieve_missing_payment(xpay, session):
    session.queue(make_response(404, {"message": "Payment not found"}))
    with pytest.raises(ResourceNotFoundError, match="Payment not found"):
        xpay.payments.retrieve("pay_missing")


def test_list_payments_filters_query_params(xpay, session):
    session.queue(make_response(200, {"data": {"payments": [payment_body(), payment_body(id="pay_2")], "total": 2}}))

    page = xpay.payments.list({"limit": 10, "status": "succeeded", "sort": "desc", "customer_id": None})

    assert session.last["url"] == f"{BASE}/payments?limit=10&status=succeeded"
    assert [p.id for p in page.payments] == ["pay_123", "pay_2"]
    assert page.total == 2


def test_list_payments_without_params(xpay, session):
    session.queue(make_response(200, {"data": {}}))
    page = xpay.payments.list()
    assert session.last["url"] == f"{BASE}/payments"
    assert page.payments == []
    assert page.total == 0


def test_query_string_renders_booleans_as_flags():
    query = _query_string({"limit": 5, "status": True, "customer_id": False}, PAYMENT_LIST_PARAMS)
    assert query == "?limit=5&status=1&customer_id="


def test_cancel_payment(xpay, session):
    session.queue(make_response(200, {"data": payment_body(status="cancelled")}))
    payment = xpay.payments.cancel("pay_123")
    assert session.last["method"] == "POST"
    assert session.last["url"] == f"{BASE}/payments/pay_123/cancel"
    assert "json" not in session.last
    assert payment.status == "cancelled"


def test_confirm_payment(xpay, session):
    session.queue(make_response(200, {"data": payment_body(status="succeeded")}))
    xpay.payments.confirm("pay_123", {"otp": "1234"})
    assert session.last["url"] == "https://server.xpay-bits.com/v1/payments/pay_123/confirm"
    assert session.last["json"] == {"otp": "1234"}


def test_malformed_payment_payload(xpay, session):
    session.queue(make_response(200, {"data": {"id": "pay_1"}}))
    with pytest.raises(XPayError) as info:
        xpay.payments.retrieve("pay_1")
    assert info.value.code == "INVALID_RESPONSE"
    assert "status" in info.value.message


def test_payment_unit_helpers(xpay):
    assert xpay.payments.to_smallest_unit(10.5, "USD") == 1050
    assert xpay.payments.format_amount(10000, "USD") == "$100.00"
    assert xpay.payments.get_supported_currencies("momo") == ["GHS"]


def test_ids_are_escaped_in_paths(xpay, session):
    session.queue(make_response(200, {"data": payment_body()}))
    xpay.payments.retrieve("pay/../x")
    assert session.last["url"] == f"{BASE}/payments/pay%2F..%2Fx"


# customers

def test_create_customer(xpay, session):
    session.queue(make_response(201, {"data": _customer(phone="+233200000000")}))

    customer = xpay.customers.create(
        CreateCustomerRequest(email="ama@example.com", name="Ama Mensah", phone="+233200000000")
    )

    assert session.last["url"] == f"{BASE}/customers"
    assert session.last["json"] == {"email": "ama@example.com", "name": "Ama Mensah", "phone": "+233200000000"}
    assert customer.phone == "+233200000000"
    assert customer.created_at.year == 2024


def test_update_customer(xpay, session):
    session.queue(make_response(200, {"data": _customer(name="Ama K. Mensah")}))
    customer = xpay.customers.update("cus_1", {"name": "Ama K. Mensah"})
    assert session.last["method"] == "PUT"
    assert session.last["url"] == f"{BASE}/customers/cus_1"
    assert customer.name == "Ama K. Mensah"


def test_delete_customer(xpay, session):
    session.queue(make_response(200, {"data": {"deleted": True}}))
    assert xpay.customers.delete("cus_1") is True
    assert session.last["method"] == "DELETE"


def test_delete_customer_without_flag(xpay, session):
    session.queue(make_response(200, {"success": True}))
    assert xpay.customers.delete("cus_1") is False


def test_list_customers(xpay, session):
    session.queue(
        make_response(200, {"data": {"customers": [_customer()], "total": 31, "has_more": True}})
    )

    page = xpay.customers.list({"email": "ama@example.com", "offset": 0, "status": "active"})

    assert session.last["url"] == f"{BASE}/customers?offset=0&email=ama%40example.com"
    assert page.customers[0].email == "ama@example.com"
    assert page.total == 31
    assert page.has_more is True


# webhooks

def test_create_webhook(xpay, session):
    session.queue(make_response(201, {"data": _webhook()}))

    endpoint = xpay.webhooks.create(
        CreateWebhookRequest(url="https://shop.example.com/hooks/xpay", events=["payment.succeeded"])
    )

    assert session.last["json"] == {
        "url": "https://shop.example.com/hooks/xpay",
        "events": ["payment.succeeded"],
    }
    assert endpoint.secret == "whsec_abc"
    assert endpoint.is_active is True


def test_list_webhooks(xpay, session):
    session.queue(make_response(200, {"data": {"webhooks": [_webhook(), _webhook(id="wh_2", is_active=False)]}}))
    endpoints = xpay.webhooks.list()
    assert session.last["url"] == f"{BASE}/webhooks"
    assert [e.id for e in endpoints] == ["wh_1", "wh_2"]
    assert endpoints[1].is_active is False


def test_retrieve_update_delete_webhook(xpay, session):
    session.queue(
        make_response(200, {"data": _webhook()}),
        make_response(200, {"data": _webhook(url="https://shop.example.com/v2/hooks")}),
        make_response(200, {"data": {"deleted": True}}),
    )

    assert xpay.webhooks.retrieve("wh_1").id == "wh_1"
    assert xpay.webhooks.update("wh_1", {"url": "https://shop.example.com/v2/hooks"}).url.endswith("/v2/hooks")
    assert xpay.webhooks.delete("wh_1") is True
    assert [c["method"] for c in session.calls] == ["GET", "PUT", "DELETE"]


def test_send_test_webhook(xpay, session):
    session.queue(make_response(200, {"data": {"delivered": True, "status_code": 200}}))
    result = xpay.webhooks.test("wh_1")
    assert session.last["url"] == f"{BASE}/webhooks/wh_1/test"
    assert result == {"delivered": True, "status_code": 200}


def test_webhook_helpers_available_on_resource(xpay):
    payload = '{"id":"evt_1"}'
    signature = "sha256=" + "0" * 64
    assert xpay.webhooks.verify_signature(payload, signature, "secret") is False
    assert xpay.webhooks.parse_payload(payload) == {"id": "evt_1"}
    assert "payment.created" in xpay.webhooks.get_supported_events()
