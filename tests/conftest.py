# tests/conftest.py
import pytest

from xpay import XPay, XPayConfig
from xpay.core.client import HttpClient
from tests.utils import FakeSession


@pytest.fixture
def config():
    return XPayConfig(api_key="xpay_sandbox_test123", merchant_id="merchant_123")


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def http_client(config, session):
    return HttpClient(config, session=session)


@pytest.fixture
def xpay(config, session):
    return XPay(config, session=session)
