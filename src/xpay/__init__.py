"""
Python SDK for the X-Pay payments API.

The most useful pieces are re-exported here so integrators can
``from xpay import ...`` without navigating the package.
"""

from .api import XPay, create_client
from .core import (
    SDK_VERSION,
    ApiResponse,
    AuthenticationError,
    ConfigError,
    CreateCustomerRequest,
    CreateWebhookRequest,
    Customer,
    CustomerList,
    ErrorKind,
    HttpClient,
    NetworkError,
    Payment,
    PaymentList,
    PaymentMethodData,
    PaymentRequest,
    PermissionDeniedError,
    RequestTimeoutError,
    ResourceNotFoundError,
    ValidationError,
    WebhookEndpoint,
    WebhookPayloadError,
    WebhookRejected,
    WebhookSettings,
    XPayConfig,
    XPayError,
    XPayParameters,
    load_config,
    verify_webhook_request,
)
from .core import currency, webhooks

__version__ = SDK_VERSION

__all__ = (
    "ApiResponse",
    "AuthenticationError",
    "ConfigError",
    "CreateCustomerRequest",
    "CreateWebhookRequest",
    "Customer",
    "CustomerList",
    "ErrorKind",
    "HttpClient",
    "NetworkError",
    "Payment",
    "PaymentList",
    "PaymentMethodData",
    "PaymentRequest",
    "PermissionDeniedError",
    "RequestTimeoutError",
    "ResourceNotFoundError",
    "ValidationError",
    "WebhookEndpoint",
    "WebhookPayloadError",
    "WebhookRejected",
    "WebhookSettings",
    "XPay",
    "XPayConfig",
    "XPayError",
    "XPayParameters",
    "create_client",
    "currency",
    "load_config",
    "verify_webhook_request",
    "webhooks",
)
