"""
Core primitives of the X-Pay SDK.
"""

from .client import SDK_VERSION, ApiResponse, HttpClient
from .config import (
    ConfigError,
    WebhookSettings,
    XPayConfig,
    XPayParameters,
    detect_environment,
    load_config,
)
from .environment import XPayEnvironment, build_environment
from .errors import (
    AuthenticationError,
    ErrorKind,
    NetworkError,
    PermissionDeniedError,
    RequestTimeoutError,
    ResourceNotFoundError,
    ValidationError,
    XPayError,
)
from .resources import Customers, Payments, Webhooks
from .types import (
    CreateCustomerRequest,
    CreateWebhookRequest,
    Customer,
    CustomerList,
    Payment,
    PaymentList,
    PaymentMethodData,
    PaymentRequest,
    WebhookEndpoint,
)
from .webhooks import (
    WebhookPayloadError,
    WebhookRejected,
    generate_signature,
    verify_signature,
    verify_webhook_request,
)

__all__ = [
    "SDK_VERSION",
    "ApiResponse",
    "AuthenticationError",
    "ConfigError",
    "CreateCustomerRequest",
    "CreateWebhookRequest",
    "Customer",
    "CustomerList",
    "Customers",
    "ErrorKind",
    "HttpClient",
    "NetworkError",
    "Payment",
    "PaymentList",
    "PaymentMethodData",
    "PaymentRequest",
    "Payments",
    "PermissionDeniedError",
    "RequestTimeoutError",
    "ResourceNotFoundError",
    "ValidationError",
    "WebhookEndpoint",
    "WebhookPayloadError",
    "WebhookRejected",
    "WebhookSettings",
    "Webhooks",
    "XPayConfig",
    "XPayEnvironment",
    "XPayError",
    "XPayParameters",
    "build_environment",
    "detect_environment",
    "generate_signature",
    "load_config",
    "verify_signature",
    "verify_webhook_request",
]
