"""
Public, high-level entry points for the X-Pay SDK.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Mapping, Optional

import requests

from .core.client import HttpClient
from .core.config import ConfigError, XPayConfig, XPayParameters, load_config
from .core.resources import Customers, Payments, Webhooks

__all__ = [
    "XPay",
    "create_client",
]

MERCHANT_ID_REQUIRED = "Merchant ID is required. Get your merchant ID from the X-Pay dashboard."


class XPay:
    """
    Entry point bundling the payments, customers and webhooks clients for a
    single merchant.
    """

    def __init__(
        self,
        config: XPayConfig,
        *,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.config = config
        self._merchant_id = config.merchant_id or self._merchant_id_from_api_key(config.api_key)
        self._client = HttpClient(config, session=session)

        self.payments = Payments(self._client, self._merchant_id)
        self.customers = Customers(self._client, self._merchant_id)
        self.webhooks = Webhooks(self._client, self._merchant_id)

    @staticmethod
    def _merchant_id_from_api_key(api_key: str) -> str:
        # API keys do not encode the merchant; it has to be configured.
        raise ConfigError(MERCHANT_ID_REQUIRED)

    @property
    def merchant_id(self) -> str:
        return self._merchant_id

    @property
    def http_client(self) -> HttpClient:
        """The underlying :class:`HttpClient`, for calls the SDK does not wrap."""
        return self._client

    def get_merchant_id(self) -> str:
        return self._merchant_id

    def ping(self) -> Dict[str, Any]:
        """
        Check connectivity and credentials against the health endpoint.

        The timestamp records when the check ran on this machine.
        """
        response = self._client.get("/v1/healthz")
        return {
            "success": response.success,
            "timestamp": datetime.now().astimezone().isoformat(timespec="seconds"),
        }

    def get_payment_methods(self) -> Any:
        response = self._client.get(f"/v1/api/merchants/{self._merchant_id}/payment-methods")
        return response.data if response.data is not None else {}


def create_client(
    *,
    config: Optional[XPayConfig] = None,
    session: Optional[requests.Session] = None,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
    parameters: Optional[XPayParameters] = None,
    api_key: Optional[str] = None,
    merchant_id: Optional[str] = None,
    environment: Optional[str] = None,
    base_url: Optional[str] = None,
    timeout: Optional[int | str] = None,
    webhook_secret: Optional[str] = None,
    verify_webhook_signature: Optional[bool | str] = None,
) -> XPay:
    """
    Construct an :class:`XPay` facade.

    Callers can either supply a ready-made :class:`XPayConfig` or let the
    helper assemble one from ``XPAY_*`` environment data and keyword
    arguments.
    """
    if config is not None:
        extras = (
            overrides,
            base,
            parameters,
            api_key,
            merchant_id,
            environment,
            base_url,
            timeout,
            webhook_secret,
            verify_webhook_signature,
        )
        if any(item is not None and item != {} for item in extras):
            raise ValueError(
                "Provide either a pre-built XPayConfig or individual parameters, not both."
            )
        cfg = config
    else:
        cfg = load_config(
            env_file=env_file,
            overrides=overrides,
            base=base,
            parameters=parameters,
            api_key=api_key,
            merchant_id=merchant_id,
            environment=environment,
            base_url=base_url,
            timeout=timeout,
            webhook_secret=webhook_secret,
            verify_webhook_signature=verify_webhook_signature,
        )
    return XPay(cfg, session=session)
