"""
Configuration objects and helpers for the X-Pay SDK.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from .environment import XPayEnvironment, build_environment

__all__ = [
    "DEFAULT_BASE_URL",
    "ConfigError",
    "WebhookSettings",
    "XPayConfig",
    "XPayParameters",
    "detect_environment",
    "load_config",
]

DEFAULT_BASE_URL = "https://server.xpay-bits.com"
DEFAULT_TIMEOUT_SECONDS = 30

ENVIRONMENTS = ("sandbox", "live")

_SANDBOX_KEY_PREFIXES = ("xpay_sandbox_", "pk_sandbox_", "sk_sandbox_")
_LIVE_KEY_PREFIXES = ("xpay_live_", "pk_live_", "sk_live_")

_PARAMETER_TO_ENV_KEY = {
    "api_key": "XPAY_API_KEY",
    "merchant_id": "XPAY_MERCHANT_ID",
    "environment": "XPAY_ENVIRONMENT",
    "base_url": "XPAY_BASE_URL",
    "timeout": "XPAY_TIMEOUT",
    "webhook_secret": "XPAY_WEBHOOK_SECRET",
    "verify_webhook_signature": "XPAY_WEBHOOK_VERIFY_SIGNATURE",
}


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class ConfigError(ValueError):
    """Raised when the supplied configuration is invalid."""


def detect_environment(api_key: str) -> str:
    """Infer ``sandbox`` or ``live`` from a recognised API-key prefix."""
    if api_key.startswith(_SANDBOX_KEY_PREFIXES):
        return "sandbox"
    if api_key.startswith(_LIVE_KEY_PREFIXES):
        return "live"
    return "sandbox"


@dataclass(frozen=True)
class XPayParameters:
    """
    Explicit parameter bundle for :func:`load_config`.

    Values set here take precedence over the process environment and any
    ``.env`` file.
    """

    api_key: Optional[str] = None
    merchant_id: Optional[str] = None
    environment: Optional[str] = None
    base_url: Optional[str] = None
    timeout: Optional[int | str] = None
    webhook_secret: Optional[str] = None
    verify_webhook_signature: Optional[bool | str] = None

    def as_overrides(self) -> Dict[str, str]:
        overrides: Dict[str, str] = {}
        for field_name, env_key in _PARAMETER_TO_ENV_KEY.items():
            value = getattr(self, field_name)
            if value is None:
                continue
            overrides[env_key] = _stringify(value)
        return overrides


@dataclass(frozen=True)
class WebhookSettings:
    """Settings used when verifying incoming webhook requests."""

    secret: Optional[str] = None
    verify_signature: bool = True
    signature_header: str = "X-XPay-Signature"


@dataclass(frozen=True)
class XPayConfig:
    """
    Immutable SDK configuration.

    ``environment`` may be left as ``None``, in which case it is derived from
    the API-key prefix. ``base_url`` falls back to the hosted X-Pay API.
    """

    api_key: str
    merchant_id: Optional[str] = None
    environment: Optional[str] = None
    base_url: Optional[str] = None
    timeout: int = DEFAULT_TIMEOUT_SECONDS
    webhook: WebhookSettings = field(default_factory=WebhookSettings)

    def __post_init__(self) -> None:
        if not self.api_key or not self.api_key.strip():
            raise ConfigError("API key is required")
        if self.environment is not None and self.environment not in ENVIRONMENTS:
            raise ConfigError(
                f"environment must be one of {', '.join(ENVIRONMENTS)}, got '{self.environment}'"
            )
        if self.timeout <= 0:
            raise ConfigError("timeout must be a positive number of seconds")

    @property
    def resolved_environment(self) -> str:
        if self.environment is not None:
            return self.environment
        return detect_environment(self.api_key)

    @property
    def resolved_base_url(self) -> str:
        if self.base_url:
            return self.base_url.rstrip("/")
        return DEFAULT_BASE_URL

    @property
    def is_live(self) -> bool:
        return self.resolved_environment == "live"

    @classmethod
    def from_environment(cls, environment: XPayEnvironment) -> "XPayConfig":
        api_key = environment.get("XPAY_API_KEY")
        if api_key is None:
            raise ConfigError("XPAY_API_KEY must be provided")

        timeout_raw = environment.get("XPAY_TIMEOUT", str(DEFAULT_TIMEOUT_SECONDS))
        try:
            timeout = int(timeout_raw)
        except ValueError as exc:
            raise ConfigError(
                f"XPAY_TIMEOUT must be a whole number of seconds, got '{timeout_raw}'"
            ) from exc

        try:
            verify_signature = environment.get_bool("XPAY_WEBHOOK_VERIFY_SIGNATURE", True)
        except ValueError as exc:
            raise ConfigError(str(exc)) from exc

        env_name = environment.get("XPAY_ENVIRONMENT")
        return cls(
            api_key=api_key.strip(),
            merchant_id=environment.get("XPAY_MERCHANT_ID"),
            environment=env_name.strip().lower() if env_name else None,
            base_url=environment.get("XPAY_BASE_URL"),
            timeout=timeout,
            webhook=WebhookSettings(
                secret=environment.get("XPAY_WEBHOOK_SECRET"),
                verify_signature=verify_signature,
            ),
        )


def load_config(
    *,
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
) -> XPayConfig:
    """
    Build an :class:`XPayConfig` from environment variables, a ``.env``
    file, keyword arguments, or any combination of the three.
    """
    merged_overrides = dict(overrides or {})
    if parameters is not None:
        merged_overrides.update(parameters.as_overrides())
    merged_overrides.update(
        XPayParameters(
            api_key=api_key,
            merchant_id=merchant_id,
            environment=environment,
            base_url=base_url,
            timeout=timeout,
            webhook_secret=webhook_secret,
            verify_webhook_signature=verify_webhook_signature,
        ).as_overrides()
    )

    resolved = build_environment(env_file=env_file, base=base, overrides=merged_overrides)
    return XPayConfig.from_environment(resolved)
