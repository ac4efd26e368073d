"""
Command-line interface for checking an X-Pay integration.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Iterable, Mapping, Sequence, Tuple

from .api import XPay, create_client
from .core.config import ConfigError, load_config
from .core.errors import XPayError
from .core.webhooks import generate_signature


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )


def _env_override(value: str) -> Tuple[str, str]:
    if "=" not in value:
        raise argparse.ArgumentTypeError("Overrides must look like KEY=VALUE")
    key, val = value.split("=", 1)
    key = key.strip()
    if not key:
        raise argparse.ArgumentTypeError("Override key must not be empty")
    return key, val


def _collect_overrides(pairs: Iterable[Tuple[str, str]]) -> dict[str, str]:
    overrides: dict[str, str] = {}
    for key, value in pairs:
        overrides[key] = value
    return overrides


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="xpay",
        description="Check connectivity and configuration of an X-Pay merchant account",
    )
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to the .env file containing XPAY_* settings (default: .env)",
    )
    parser.add_argument(
        "--set",
        action="append",
        type=_env_override,
        metavar="KEY=VALUE",
        default=None,
        help="Override an XPAY_* variable without editing the .env file",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Python logging level (default: INFO)",
    )

    commands = parser.add_subparsers(dest="command", required=True)
    commands.add_parser("ping", help="Test API connectivity and authentication")
    commands.add_parser("payment-methods", help="List the payment methods enabled for the merchant")

    sign = commands.add_parser(
        "sign-webhook",
        help="Print the X-XPay-Signature value for a payload, for testing receivers",
    )
    sign.add_argument("payload_file", help="File holding the raw webhook body ('-' for stdin)")
    sign.add_argument(
        "--secret",
        help="Webhook secret (default: XPAY_WEBHOOK_SECRET)",
    )
    return parser


def _describe_methods(listing: Any) -> None:
    if not isinstance(listing, Mapping):
        logging.warning("Unexpected payment methods payload: %s", listing)
        return

    logging.info("Environment: %s", listing.get("environment", "unknown"))
    methods = [m for m in listing.get("payment_methods") or [] if isinstance(m, Mapping)]
    if not methods:
        logging.warning("No payment methods available")
        return

    for method in methods:
        logging.info(
            "%-14s %-24s enabled=%-5s currencies=%s",
            method.get("type", "N/A"),
            method.get("name", "N/A"),
            "yes" if method.get("enabled") else "no",
            ", ".join(method.get("currencies") or []),
        )
    enabled = sum(1 for method in methods if method.get("enabled"))
    logging.info("Total: %d methods, %d enabled", len(methods), enabled)


def _report_error(exc: XPayError) -> None:
    logging.error("X-Pay API error: %s (code %s)", exc.message, exc.code)
    if exc.status is not None:
        logging.error("HTTP status: %s", exc.status)
    if exc.details:
        logging.error("Details: %s", json.dumps(exc.details, indent=2, default=str))


def _run_ping(client: XPay) -> int:
    logging.info("Using merchant ID %s...", client.merchant_id[:8])
    logging.info("Environment: %s", client.config.resolved_environment)
    logging.info("Base URL: %s", client.config.resolved_base_url)

    result = client.ping()
    if not result.get("success"):
        logging.error("API connection failed")
        return 1
    logging.info("API connection successful at %s", result["timestamp"])

    _describe_methods(client.get_payment_methods())
    return 0


def _run_sign(args: argparse.Namespace, overrides: dict[str, str]) -> int:
    secret = args.secret
    if not secret:
        config = load_config(env_file=args.env_file, overrides=overrides)
        secret = config.webhook.secret
    if not secret:
        logging.error("No webhook secret given; pass --secret or set XPAY_WEBHOOK_SECRET")
        return 1

    if args.payload_file == "-":
        payload = sys.stdin.buffer.read()
    else:
        try:
            payload = Path(args.payload_file).read_bytes()
        except OSError as exc:
            logging.error("Could not read %s: %s", args.payload_file, exc)
            return 1
    print(generate_signature(payload, secret))
    return 0


def run_cli(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)
    overrides = _collect_overrides(args.set or ())

    try:
        if args.command == "sign-webhook":
            return _run_sign(args, overrides)
        client = create_client(env_file=args.env_file, overrides=overrides)
    except ConfigError as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1

    try:
        if args.command == "ping":
            return _run_ping(client)
        _describe_methods(client.get_payment_methods())
        return 0
    except XPayError as exc:
        _report_error(exc)
        return 1


def main() -> None:
    sys.exit(run_cli())


if __name__ == "__main__":
    main()
