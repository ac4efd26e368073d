"""
Minimal script that uses the public API to create and look up a payment.
"""

from __future__ import annotations

import argparse
import logging
import sys

from xpay import ConfigError, PaymentRequest, XPayError, create_client
from xpay.core import currency


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create an X-Pay payment using the SDK API")
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to the .env file containing XPAY_* settings",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Python logging level (default: INFO)",
    )
    parser.add_argument("--amount", default="10.00", help="Amount in major units (default: 10.00)")
    parser.add_argument(
        "--payment-method",
        default="stripe",
        choices=sorted(currency.PAYMENT_METHOD_CURRENCIES),
        help="Payment method to charge with (default: stripe)",
    )
    parser.add_argument(
        "--currency",
        help="ISO currency code; defaults to the payment method's default currency",
    )
    parser.add_argument("--description", default="Example payment from the X-Pay Python SDK")
    parser.add_argument("--customer-id", help="Attach the payment to an existing customer")
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )

    try:
        client = create_client(env_file=args.env_file)
    except ConfigError as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1

    request = PaymentRequest(
        amount=args.amount,
        payment_method=args.payment_method,
        currency=args.currency,
        description=args.description,
        customer_id=args.customer_id,
        metadata={"source": "examples/create_payment.py"},
    )

    try:
        payment = client.payments.create(request)
    except XPayError as exc:
        logging.error("Payment creation failed: %s (code %s, status %s)", exc.message, exc.code, exc.status)
        return 1

    logging.info(
        "Created payment %s for %s (%s)",
        payment.id,
        currency.format_amount(payment.amount, payment.currency, is_smallest_unit=False),
        payment.status,
    )
    if payment.transaction_url:
        logging.info("Send the customer to %s", payment.transaction_url)
    if payment.instructions:
        logging.info("Instructions: %s", payment.instructions)

    try:
        latest = client.payments.retrieve(payment.id)
    except XPayError as exc:
        logging.error("Could not re-read payment %s: %s", payment.id, exc)
        return 1

    logging.info("Payment %s is now %s", latest.id, latest.status)
    return 0


if __name__ == "__main__":
    sys.exit(main())
