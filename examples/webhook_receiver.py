"""
Tiny webhook receiver showing how to authenticate X-Pay deliveries.

Run it, register ``http://<host>:<port>/webhooks/xpay`` as a webhook
endpoint, and point XPAY_WEBHOOK_SECRET at the endpoint's secret.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from http.server import BaseHTTPRequestHandler, HTTPServer

from xpay import ConfigError, WebhookRejected, WebhookSettings, load_config, verify_webhook_request


def build_handler(settings: WebhookSettings) -> type[BaseHTTPRequestHandler]:
    class WebhookHandler(BaseHTTPRequestHandler):
        def do_POST(self) -> None:  # noqa: N802
            length = int(self.headers.get("Content-Length") or 0)
            payload = self.rfile.read(length)
            signature = self.headers.get(settings.signature_header)

            try:
                event = verify_webhook_request(payload, signature, settings)
            except WebhookRejected as exc:
                self._reply(exc.status, {"error": exc.message})
                return

            logging.info("Received %s for %s", event["type"], json.dumps(event["data"]))
            self._reply(200, {"received": True})

        def _reply(self, status: int, body: dict) -> None:
            encoded = json.dumps(body).encode("utf-8")
            self.send_response(status)
            self.send_header("Content-Type", "application/json")
            self.send_header("Content-Length", str(len(encoded)))
            self.end_headers()
            self.wfile.write(encoded)

        def log_message(self, format: str, *args: object) -> None:
            logging.info("%s - %s", self.address_string(), format % args)

    return WebhookHandler


def main() -> int:
    parser = argparse.ArgumentParser(description="Receive and verify X-Pay webhooks")
    parser.add_argument("--env-file", default=".env")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")

    try:
        config = load_config(env_file=args.env_file)
    except ConfigError as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1

    server = HTTPServer((args.host, args.port), build_handler(config.webhook))
    logging.info("Listening for X-Pay webhooks on http://%s:%d", args.host, args.port)
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        pass
    finally:
        server.server_close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
