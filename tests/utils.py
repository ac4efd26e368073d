# tests/utils.py
import json

import requests


def make_response(status, body=None, raw=None, reason=None):
    resp = requests.Response()
    resp.status_code = status
    resp.reason = reason
    if raw is not None:
        resp._content = raw.encode("utf-8") if isinstance(raw, str) else raw
    elif body is not None:
        resp._content = json.dumps(body).encode("utf-8")
    else:
        resp._content = b""
    resp.headers["Content-Type"] = "application/json"
    return resp


class FakeSession:
    """Stands in for requests.Session: replays queued responses or errors."""

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.calls = []

    def queue(self, *outcomes):
        self.outcomes.extend(outcomes)

    def request(self, method, url, **kwargs):
        self.calls.append({"method": method, "url": url, **kwargs})
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome

    @property
    def last(self):
        return self.calls[-1]


def payment_body(**overrides):
    body = {
        "id": "pay_123",
        "status": "pending",
        "amount": "10.00",
        "currency": "USD",
        "payment_method": "stripe",
        "client_secret": "pi_secret",
        "created_at": "2024-01-15T10:30:00Z",
    }
    body.update(overrides)
    return body
