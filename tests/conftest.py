"""Pytest configuration and fixtures."""

import base64
import hashlib
import hmac
import json
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

SECRET = "test_channel_secret"
TOKEN = "test_access_token"


def sign(secret: str, body: bytes) -> str:
    return base64.b64encode(hmac.new(secret.encode(), body, hashlib.sha256).digest()).decode()


def text_event(token: str, text: str) -> dict:
    return {
        "type": "message",
        "replyToken": token,
        "source": {"type": "user", "userId": "U1234"},
        "message": {"id": "100", "type": "text", "text": text},
    }


def envelope(*events) -> bytes:
    return json.dumps({"destination": "Uxxxx", "events": list(events)}, ensure_ascii=False).encode()


class FakeClient:
    """Records replies; fails on the tokens listed in fail_on."""

    def __init__(self, fail_on=()):
        self.fail_on = set(fail_on)
        self.replies = []

    def reply_message(self, reply_token, *texts):
        from lambdas.line_webhook.errors import LineApiError

        if reply_token in self.fail_on:
            raise LineApiError("boom", status_code=500)
        self.replies.append((reply_token, texts))


@pytest.fixture
def client():
    return FakeClient()
