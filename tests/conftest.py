"""
Pytest configuration and shared fixtures.

Environment variables are seeded before any package import because the
settings object is built at import time.
"""

import hashlib
import hmac
import os
from typing import Union
from unittest.mock import MagicMock

import pytest
import razorpay
from fastapi.testclient import TestClient

os.environ.setdefault("RAZORPAY_KEY_ID", "rzp_test_key")
os.environ.setdefault("RAZORPAY_KEY_SECRET", "test_key_secret")
os.environ.setdefault("RAZORPAY_WEBHOOK_SECRET", "test_webhook_secret")
os.environ.pop("BREVO_API_KEY", None)
os.environ.pop("MAIL_FROM", None)

from guide_checkout.config import settings
from guide_checkout.main import app
from guide_checkout.services.razorpay_client import get_razorpay_client

PDF_BYTES = b"%PDF-1.4\n% test guide\n%%EOF\n"


def compute_signature(message: Union[str, bytes], secret: str) -> str:
    """Hex HMAC-SHA256, the way Razorpay signs callbacks."""
    if isinstance(message, str):
        message = message.encode("utf-8")
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).hexdigest()


def sign_payment(order_id: str, payment_id: str, secret: str = "test_key_secret") -> str:
    return compute_signature(f"{order_id}|{payment_id}", secret)


def make_client(secret: str = "test_key_secret") -> razorpay.Client:
    """Real SDK client (signature utility intact) with the HTTP resources mocked."""
    client = razorpay.Client(auth=("rzp_test_key", secret))
    client.order = MagicMock()
    client.payment = MagicMock()
    return client


@pytest.fixture
def gateway() -> razorpay.Client:
    client = make_client()
    client.order.create.return_value = {
        "id": "order_TEST123",
        "entity": "order",
        "amount": 49900,
        "currency": "INR",
        "receipt": "guide_1700000000000",
        "status": "created",
    }
    client.payment.fetch.return_value = {
        "id": "pay_TEST123",
        "amount": 49900,
        "status": "captured",
        "email": "a@b.com",
    }
    return client


@pytest.fixture
def client(gateway):
    app.dependency_overrides[get_razorpay_client] = lambda: gateway
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def guide_file(tmp_path, monkeypatch):
    path = tmp_path / "Makeupguide.pdf"
    path.write_bytes(PDF_BYTES)
    monkeypatch.setattr(settings, "GUIDE_PATH", str(path))
    return path


@pytest.fixture
def mail_enabled(monkeypatch):
    monkeypatch.setattr(settings, "BREVO_API_KEY", "xkeysib-test")
    monkeypatch.setattr(settings, "MAIL_FROM", "guides@example.com")
