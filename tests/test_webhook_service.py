"""
Tests for webhook authentication and event dispatch.
"""

import json

import pytest

from guide_checkout.config import settings
from guide_checkout.exceptions import (
    OrderValidationError,
    SignatureMismatchError,
    WebhookNotConfiguredError,
)
from guide_checkout.services.webhook_service import handle_webhook
from tests.conftest import compute_signature, make_client


def _body(event, payment_id="pay_TEST123"):
    return json.dumps(
        {"event": event, "payload": {"payment": {"entity": {"id": payment_id}}}}
    ).encode()


def _sign(body):
    return compute_signature(body, "test_webhook_secret")


class TestHandleWebhook:
    @pytest.mark.parametrize("event", ["payment.captured", "payment.failed"])
    def test_known_events(self, event, caplog):
        caplog.set_level("INFO")
        body = _body(event)

        envelope = handle_webhook(make_client(), body, _sign(body))

        assert envelope.event == event
        assert envelope.payment_id() == "pay_TEST123"
        assert "pay_TEST123" in caplog.text

    def test_unknown_event_accepted(self, caplog):
        caplog.set_level("INFO")
        body = _body("order.paid")

        envelope = handle_webhook(make_client(), body, _sign(body))

        assert envelope.event == "order.paid"
        assert "Unhandled webhook event: order.paid" in caplog.text

    def test_bad_signature(self):
        body = _body("payment.captured")
        with pytest.raises(SignatureMismatchError) as exc:
            handle_webhook(make_client(), body, compute_signature(body, "other"))
        assert exc.value.public_message == "Invalid signature"

    def test_missing_signature(self):
        with pytest.raises(SignatureMismatchError):
            handle_webhook(make_client(), _body("payment.captured"), None)

    def test_signed_garbage_body(self):
        body = b"not json"
        with pytest.raises(OrderValidationError):
            handle_webhook(make_client(), body, _sign(body))

    def test_envelope_without_payment_entity(self):
        body = json.dumps({"event": "payment.captured", "payload": {}}).encode()
        assert handle_webhook(make_client(), body, _sign(body)).payment_id() is None

    @pytest.mark.parametrize(
        "payload",
        [
            {"payment": "x"},
            {"payment": {"entity": ["pay_1"]}},
            {"payment": {"entity": {"id": 42}}},
        ],
    )
    def test_malformed_payment_entity(self, payload):
        body = json.dumps({"event": "payment.captured", "payload": payload}).encode()

        envelope = handle_webhook(make_client(), body, _sign(body))

        assert envelope.payment_id() is None

    def test_secret_not_configured(self, monkeypatch):
        monkeypatch.setattr(settings, "RAZORPAY_WEBHOOK_SECRET", None)
        with pytest.raises(WebhookNotConfiguredError):
            handle_webhook(make_client(), _body("payment.captured"), "sig")
