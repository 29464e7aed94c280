import json
import logging
from typing import Optional

import razorpay
from pydantic import ValidationError

from guide_checkout.config import settings
from guide_checkout.exceptions import (
    OrderValidationError,
    SignatureMismatchError,
    WebhookNotConfiguredError,
)
from guide_checkout.schemas.checkout_schemas import WebhookEnvelope
from guide_checkout.services.signature import is_valid_webhook_signature

logger = logging.getLogger(__name__)


def _on_payment_captured(envelope: WebhookEnvelope) -> None:
    logger.info(f"Payment captured: {envelope.payment_id()}")


def _on_payment_failed(envelope: WebhookEnvelope) -> None:
    logger.info(f"Payment failed: {envelope.payment_id()}")


EVENT_HANDLERS = {
    "payment.captured": _on_payment_captured,
    "payment.failed": _on_payment_failed,
}


def parse_envelope(body: bytes) -> WebhookEnvelope:
    try:
        return WebhookEnvelope.model_validate(json.loads(body))
    except (ValueError, ValidationError) as e:
        raise OrderValidationError(
            f"Unparseable webhook body: {e}", public_message="Invalid webhook payload"
        ) from e


def handle_webhook(
    client: razorpay.Client, body: bytes, signature: Optional[str]
) -> WebhookEnvelope:
    """
    Authenticate a raw webhook body and dispatch its event.

    The HMAC is computed over the exact bytes received. Events without a
    handler are accepted and only logged.
    """
    secret = settings.RAZORPAY_WEBHOOK_SECRET
    if not secret:
        logger.error("Webhook received but RAZORPAY_WEBHOOK_SECRET is not set")
        raise WebhookNotConfiguredError("RAZORPAY_WEBHOOK_SECRET is not set")

    if not is_valid_webhook_signature(client, body, signature, secret):
        logger.warning("Webhook signature verification failed")
        raise SignatureMismatchError(public_message="Invalid signature")

    envelope = parse_envelope(body)
    logger.info(f"Webhook received: {envelope.event}")

    handler = EVENT_HANDLERS.get(envelope.event)
    if handler is None:
        logger.info(f"Unhandled webhook event: {envelope.event}")
    else:
        handler(envelope)

    return envelope
