"""
Payment verification and download gating.

Nothing here is stored. The signature check authorizes the client to
proceed; the download gate re-asks the gateway for the payment status on
every request and serves the guide only while it reports ``captured``.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

import razorpay

from guide_checkout.config import settings
from guide_checkout.exceptions import (
    CheckoutError,
    DeliverableMissingError,
    GatewayError,
    OrderValidationError,
    PaymentNotCapturedError,
    PaymentNotFoundError,
    SignatureMismatchError,
)
from guide_checkout.schemas.checkout_schemas import PaymentRecord, VerifyPaymentRequest
from guide_checkout.services.email_service import send_guide_email
from guide_checkout.services.razorpay_client import fetch_gateway_payment
from guide_checkout.services.signature import is_valid_payment_signature

logger = logging.getLogger(__name__)

CAPTURED = "captured"


@dataclass
class VerificationResult:
    payment_id: str
    download_url: str
    payment: Optional[PaymentRecord] = None
    email_attempted: bool = False
    email_sent: bool = False


def download_url_for(payment_id: str) -> str:
    return f"/api/download-guide/{payment_id}"


def fetch_payment(client: razorpay.Client, payment_id: str) -> PaymentRecord:
    data = fetch_gateway_payment(client, payment_id)
    try:
        return PaymentRecord(
            id=data["id"],
            amount=data.get("amount"),
            status=data.get("status"),
            email=data.get("email"),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise GatewayError(f"Malformed payment payload for {payment_id}") from e


def verify_payment(
    client: razorpay.Client,
    request: VerifyPaymentRequest,
    notify: Callable[[str, str], None] = send_guide_email,
) -> VerificationResult:
    """
    Run one verification attempt.

    Raises OrderValidationError for missing fields and SignatureMismatchError
    when the HMAC does not match; neither touches the network. After a match
    the payment lookup and the email are best effort and never change the
    outcome.
    """
    order_id = request.razorpay_order_id
    payment_id = request.razorpay_payment_id
    signature = request.razorpay_signature

    if not order_id or not payment_id or not signature:
        raise OrderValidationError(public_message="Missing payment details")

    if not is_valid_payment_signature(client, order_id, payment_id, signature):
        logger.warning(f"Signature verification failed for order {order_id}")
        raise SignatureMismatchError()

    logger.info(f"Payment verified successfully: {payment_id}")
    result = VerificationResult(
        payment_id=payment_id,
        download_url=download_url_for(payment_id),
    )

    try:
        result.payment = fetch_payment(client, payment_id)
        logger.info(
            f"Payment details: id={result.payment.id} amount={result.payment.amount} "
            f"status={result.payment.status}"
        )
    except GatewayError as e:
        logger.warning(f"Could not fetch payment {payment_id}: {e.detail}")

    if request.email and settings.mail_configured:
        result.email_attempted = True
        try:
            notify(request.email, payment_id)
            result.email_sent = True
        except CheckoutError as e:
            logger.error(f"Error sending email for {payment_id}: {e.detail}")
        except Exception:
            logger.exception(f"Error sending email for {payment_id}")

    return result


def authorize_download(client: razorpay.Client, payment_id: str) -> Path:
    """
    Path of the guide if the gateway currently reports the payment captured.

    PaymentNotFoundError: lookup failed. PaymentNotCapturedError: any other
    status. DeliverableMissingError: paid, but the file is missing.
    """
    try:
        payment = fetch_payment(client, payment_id)
    except GatewayError as e:
        logger.warning(f"Payment lookup failed for download {payment_id}: {e.detail}")
        raise PaymentNotFoundError(e.detail) from e

    if payment.status != CAPTURED:
        logger.warning(
            f"Download refused for {payment_id}: status {payment.status!r}"
        )
        raise PaymentNotCapturedError(payment_id, payment.status)

    guide = Path(settings.GUIDE_PATH)
    if not guide.is_file():
        logger.error(
            f"Configuration error: guide missing at {guide} "
            f"(payment {payment_id} is captured)"
        )
        raise DeliverableMissingError(f"Guide missing at {guide}")

    return guide
