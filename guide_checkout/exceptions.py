"""
Checkout error hierarchy.

Every error carries the HTTP status it maps to and a message that is safe
to show a client. Gateway and mail details stay in ``detail`` and are only
ever logged.
"""

from typing import Optional


class CheckoutError(Exception):
    """Base exception for checkout failures."""

    status_code = 500
    public_message = "Internal server error"

    def __init__(self, detail: Optional[str] = None, public_message: Optional[str] = None) -> None:
        if public_message is not None:
            self.public_message = public_message
        self.detail = detail or self.public_message
        super().__init__(self.detail)


class OrderValidationError(CheckoutError):
    """Malformed or missing request fields. Never contacts the gateway."""

    status_code = 400
    public_message = "Invalid request"


class SignatureMismatchError(CheckoutError):
    """Supplied signature does not match the recomputed HMAC."""

    status_code = 400
    public_message = "Payment verification failed"


class GatewayError(CheckoutError):
    """A call into Razorpay failed (network, auth, quota, unknown id)."""

    status_code = 500
    public_message = "Payment gateway request failed"


class PaymentNotFoundError(CheckoutError):
    status_code = 404
    public_message = "Payment not found"


class PaymentNotCapturedError(CheckoutError):
    status_code = 403
    public_message = "Payment not completed"

    def __init__(self, payment_id: str, status: Optional[str]) -> None:
        self.payment_id = payment_id
        self.status = status
        super().__init__(f"Payment {payment_id} has status {status!r}")


class DeliverableMissingError(CheckoutError):
    """The guide file is not where the configuration says it is."""

    status_code = 404
    public_message = "Guide not available"


class NotificationError(CheckoutError):
    """Delivery email could not be sent. Logged, never returned."""


class WebhookNotConfiguredError(CheckoutError):
    public_message = "Webhook processing failed"
