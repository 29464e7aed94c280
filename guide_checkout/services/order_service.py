import logging
import re
import time
from datetime import datetime, timezone
from typing import Any, Optional

import razorpay

from guide_checkout.config import settings
from guide_checkout.exceptions import GatewayError, OrderValidationError
from guide_checkout.schemas.checkout_schemas import OrderResponse
from guide_checkout.services.razorpay_client import create_gateway_order

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def is_valid_email(email: Optional[str]) -> bool:
    if not email or not isinstance(email, str):
        return False
    return EMAIL_PATTERN.match(email) is not None


def parse_amount(amount: Any) -> int:
    """Amount in minor units (paise). Accepts ints and integer strings."""
    if isinstance(amount, bool):
        raise OrderValidationError(public_message="Amount must be a positive integer")

    if isinstance(amount, str):
        amount = amount.strip()
        if not (amount.isascii() and amount.isdigit()):
            raise OrderValidationError(public_message="Amount must be a positive integer")
        amount = int(amount)

    if not isinstance(amount, int) or amount <= 0:
        raise OrderValidationError(public_message="Amount must be a positive integer")

    return amount


def new_receipt() -> str:
    # Traceability only; uniqueness under concurrency is not required.
    return f"guide_{int(time.time() * 1000)}"


def create_order(client: razorpay.Client, amount: Any, email: Optional[str]) -> OrderResponse:
    """
    Validate a purchase and create the matching gateway order.

    Raises OrderValidationError before any network call when the input is
    bad, GatewayError when Razorpay refuses or is unreachable.
    """
    if amount in (None, "", 0) or not email:
        raise OrderValidationError(public_message="Amount and email are required")

    if not is_valid_email(email):
        raise OrderValidationError(public_message="Invalid email format")

    amount = parse_amount(amount)

    options = {
        "amount": amount,
        "currency": settings.CURRENCY,
        "receipt": new_receipt(),
        "notes": {
            "product": settings.PRODUCT_NAME,
            "customer_email": email,
            "purchase_date": datetime.now(timezone.utc).isoformat(),
        },
    }

    try:
        order = create_gateway_order(client, options)
    except GatewayError as e:
        logger.error(f"Order creation failed: {e.detail}")
        raise GatewayError(e.detail, public_message="Failed to create order") from e

    logger.info(f"Order created: {order.get('id')}")

    try:
        return OrderResponse(
            id=order["id"],
            amount=order["amount"],
            currency=order["currency"],
            receipt=order["receipt"],
        )
    except (KeyError, TypeError, ValueError) as e:
        logger.error(f"Unexpected order payload from gateway: {order!r}")
        raise GatewayError(
            "Malformed order response", public_message="Failed to create order"
        ) from e
