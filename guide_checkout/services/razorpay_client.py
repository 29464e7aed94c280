from functools import lru_cache
from typing import Any, Dict

import razorpay
import requests

from guide_checkout.config import settings
from guide_checkout.exceptions import GatewayError

# SDK errors plus transport failures from the requests session it wraps
RAZORPAY_CALL_ERRORS = (
    razorpay.errors.BadRequestError,
    razorpay.errors.ServerError,
    razorpay.errors.GatewayError,
    requests.RequestException,
    ValueError,
)


@lru_cache(maxsize=1)
def get_razorpay_client() -> razorpay.Client:
    """Shared gateway client. Used as a FastAPI dependency so tests can swap it."""
    return razorpay.Client(
        auth=(settings.RAZORPAY_KEY_ID, settings.RAZORPAY_KEY_SECRET)
    )


def create_gateway_order(client: razorpay.Client, options: Dict[str, Any]) -> Dict[str, Any]:
    try:
        return client.order.create(options)
    except RAZORPAY_CALL_ERRORS as e:
        raise GatewayError(f"order.create failed: {e}") from e


def fetch_gateway_payment(client: razorpay.Client, payment_id: str) -> Dict[str, Any]:
    try:
        return client.payment.fetch(payment_id)
    except RAZORPAY_CALL_ERRORS as e:
        raise GatewayError(f"payment.fetch({payment_id}) failed: {e}") from e
