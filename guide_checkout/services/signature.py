"""
Razorpay callback signature checks.

Payment signatures cover ``"<order_id>|<payment_id>"`` keyed by the key
secret the client was built with; webhook signatures cover the raw request
body keyed by the webhook secret. The SDK raises on mismatch.
"""

from typing import Optional

import razorpay


def is_valid_payment_signature(
    client: razorpay.Client,
    order_id: str,
    payment_id: str,
    signature: Optional[str],
) -> bool:
    if not signature:
        return False
    try:
        client.utility.verify_payment_signature({
            "razorpay_order_id": order_id,
            "razorpay_payment_id": payment_id,
            "razorpay_signature": signature,
        })
    except razorpay.errors.SignatureVerificationError:
        return False
    except TypeError:
        # compare_digest refuses non-ASCII str input
        return False
    return True


def is_valid_webhook_signature(
    client: razorpay.Client,
    body: bytes,
    signature: Optional[str],
    secret: str,
) -> bool:
    if not signature:
        return False
    try:
        client.utility.verify_webhook_signature(body.decode("utf-8"), signature, secret)
    except (razorpay.errors.SignatureVerificationError, TypeError, UnicodeDecodeError):
        return False
    return True
