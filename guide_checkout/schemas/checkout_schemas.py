# guide_checkout/schemas/checkout_schemas.py
from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel


class CreateOrderRequest(BaseModel):
    # Untyped so pydantic cannot coerce true to 1; the order service
    # validates and gives missing and malformed values the same 400.
    amount: Any = None
    email: Optional[str] = None


class OrderResponse(BaseModel):
    id: str
    amount: int
    currency: str
    receipt: str


class VerifyPaymentRequest(BaseModel):
    razorpay_order_id: Optional[str] = None
    razorpay_payment_id: Optional[str] = None
    razorpay_signature: Optional[str] = None
    email: Optional[str] = None


class VerifyPaymentResponse(BaseModel):
    success: bool = True
    message: str = "Payment verified successfully"
    payment_id: str
    download_url: str


class PaymentRecord(BaseModel):
    """Payment as reported by the gateway. Never stored."""

    id: str
    amount: Optional[int] = None
    status: Optional[str] = None
    email: Optional[str] = None


class WebhookEnvelope(BaseModel):
    event: Optional[str] = None
    payload: Dict[str, Any] = {}

    def payment_id(self) -> Optional[str]:
        payment = self.payload.get("payment")
        if not isinstance(payment, dict):
            return None
        entity = payment.get("entity")
        if not isinstance(entity, dict):
            return None
        payment_id = entity.get("id")
        return payment_id if isinstance(payment_id, str) else None


class HealthResponse(BaseModel):
    status: str
    message: str
    timestamp: datetime
