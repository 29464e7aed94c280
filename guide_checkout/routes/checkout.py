import logging
from typing import Optional

import razorpay
from fastapi import APIRouter, Depends, Header, Request
from fastapi.responses import JSONResponse

from guide_checkout.exceptions import CheckoutError
from guide_checkout.schemas.checkout_schemas import (
    CreateOrderRequest,
    OrderResponse,
    VerifyPaymentRequest,
    VerifyPaymentResponse,
)
from guide_checkout.services import order_service, payment_service, webhook_service
from guide_checkout.services.razorpay_client import get_razorpay_client

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/create-order", response_model=OrderResponse)
def create_order(
    payload: CreateOrderRequest,
    client: razorpay.Client = Depends(get_razorpay_client),
):
    return order_service.create_order(client, payload.amount, payload.email)


@router.post("/verify-payment", response_model=VerifyPaymentResponse)
def verify_payment(
    payload: VerifyPaymentRequest,
    client: razorpay.Client = Depends(get_razorpay_client),
):
    try:
        result = payment_service.verify_payment(client, payload)
    except CheckoutError as e:
        return JSONResponse(
            status_code=e.status_code,
            content={"success": False, "error": e.public_message},
        )
    except Exception:
        logger.exception("Error verifying payment")
        return JSONResponse(
            status_code=500,
            content={"success": False, "error": "Error verifying payment"},
        )

    return VerifyPaymentResponse(
        payment_id=result.payment_id,
        download_url=result.download_url,
    )


@router.post("/webhook")
async def razorpay_webhook(
    request: Request,
    x_razorpay_signature: Optional[str] = Header(default=None),
    client: razorpay.Client = Depends(get_razorpay_client),
):
    body = await request.body()
    try:
        webhook_service.handle_webhook(client, body, x_razorpay_signature)
    except CheckoutError:
        raise
    except Exception:
        logger.exception("Webhook error")
        return JSONResponse(
            status_code=500, content={"error": "Webhook processing failed"}
        )

    return {"status": "ok"}
