import razorpay
from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse

from guide_checkout.config import settings
from guide_checkout.services.payment_service import authorize_download
from guide_checkout.services.razorpay_client import get_razorpay_client

router = APIRouter()


@router.get("/download-guide/{payment_id}")
def download_guide(
    payment_id: str,
    client: razorpay.Client = Depends(get_razorpay_client),
):
    # Re-checked against the gateway on every request
    guide = authorize_download(client, payment_id)

    return FileResponse(
        path=guide,
        media_type="application/pdf",
        filename=settings.GUIDE_DOWNLOAD_NAME,
    )
