from datetime import datetime, timezone

from fastapi import APIRouter

from guide_checkout.schemas.checkout_schemas import HealthResponse

router = APIRouter()

@router.get("/health", response_model=HealthResponse)
def health_check():
    return {
        "status": "ok",
        "message": "Server is running",
        "timestamp": datetime.now(timezone.utc),
    }
