import logging
import os

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from guide_checkout.config import settings
from guide_checkout.exceptions import CheckoutError
from guide_checkout.routes import checkout, downloads, health

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(title="Bridal Makeup Guide Checkout API")

    # "*" allows any origin; an explicit list is enforced as an allow-list
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Razorpay-Signature"],
    )

    @app.exception_handler(CheckoutError)
    async def checkout_error_handler(request: Request, exc: CheckoutError):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.public_message},
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        logger.info(f"Rejected body for {request.url.path}: {exc.errors()}")
        content = {"error": "Invalid request body"}
        if request.url.path.endswith("/verify-payment"):
            content = {"success": False, "error": "Missing payment details"}
        return JSONResponse(status_code=400, content=content)

    app.include_router(health.router, prefix="/api", tags=["Health"])
    app.include_router(checkout.router, prefix="/api", tags=["Checkout"])
    app.include_router(downloads.router, prefix="/api", tags=["Downloads"])

    # Must come last: a mount at "/" shadows anything registered after it.
    if settings.FRONTEND_DIR and os.path.isdir(settings.FRONTEND_DIR):
        frontend = os.path.realpath(settings.FRONTEND_DIR)
        if os.path.realpath(settings.GUIDE_PATH).startswith(frontend + os.sep):
            logger.warning(
                "GUIDE_PATH is inside FRONTEND_DIR; the guide is publicly downloadable"
            )
        app.mount(
            "/",
            StaticFiles(directory=settings.FRONTEND_DIR, html=True),
            name="frontend",
        )

    mode = "TEST" if settings.test_mode else "LIVE"
    logger.info(f"Checkout API ready, Razorpay mode: {mode}")
    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=settings.PORT)
