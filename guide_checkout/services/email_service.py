import base64
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Tuple

import requests

from guide_checkout.config import settings
from guide_checkout.exceptions import NotificationError
from guide_checkout.services.order_service import is_valid_email
from guide_checkout.utils.template import render_template

logger = logging.getLogger(__name__)

BREVO_API_URL = "https://api.brevo.com/v3/smtp/email"


def send_email(
    to: str,
    subject: str,
    html: str,
    attachments: Optional[List[Tuple[str, bytes, str]]] = None,
) -> bool:
    """
    Send email via Brevo.

    attachments: List of tuples
        (filename, file_bytes, mime_type)
    """

    if not is_valid_email(to):
        logger.warning(f"Refusing to email invalid address: {to}")
        return False

    payload = {
        "sender": {
            "email": settings.MAIL_FROM,
            "name": settings.STORE_NAME,
        },
        "to": [{"email": to}],
        "subject": subject,
        "htmlContent": html,
    }

    if attachments:
        payload["attachment"] = [
            {
                "name": filename,
                "content": base64.b64encode(file_bytes).decode("utf-8"),
            }
            for filename, file_bytes, mime_type in attachments
        ]

    headers = {
        "api-key": settings.BREVO_API_KEY,
        "Content-Type": "application/json",
    }

    try:
        response = requests.post(
            BREVO_API_URL,
            json=payload,
            headers=headers,
            timeout=10,
        )

        if response.status_code >= 400:
            logger.error(
                f"Brevo email failed ({response.status_code}): {response.text}"
            )
            return False

        logger.info(f"Brevo email sent to {to}")
        return True

    except requests.RequestException:
        logger.exception("Brevo email exception")
        return False


def load_guide_attachment() -> Optional[Tuple[str, bytes, str]]:
    """Guide PDF as an attachment tuple, or None if it cannot be read."""
    path = Path(settings.GUIDE_PATH)
    try:
        return (settings.GUIDE_DOWNLOAD_NAME, path.read_bytes(), "application/pdf")
    except OSError:
        logger.warning(f"Guide not readable at {path}, sending email without attachment")
        return None


def send_guide_email(email: str, payment_id: str) -> None:
    """Thank-you email carrying the payment id and, when readable, the guide."""
    attachments = []
    if settings.ATTACH_GUIDE_TO_EMAIL:
        attachment = load_guide_attachment()
        if attachment:
            attachments.append(attachment)

    html = render_template(
        "user_emails/guide_purchase.html",
        product_name=settings.PRODUCT_NAME,
        store_name=settings.STORE_NAME,
        payment_id=payment_id,
        attached=bool(attachments),
        year=datetime.now(timezone.utc).year,
    )

    sent = send_email(
        to=email,
        subject=f"Your {settings.PRODUCT_NAME} - Thank You!",
        html=html,
        attachments=attachments or None,
    )
    if not sent:
        raise NotificationError(f"Guide email to {email} was not delivered")

    logger.info(f"Guide email sent to: {email}")
