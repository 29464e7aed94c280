from typing import List, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    RAZORPAY_KEY_ID: str
    RAZORPAY_KEY_SECRET: str
    RAZORPAY_WEBHOOK_SECRET: Optional[str] = None

    BREVO_API_KEY: Optional[str] = None
    MAIL_FROM: Optional[str] = None
    STORE_NAME: str = "Anjli Gupta Makeup"

    PRODUCT_NAME: str = "The Ultimate Bridal Makeup Guide"
    CURRENCY: str = "INR"

    GUIDE_PATH: str = "files/Makeupguide.pdf"
    GUIDE_DOWNLOAD_NAME: str = "Ultimate-Bridal-Makeup-Guide.pdf"
    ATTACH_GUIDE_TO_EMAIL: bool = True

    CORS_ORIGINS: List[str] = ["*"]
    FRONTEND_DIR: Optional[str] = None

    LOG_LEVEL: str = "INFO"
    PORT: int = 3000

    @property
    def mail_configured(self) -> bool:
        return bool(self.BREVO_API_KEY and self.MAIL_FROM)

    @property
    def test_mode(self) -> bool:
        return "test" in self.RAZORPAY_KEY_ID

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "allow"


settings = Settings()
