from pydantic import BaseModel
from pydantic_settings import BaseSettings
from typing import Optional
from functools import lru_cache
from ..utils.exceptions import ConfigurationException


class Settings(BaseSettings):
    # App Settings
    APP_NAME: str = "LifeMate"
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"

    # Database Settings
    DATABASE_URL: str = "sqlite:///./lifemate.db"

    # frontend url
    FRONTEND_URL: str = "http://localhost:3000"

    # Email Settings
    EMAIL_FROM: str = "noreply@lifemate.com"
    EMAIL_FROM_NAME: str = "LifeMate"
    SMTP_SERVER: str = "smtp.gmail.com"
    SMTP_PORT: int = 587
    SMTP_USERNAME: Optional[str] = None
    SMTP_PASSWORD: Optional[str] = None
    SMTP_USE_TLS: bool = True
    SMTP_TIMEOUT: Optional[float] = None

    # Auth Settings
    SECRET_KEY: str = "dev-secret-key-change-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 15

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "allow"


@lru_cache()
def get_settings() -> Settings:
    return Settings()


class EmailSettings(BaseModel):
    """Everything the email service needs, resolved once at construction."""

    base_url: str
    sender_name: str
    sender_address: str
    brand_name: str = "LifeMate"

    @property
    def sender(self) -> str:
        return f'"{self.sender_name}" <{self.sender_address}>'

    @classmethod
    def from_settings(cls, settings: Settings) -> "EmailSettings":
        if not settings.FRONTEND_URL:
            raise ConfigurationException("FRONTEND_URL must be set to build email links")
        if not settings.EMAIL_FROM:
            raise ConfigurationException("EMAIL_FROM must be set to send email")
        return cls(
            base_url=settings.FRONTEND_URL.rstrip("/"),
            sender_name=settings.EMAIL_FROM_NAME,
            sender_address=settings.EMAIL_FROM,
            brand_name=settings.APP_NAME,
        )
