"""
Application settings.
Read once from the environment (and an optional .env file) at startup.
"""
import os
from dataclasses import dataclass, field
from typing import Optional, List

from dotenv import load_dotenv

DEFAULT_EMAIL_API_URL = "https://api.brevo.com/v3/smtp/email"


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    value = os.environ.get(name)
    if value is None or not value.strip():
        return default
    return value.strip()


@dataclass(frozen=True)
class Settings:
    mongo_url: str = "mongodb://localhost:27017"
    db_name: str = "bloodlink"
    mongo_timeout_ms: int = 2000
    admin_key: Optional[str] = None
    jwt_secret: Optional[str] = None
    token_ttl_hours: float = 2
    match_limit: int = 5
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"
    port: int = 5000

    # Email channel
    email_api_key: Optional[str] = None
    email_api_url: str = DEFAULT_EMAIL_API_URL
    email_sender: Optional[str] = None
    admin_email: Optional[str] = None

    # SMS channel
    twilio_sid: Optional[str] = None
    twilio_auth: Optional[str] = None
    twilio_phone: Optional[str] = None
    admin_phone: Optional[str] = None

    @property
    def email_enabled(self) -> bool:
        return bool(self.email_api_key and self.email_sender and self.admin_email)

    @property
    def sms_enabled(self) -> bool:
        return bool(self.twilio_sid and self.twilio_auth and self.twilio_phone and self.admin_phone)

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None) -> "Settings":
        load_dotenv(dotenv_path)
        origins = _env("CORS_ORIGINS", "*")
        return cls(
            mongo_url=_env("MONGO_URL", cls.mongo_url),
            db_name=_env("DB_NAME", cls.db_name),
            mongo_timeout_ms=int(_env("MONGO_TIMEOUT_MS", "2000")),
            admin_key=_env("ADMIN_KEY"),
            jwt_secret=_env("JWT_SECRET"),
            token_ttl_hours=float(_env("TOKEN_TTL_HOURS", "2")),
            match_limit=int(_env("MATCH_LIMIT", "5")),
            cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
            log_level=_env("LOG_LEVEL", cls.log_level).upper(),
            port=int(_env("PORT", "5000")),
            email_api_key=_env("EMAIL_API_KEY"),
            email_api_url=_env("EMAIL_API_URL", DEFAULT_EMAIL_API_URL),
            email_sender=_env("EMAIL_SENDER"),
            admin_email=_env("ADMIN_EMAIL"),
            twilio_sid=_env("TWILIO_SID"),
            twilio_auth=_env("TWILIO_AUTH"),
            twilio_phone=_env("TWILIO_PHONE"),
            admin_phone=_env("ADMIN_PHONE"),
        )
