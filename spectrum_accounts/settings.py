from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_DEFAULT_TEMPLATE = Path(__file__).parent / "templates" / "verification.html"


class Settings(BaseSettings):
    # App
    app_env: str = "dev"
    log_level: str = "INFO"

    # Infra
    database_url: str = "postgresql://app:app@db:5432/app"
    redis_url: str = "redis://redis:6379/0"
    redis_password: str | None = None
    cache_timeout_seconds: float = 3.0

    # Verification codes
    code_ttl_seconds: int = 600

    # Mail
    mail_transport: Literal["smtp", "http"] = "smtp"
    smtp_host: str = "smtp.gmail.com"
    smtp_port: int = 587
    smtp_username: str = ""
    smtp_password: str = ""
    mail_sender: str = ""
    mail_subject: str = "Verification Code"
    mail_relay_url: str = "http://smtp-mock:8025"
    mail_timeout_seconds: float = 20.0
    # whole-send bound for the notifier; the socket timeout above is per operation
    mail_deadline_seconds: float = 60.0
    verification_template_path: Path = _DEFAULT_TEMPLATE

    # Accounts
    bcrypt_rounds: int = 12
    session_ttl_seconds: int = 86400
    list_page_size: int = 10

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="",
        case_sensitive=False,
        extra="ignore",
    )

    @model_validator(mode="after")
    def _deadline_outlasts_socket_timeout(self) -> "Settings":
        if self.mail_deadline_seconds <= self.mail_timeout_seconds:
            raise ValueError(
                "mail_deadline_seconds must be greater than mail_timeout_seconds"
            )
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
