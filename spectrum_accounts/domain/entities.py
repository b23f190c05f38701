from dataclasses import dataclass
from datetime import datetime
from typing import Literal

ADMIN_ROLE = "admin"
USER_ROLE = "user"

Role = Literal["admin", "user"]


@dataclass
class User:
    id: int | None = None
    email: str | None = None
    firstname: str = ""
    lastname: str = ""
    phone: str = ""
    address: str = ""
    is_admin: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self):
        if self.email:
            self.email = self.email.strip().lower()
            if not self.email:
                raise ValueError("email cannot be empty")
        else:
            raise ValueError("email is required")

    @property
    def role(self) -> Role:
        return ADMIN_ROLE if self.is_admin else USER_ROLE


@dataclass(frozen=True)
class Subject:
    """Identity behind a bearer token."""

    user_id: int
    role: Role = USER_ROLE

    @property
    def is_admin(self) -> bool:
        return self.role == ADMIN_ROLE


@dataclass(frozen=True)
class OneTimeCode:
    subject_id: int
    value: str
    ttl_seconds: int


@dataclass(frozen=True)
class VerificationOutcome:
    """Result of one issuance; built once per call and never persisted."""

    user_id: int
    generated_code: str
    expires_in_seconds: int
    email: str
    send_error: str | None = None

    @property
    def delivered(self) -> bool:
        return self.send_error is None
