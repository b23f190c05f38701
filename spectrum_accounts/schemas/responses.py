from datetime import datetime
from typing import Generic, Literal, TypeVar

from pydantic import BaseModel, Field

from spectrum_accounts.domain.entities import User, VerificationOutcome

T = TypeVar("T")


class UserOut(BaseModel):
    id: int = Field(..., description="The id of the user")
    lastname: str
    firstname: str
    phone: str
    address: str
    email: str = Field(..., description="The email of the user")
    is_admin: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_user(cls, user: User) -> "UserOut":
        return cls(
            id=user.id,
            lastname=user.lastname,
            firstname=user.firstname,
            phone=user.phone,
            address=user.address,
            email=user.email,
            is_admin=user.is_admin,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class Envelope(BaseModel, Generic[T]):
    status: Literal["success"] = "success"
    statusCode: int = 200
    message: str
    data: T | None = None


class VerificationData(BaseModel):
    user_id: int
    generated_code: str
    expires_at: int = Field(..., description="Seconds until the code expires")
    email: str


class CodeSentOut(BaseModel):
    status: Literal["success"] = "success"
    statusCode: int = 200
    message: str = "code sent to user successfully"
    anyError: str | None = None
    data: VerificationData

    @classmethod
    def from_outcome(cls, outcome: VerificationOutcome) -> "CodeSentOut":
        return cls(
            anyError=outcome.send_error,
            data=VerificationData(
                user_id=outcome.user_id,
                generated_code=outcome.generated_code,
                expires_at=outcome.expires_in_seconds,
                email=outcome.email,
            ),
        )


class TokenOut(BaseModel):
    token: str
