from pydantic import BaseModel, EmailStr, Field


class UserCreateIn(BaseModel):
    firstname: str = Field(..., min_length=1, max_length=100)
    lastname: str = Field(..., min_length=1, max_length=100)
    email: EmailStr = Field(..., description="The email of the user", max_length=255)
    phone: str = Field(..., min_length=11, max_length=11)
    address: str = Field(..., min_length=1)
    password: str = Field(..., description="The password of the user", min_length=8)


class UserUpdateIn(BaseModel):
    id: int
    email: EmailStr = Field(..., max_length=255)
    phone: str = Field(..., min_length=11, max_length=11)
    address: str = Field(..., min_length=1)


class UserPasswordIn(BaseModel):
    id: int
    password: str = Field(..., min_length=8)


class UserIdIn(BaseModel):
    id: int


class CodeVerifyIn(BaseModel):
    user_id: int
    code: str = Field(..., min_length=1)
