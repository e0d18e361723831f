"""Pydantic schemas for user endpoints."""

from datetime import datetime
from typing import Annotated, Literal

from pydantic import BaseModel, StringConstraints, field_validator

Role = Literal["admin", "viewer", "user"]

RequiredStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]

# bcrypt only looks at the first 72 bytes
MAX_PASSWORD_BYTES = 72


def _check_password_length(v: str) -> str:
    if len(v.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValueError(f"password must be at most {MAX_PASSWORD_BYTES} bytes")
    return v


class UserCreate(BaseModel):
    email: RequiredStr
    password: Annotated[str, StringConstraints(min_length=1)]
    first_name: RequiredStr
    last_name: RequiredStr
    role: Role = "user"
    is_active: bool = True

    @field_validator("password")
    @classmethod
    def password_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("password must not be blank")
        return _check_password_length(v)


class UserUpdate(BaseModel):
    email: RequiredStr
    first_name: RequiredStr
    last_name: RequiredStr
    role: Role
    password: str | None = None
    is_active: bool | None = None

    @field_validator("password")
    @classmethod
    def blank_password_is_absent(cls, v: str | None) -> str | None:
        if not v:
            return None
        return _check_password_length(v)


class UserResponse(BaseModel):
    id: int
    email: str
    password_hash: str
    first_name: str
    last_name: str
    role: str
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class UserDeletedResponse(BaseModel):
    message: str
    user: UserResponse
