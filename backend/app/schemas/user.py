"""Pydantic schemas for user management."""
import uuid
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, EmailStr, field_validator

Role = Literal["admin", "user", "manager"]


class UserCreate(BaseModel):
    username: str
    email: EmailStr
    password: str
    role: Role = "user"

    @field_validator("email")
    @classmethod
    def _lowercase_email(cls, value: str) -> str:
        return value.lower()


class UserUpdate(BaseModel):
    username: str | None = None
    role: Role | None = None
    is_active: bool | None = None


class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    username: str
    email: str
    role: str
    is_active: bool
    is_email_verified: bool
    last_login: datetime | None
    created_at: datetime


class UserListResponse(BaseModel):
    items: list[UserOut]
    total: int
    page: int
    page_size: int
