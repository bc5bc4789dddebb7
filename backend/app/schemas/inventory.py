"""Pydantic schemas for categories, stock items and customers."""
import uuid
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


def _normalize_name(value: str) -> str:
    return value.strip().lower()


# ─── Categories ───

class CategoryCreate(BaseModel):
    name: str = Field(max_length=100)

    @field_validator("name")
    @classmethod
    def _clean_name(cls, value: str) -> str:
        return _normalize_name(value)


class CategoryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    created_at: datetime


# ─── Items ───

class ItemCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    category_id: uuid.UUID
    quantity: Decimal = Field(ge=0)
    price: Decimal = Field(ge=0)
    hsn_code: str = Field(min_length=1, max_length=20)


class ItemUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    category_id: uuid.UUID | None = None
    quantity: Decimal | None = Field(default=None, ge=0)
    price: Decimal | None = Field(default=None, ge=0)
    hsn_code: str | None = Field(default=None, min_length=1, max_length=20)


class ItemOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    category: CategoryOut
    quantity: Decimal
    price: Decimal
    hsn_code: str
    created_at: datetime
    updated_at: datetime


# ─── Customers ───

class CustomerCreate(BaseModel):
    name: str = Field(max_length=255)
    email: EmailStr
    address: str = Field(min_length=1)
    gst_number: str | None = Field(default=None, max_length=15)
    pan_number: str | None = Field(default=None, max_length=10)

    @field_validator("name")
    @classmethod
    def _clean_name(cls, value: str) -> str:
        return _normalize_name(value)

    @field_validator("email")
    @classmethod
    def _lowercase_email(cls, value: str) -> str:
        return value.lower()


class CustomerOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    email: str
    address: str
    gst_number: str | None
    pan_number: str | None
    created_at: datetime
