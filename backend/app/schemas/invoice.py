"""Pydantic schemas for invoice API endpoints."""
import uuid
from datetime import date, datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# ─── Line items / company block ───

class InvoiceItem(BaseModel):
    id: str | None = None
    name: str
    quantity: float = Field(default=0, ge=0)
    price: float = 0
    category: str | None = None


class CompanyDetails(BaseModel):
    name: str | None = None
    address: str | None = None
    city_state: str | None = None
    phone: str | None = None
    email: str | None = None


# ─── Create / update ───

class InvoiceBase(BaseModel):
    challan_no: str | None = None
    challan_date: date | None = None
    po_no: str | None = None
    eway_no: str | None = None
    customer_name: str | None = None
    customer_email: str | None = None
    customer_address: str | None = None
    packaging: Decimal | None = None
    transportation_and_others: Decimal | None = None
    subtotal: Decimal | None = None
    gst_rate: Decimal | None = None
    gst_amount: Decimal | None = None
    total: Decimal | None = None
    template: str | None = None
    company_details: CompanyDetails | None = None


class InvoiceCreate(InvoiceBase):
    invoice_number: str = Field(min_length=1, max_length=100)
    invoice_date: date
    items: list[InvoiceItem] = []


class InvoiceUpdate(InvoiceBase):
    """Partial update. Only fields present in the request body are written."""
    invoice_number: str | None = Field(default=None, min_length=1, max_length=100)
    invoice_date: date | None = None
    items: list[InvoiceItem] | None = None


# ─── Responses ───

class InvoiceOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    invoice_number: str
    invoice_date: date
    challan_no: str | None
    challan_date: date | None
    po_no: str | None
    eway_no: str | None
    customer_name: str | None
    customer_email: str | None
    customer_address: str | None
    packaging: Decimal | None
    transportation_and_others: Decimal | None
    subtotal: Decimal | None
    gst_rate: Decimal | None
    gst_amount: Decimal | None
    total: Decimal | None
    template: str | None
    items: list[dict[str, Any]] = []
    company_details: dict[str, Any] | None = None
    created_at: datetime
    updated_at: datetime


class InvoiceListResponse(BaseModel):
    items: list[InvoiceOut]
    total: int
    page: int
    page_size: int


class NextInvoiceNumberResponse(BaseModel):
    invoice_number: str


class InvoiceQRCodeResponse(BaseModel):
    invoice_id: uuid.UUID
    url: str
    qr_code: str  # data:image/png;base64,...
