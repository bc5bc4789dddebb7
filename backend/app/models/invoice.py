from datetime import date
from decimal import Decimal

from sqlalchemy import JSON, Date, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base, TimestampMixin, UUIDMixin


class Invoice(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "invoices"

    invoice_number: Mapped[str] = mapped_column(String(100), unique=True, nullable=False, index=True)
    invoice_date: Mapped[date] = mapped_column(Date, nullable=False)

    # Transport / compliance references, often back-filled after creation
    challan_no: Mapped[str | None] = mapped_column(String(100), nullable=True)
    challan_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    po_no: Mapped[str | None] = mapped_column(String(100), nullable=True)
    eway_no: Mapped[str | None] = mapped_column(String(100), nullable=True)

    customer_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    customer_email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    customer_address: Mapped[str | None] = mapped_column(Text, nullable=True)

    packaging: Mapped[Decimal | None] = mapped_column(Numeric(18, 2), nullable=True)
    transportation_and_others: Mapped[Decimal | None] = mapped_column(Numeric(18, 2), nullable=True)
    subtotal: Mapped[Decimal | None] = mapped_column(Numeric(18, 2), nullable=True)
    gst_rate: Mapped[Decimal | None] = mapped_column(Numeric(5, 2), nullable=True)  # percent
    gst_amount: Mapped[Decimal | None] = mapped_column(Numeric(18, 2), nullable=True)
    total: Mapped[Decimal | None] = mapped_column(Numeric(18, 2), nullable=True)

    template: Mapped[str | None] = mapped_column(String(50), nullable=True)  # classic, modern, minimal, professional
    items: Mapped[list] = mapped_column(JSON, nullable=False, default=list)  # [{id, name, quantity, price, category}]
    company_details: Mapped[dict | None] = mapped_column(JSON, nullable=True)
