import uuid
from decimal import Decimal

from sqlalchemy import ForeignKey, Numeric, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base, TimestampMixin, UUIDMixin


class Item(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "items"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    category_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("categories.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    quantity: Mapped[Decimal] = mapped_column(Numeric(18, 3), nullable=False, default=0)  # units in stock
    price: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False)
    hsn_code: Mapped[str] = mapped_column(String(20), nullable=False)

    category: Mapped["Category"] = relationship("Category", back_populates="items", lazy="selectin")
