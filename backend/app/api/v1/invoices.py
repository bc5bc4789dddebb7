"""Invoice CRUD, numbering and QR code endpoints."""
import logging
import uuid
from collections import defaultdict
from decimal import Decimal
from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.utils import commit_or_conflict
from app.db.session import get_session
from app.models.invoice import Invoice
from app.models.item import Item
from app.schemas.invoice import (
    InvoiceCreate,
    InvoiceItem,
    InvoiceListResponse,
    InvoiceOut,
    InvoiceQRCodeResponse,
    InvoiceUpdate,
    NextInvoiceNumberResponse,
)
from app.services import qr as qr_svc
from app.services.invoice_numbers import next_invoice_number

logger = logging.getLogger(__name__)

router = APIRouter()

REQUIRED_FIELDS = ("invoice_number", "invoice_date")


# ─── Helpers ───

def _column_values(payload: InvoiceCreate | InvoiceUpdate, partial: bool) -> dict[str, Any]:
    """Flatten a request body into column values (nested blocks become JSON)."""
    data = payload.model_dump(exclude_unset=partial)
    if "items" in data:
        data["items"] = [item.model_dump(mode="json") for item in payload.items or []]
    if "company_details" in data:
        details = payload.company_details
        data["company_details"] = details.model_dump(mode="json") if details is not None else None
    return data


async def _get_invoice_or_404(db: AsyncSession, invoice_id: uuid.UUID) -> Invoice:
    result = await db.execute(select(Invoice).where(Invoice.id == invoice_id))
    invoice = result.scalar_one_or_none()
    if invoice is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Invoice not found.")
    return invoice


async def _ensure_number_free(
    db: AsyncSession, invoice_number: str, exclude_id: uuid.UUID | None = None
) -> None:
    stmt = select(Invoice.id).where(Invoice.invoice_number == invoice_number)
    if exclude_id is not None:
        stmt = stmt.where(Invoice.id != exclude_id)
    if (await db.execute(stmt)).first() is not None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Invoice number '{invoice_number}' already exists.",
        )


def _stock_demand(lines: list[InvoiceItem]) -> dict[uuid.UUID, Decimal]:
    """Total quantity per stock item. Lines without an id are ad-hoc and not tracked."""
    demand: dict[uuid.UUID, Decimal] = defaultdict(Decimal)
    for line in lines:
        if line.id is None or line.quantity <= 0:
            continue
        try:
            item_id = uuid.UUID(line.id)
        except ValueError:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Item '{line.id}' not found.",
            )
        demand[item_id] += Decimal(str(line.quantity))
    return demand


async def _reserve_stock(db: AsyncSession, lines: list[InvoiceItem]) -> None:
    """Decrement stock for every tracked line inside the current transaction.

    Each decrement is conditional on enough stock being left, so two invoices
    racing for the last units cannot both succeed. The caller commits or
    rolls back; a raised HTTPException leaves earlier decrements to that
    rollback.
    """
    for item_id, quantity in sorted(_stock_demand(lines).items(), key=lambda kv: str(kv[0])):
        stmt = (
            update(Item)
            .where(Item.id == item_id, Item.quantity >= quantity)
            .values(quantity=Item.quantity - quantity)
            .execution_options(synchronize_session=False)
        )
        if (await db.execute(stmt)).rowcount == 1:
            continue

        available = (
            await db.execute(select(Item.quantity).where(Item.id == item_id))
        ).scalar_one_or_none()
        if available is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Item '{item_id}' not found.",
            )
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Insufficient stock for item '{item_id}': requested {quantity}, available {available}.",
        )


# ─── Create ───

@router.post(
    "",
    response_model=InvoiceOut,
    status_code=status.HTTP_201_CREATED,
    summary="Create an invoice",
)
async def create_invoice(
    payload: InvoiceCreate,
    db: Annotated[AsyncSession, Depends(get_session)],
):
    await _ensure_number_free(db, payload.invoice_number)

    try:
        await _reserve_stock(db, payload.items)
    except HTTPException:
        await db.rollback()
        raise

    invoice = Invoice(**_column_values(payload, partial=False))
    db.add(invoice)
    await commit_or_conflict(db, "Invoice number already exists.")
    await db.refresh(invoice)

    logger.info("Invoice %s created (%s)", invoice.invoice_number, invoice.id)
    return InvoiceOut.model_validate(invoice)


# ─── List ───

@router.get(
    "",
    response_model=InvoiceListResponse,
    summary="List invoices, newest first",
)
async def list_invoices(
    db: Annotated[AsyncSession, Depends(get_session)],
    page: int = Query(default=1, ge=1),
    page_size: int = Query(default=20, ge=1, le=100),
):
    total = (await db.execute(select(func.count()).select_from(Invoice))).scalar_one()

    offset = (page - 1) * page_size
    stmt = select(Invoice).order_by(Invoice.created_at.desc()).offset(offset).limit(page_size)
    invoices = (await db.execute(stmt)).scalars().all()

    return InvoiceListResponse(
        items=[InvoiceOut.model_validate(inv) for inv in invoices],
        total=total,
        page=page,
        page_size=page_size,
    )


# ─── Next number ───

@router.get(
    "/next-number",
    response_model=NextInvoiceNumberResponse,
    summary="Suggest the next invoice number in the DE series",
)
async def get_next_invoice_number(
    db: Annotated[AsyncSession, Depends(get_session)],
):
    numbers = (await db.execute(select(Invoice.invoice_number))).scalars().all()
    return NextInvoiceNumberResponse(invoice_number=next_invoice_number(numbers))


# ─── Detail ───

@router.get(
    "/{invoice_id}",
    response_model=InvoiceOut,
    summary="Get an invoice",
)
async def get_invoice(
    invoice_id: uuid.UUID,
    db: Annotated[AsyncSession, Depends(get_session)],
):
    return InvoiceOut.model_validate(await _get_invoice_or_404(db, invoice_id))


# ─── Update ───

@router.patch(
    "/{invoice_id}",
    response_model=InvoiceOut,
    summary="Update invoice fields",
)
async def update_invoice(
    invoice_id: uuid.UUID,
    payload: InvoiceUpdate,
    db: Annotated[AsyncSession, Depends(get_session)],
):
    invoice = await _get_invoice_or_404(db, invoice_id)
    values = _column_values(payload, partial=True)

    for field in REQUIRED_FIELDS:
        if field in values and values[field] is None:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail=f"{field} cannot be cleared.",
            )
    if values.get("invoice_number") and values["invoice_number"] != invoice.invoice_number:
        await _ensure_number_free(db, values["invoice_number"], exclude_id=invoice.id)

    for field, value in values.items():
        setattr(invoice, field, value)

    await commit_or_conflict(db, "Invoice number already exists.")
    await db.refresh(invoice)
    logger.info("Invoice %s updated: %s", invoice.id, sorted(values))
    return InvoiceOut.model_validate(invoice)


# ─── Delete ───

@router.delete(
    "/{invoice_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete an invoice",
)
async def delete_invoice(
    invoice_id: uuid.UUID,
    db: Annotated[AsyncSession, Depends(get_session)],
):
    invoice = await _get_invoice_or_404(db, invoice_id)
    await db.delete(invoice)
    await db.commit()
    logger.info("Invoice %s deleted", invoice_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ─── QR code ───

@router.get(
    "/{invoice_id}/qr",
    response_model=InvoiceQRCodeResponse,
    summary="QR code linking to the invoice viewer",
)
async def get_invoice_qr_code(
    invoice_id: uuid.UUID,
    db: Annotated[AsyncSession, Depends(get_session)],
):
    invoice = await _get_invoice_or_404(db, invoice_id)
    return InvoiceQRCodeResponse(
        invoice_id=invoice.id,
        url=qr_svc.build_invoice_url(invoice.id),
        qr_code=qr_svc.generate_qr_code(invoice.id),
    )
