"""Customer endpoints."""
import logging
import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.utils import commit_or_conflict
from app.db.session import get_session
from app.models.customer import Customer
from app.schemas.inventory import CustomerCreate, CustomerOut

logger = logging.getLogger(__name__)

router = APIRouter()

DUPLICATE_DETAIL = "Customer already exists"


@router.post(
    "",
    response_model=CustomerOut,
    status_code=status.HTTP_201_CREATED,
    summary="Create a customer",
)
async def create_customer(
    payload: CustomerCreate,
    db: Annotated[AsyncSession, Depends(get_session)],
):
    if not payload.name:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Customer name is required")

    existing = await db.execute(select(Customer.id).where(Customer.email == payload.email))
    if existing.first() is not None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=DUPLICATE_DETAIL)

    customer = Customer(**payload.model_dump())
    db.add(customer)
    # GST and PAN numbers are unique too; any of the three can trip the constraint.
    await commit_or_conflict(db, DUPLICATE_DETAIL, status_code=status.HTTP_400_BAD_REQUEST)
    await db.refresh(customer)

    logger.info("Customer %s created (%s)", customer.email, customer.id)
    return CustomerOut.model_validate(customer)


@router.get(
    "",
    response_model=list[CustomerOut],
    summary="List customers",
)
async def list_customers(
    db: Annotated[AsyncSession, Depends(get_session)],
):
    customers = (await db.execute(select(Customer).order_by(Customer.name))).scalars().all()
    return [CustomerOut.model_validate(c) for c in customers]


@router.delete(
    "/{customer_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a customer",
)
async def delete_customer(
    customer_id: uuid.UUID,
    db: Annotated[AsyncSession, Depends(get_session)],
):
    customer = (
        await db.execute(select(Customer).where(Customer.id == customer_id))
    ).scalar_one_or_none()
    if customer is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Customer not found")

    await db.delete(customer)
    await db.commit()
    logger.info("Customer %s deleted", customer_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
