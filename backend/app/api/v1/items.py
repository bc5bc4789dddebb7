"""Stock item endpoints."""
import logging
import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import get_session
from app.models.category import Category
from app.models.item import Item
from app.schemas.inventory import ItemCreate, ItemOut, ItemUpdate

logger = logging.getLogger(__name__)

router = APIRouter()


# ─── Helpers ───

async def _ensure_category(db: AsyncSession, category_id: uuid.UUID) -> None:
    result = await db.execute(select(Category.id).where(Category.id == category_id))
    if result.first() is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Category not found")


async def _get_item_or_404(db: AsyncSession, item_id: uuid.UUID) -> Item:
    # populate_existing so the eagerly loaded category follows a changed category_id
    stmt = select(Item).where(Item.id == item_id).execution_options(populate_existing=True)
    item = (await db.execute(stmt)).scalar_one_or_none()
    if item is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Item not found")
    return item


# ─── Create ───

@router.post(
    "",
    response_model=ItemOut,
    status_code=status.HTTP_201_CREATED,
    summary="Add a stock item",
)
async def create_item(
    payload: ItemCreate,
    db: Annotated[AsyncSession, Depends(get_session)],
):
    await _ensure_category(db, payload.category_id)

    item = Item(**payload.model_dump())
    db.add(item)
    await db.commit()

    item = await _get_item_or_404(db, item.id)
    logger.info("Item %r created (%s), %s in stock", item.name, item.id, item.quantity)
    return ItemOut.model_validate(item)


# ─── List / detail ───

@router.get(
    "",
    response_model=list[ItemOut],
    summary="List stock items with their category",
)
async def list_items(
    db: Annotated[AsyncSession, Depends(get_session)],
    category_id: uuid.UUID | None = None,
):
    stmt = select(Item).order_by(Item.name)
    if category_id is not None:
        stmt = stmt.where(Item.category_id == category_id)
    items = (await db.execute(stmt)).scalars().all()
    return [ItemOut.model_validate(i) for i in items]


@router.get(
    "/{item_id}",
    response_model=ItemOut,
    summary="Get a stock item",
)
async def get_item(
    item_id: uuid.UUID,
    db: Annotated[AsyncSession, Depends(get_session)],
):
    return ItemOut.model_validate(await _get_item_or_404(db, item_id))


# ─── Update ───

@router.patch(
    "/{item_id}",
    response_model=ItemOut,
    summary="Update a stock item",
)
async def update_item(
    item_id: uuid.UUID,
    payload: ItemUpdate,
    db: Annotated[AsyncSession, Depends(get_session)],
):
    item = await _get_item_or_404(db, item_id)
    values = payload.model_dump(exclude_unset=True)

    nulls = sorted(field for field, value in values.items() if value is None)
    if nulls:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Cannot clear required fields: {', '.join(nulls)}",
        )
    if "category_id" in values:
        await _ensure_category(db, values["category_id"])

    for field, value in values.items():
        setattr(item, field, value)
    await db.commit()

    item = await _get_item_or_404(db, item_id)
    logger.info("Item %s updated: %s", item_id, sorted(values))
    return ItemOut.model_validate(item)


# ─── Delete ───

@router.delete(
    "/{item_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a stock item",
)
async def delete_item(
    item_id: uuid.UUID,
    db: Annotated[AsyncSession, Depends(get_session)],
):
    item = await _get_item_or_404(db, item_id)
    await db.delete(item)
    await db.commit()
    logger.info("Item %s deleted", item_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
