"""Item category endpoints."""
import logging
import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.utils import commit_or_conflict
from app.db.session import get_session
from app.models.category import Category
from app.models.item import Item
from app.schemas.inventory import CategoryCreate, CategoryOut

logger = logging.getLogger(__name__)

router = APIRouter()

DUPLICATE_DETAIL = "Category already exists"


@router.post(
    "",
    response_model=CategoryOut,
    status_code=status.HTTP_201_CREATED,
    summary="Create a category",
)
async def create_category(
    payload: CategoryCreate,
    db: Annotated[AsyncSession, Depends(get_session)],
):
    if not payload.name:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Category name is required")

    existing = await db.execute(select(Category.id).where(Category.name == payload.name))
    if existing.first() is not None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=DUPLICATE_DETAIL)

    category = Category(name=payload.name)
    db.add(category)
    await commit_or_conflict(db, DUPLICATE_DETAIL, status_code=status.HTTP_400_BAD_REQUEST)
    await db.refresh(category)

    logger.info("Category %r created (%s)", category.name, category.id)
    return CategoryOut.model_validate(category)


@router.get(
    "",
    response_model=list[CategoryOut],
    summary="List categories by name",
)
async def list_categories(
    db: Annotated[AsyncSession, Depends(get_session)],
):
    categories = (await db.execute(select(Category).order_by(Category.name))).scalars().all()
    return [CategoryOut.model_validate(c) for c in categories]


@router.delete(
    "/{category_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete an unused category",
)
async def delete_category(
    category_id: uuid.UUID,
    db: Annotated[AsyncSession, Depends(get_session)],
):
    category = (
        await db.execute(select(Category).where(Category.id == category_id))
    ).scalar_one_or_none()
    if category is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Category not found")

    in_use = await db.execute(select(Item.id).where(Item.category_id == category_id).limit(1))
    if in_use.first() is not None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Category still has items; move or delete them first",
        )

    await db.delete(category)
    await db.commit()
    logger.info("Category %s deleted", category_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
