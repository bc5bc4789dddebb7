"""User management endpoints."""
import logging
import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.utils import commit_or_conflict
from app.core.security import hash_password, is_strong_password
from app.db.session import get_session
from app.models.user import User
from app.schemas.user import UserCreate, UserListResponse, UserOut, UserUpdate

logger = logging.getLogger(__name__)

router = APIRouter()

WEAK_PASSWORD_DETAIL = (
    "Password must be at least 8 characters and contain an uppercase letter, "
    "a lowercase letter and a digit."
)


async def _email_taken(db: AsyncSession, email: str) -> bool:
    result = await db.execute(select(User.id).where(User.email == email))
    return result.first() is not None


async def _get_user_or_404(db: AsyncSession, user_id: uuid.UUID) -> User:
    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user


# ─── GET /users ───

@router.get(
    "",
    response_model=UserListResponse,
    summary="List users with pagination",
)
async def list_users(
    db: Annotated[AsyncSession, Depends(get_session)],
    page: int = Query(default=1, ge=1),
    page_size: int = Query(default=20, ge=1, le=100),
    role: str | None = Query(default=None),
):
    stmt = select(User)
    if role:
        stmt = stmt.where(User.role == role)

    count_stmt = select(func.count()).select_from(stmt.subquery())
    total = (await db.execute(count_stmt)).scalar_one()

    offset = (page - 1) * page_size
    stmt = stmt.order_by(User.created_at.desc()).offset(offset).limit(page_size)
    users = (await db.execute(stmt)).scalars().all()

    return UserListResponse(
        items=[UserOut.model_validate(user) for user in users],
        total=total,
        page=page,
        page_size=page_size,
    )


# ─── POST /users ───

@router.post(
    "",
    response_model=UserOut,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new user",
)
async def create_user(
    user_data: UserCreate,
    db: Annotated[AsyncSession, Depends(get_session)],
):
    if not is_strong_password(user_data.password):
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=WEAK_PASSWORD_DETAIL)

    if await _email_taken(db, user_data.email):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email already exists")

    new_user = User(
        username=user_data.username,
        email=user_data.email,
        password_hash=hash_password(user_data.password),
        role=user_data.role,
        is_active=True,
    )
    db.add(new_user)
    await commit_or_conflict(db, "Email already exists")
    await db.refresh(new_user)

    logger.info("User %s created with role %s", new_user.id, new_user.role)
    return UserOut.model_validate(new_user)


# ─── GET /users/{id} ───

@router.get(
    "/{user_id}",
    response_model=UserOut,
    summary="Get a user",
)
async def get_user(
    user_id: uuid.UUID,
    db: Annotated[AsyncSession, Depends(get_session)],
):
    return UserOut.model_validate(await _get_user_or_404(db, user_id))


# ─── PATCH /users/{id} ───

@router.patch(
    "/{user_id}",
    response_model=UserOut,
    summary="Update a user",
)
async def update_user(
    user_id: uuid.UUID,
    user_data: UserUpdate,
    db: Annotated[AsyncSession, Depends(get_session)],
):
    user = await _get_user_or_404(db, user_id)

    if user_data.username is not None:
        user.username = user_data.username
    if user_data.role is not None:
        user.role = user_data.role
    if user_data.is_active is not None:
        user.is_active = user_data.is_active

    await db.commit()
    await db.refresh(user)
    return UserOut.model_validate(user)


# ─── DELETE /users/{id} ───

@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a user",
)
async def delete_user(
    user_id: uuid.UUID,
    db: Annotated[AsyncSession, Depends(get_session)],
):
    user = await _get_user_or_404(db, user_id)
    await db.delete(user)
    await db.commit()
    logger.info("User %s deleted", user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
