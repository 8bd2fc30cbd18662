"""Admin-facing routes for user and role management."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.cache import QueryCache, get_query_cache
from src.core.database import get_db
from src.core.deps import require_hospital_admin
from src.modules.users.models import User
from src.modules.users.schemas import RoleAssignment, UserAdminPublic

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/admin", tags=["admin-users"])


@router.get("/users", response_model=list[UserAdminPublic])
async def list_users(
    _: User = Depends(require_hospital_admin),
    db: AsyncSession = Depends(get_db),
) -> list[User]:
    result = await db.execute(select(User).order_by(User.created_at.desc()))
    return list(result.scalars().all())


@router.put("/users/{user_id}/role", response_model=UserAdminPublic)
async def assign_role(
    user_id: str,
    payload: RoleAssignment,
    current_user: User = Depends(require_hospital_admin),
    db: AsyncSession = Depends(get_db),
    cache: QueryCache = Depends(get_query_cache),
) -> User:
    result = await db.execute(select(User).where(User.user_id == user_id))
    user = result.scalar_one_or_none()
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

    previous = user.role
    user.role = payload.role
    await db.commit()
    await db.refresh(user)
    logger.info("User %s role changed %s -> %s by %s", user.user_id, previous, user.role, current_user.user_id)
    # The doctor directory is derived from roles.
    await cache.invalidate("providers")
    return user
