"""Profile routes for the signed-in user."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.cache import QueryCache, get_query_cache
from src.core.database import get_db
from src.core.deps import get_current_user
from src.modules.users.models import User
from src.modules.users.schemas import UserPublic, UserUpdate

router = APIRouter(prefix="/api/v1/users", tags=["users"])


@router.get("/me", response_model=UserPublic)
async def get_me(current_user: User = Depends(get_current_user)) -> User:
    return current_user


@router.patch("/me", response_model=UserPublic)
async def update_me(
    payload: UserUpdate,
    db: AsyncSession = Depends(get_db),
    cache: QueryCache = Depends(get_query_cache),
    current_user: User = Depends(get_current_user),
) -> User:
    update_data = payload.model_dump(exclude_unset=True)
    if "full_name" in update_data:
        value = update_data["full_name"]
        cleaned = value.strip() if value is not None else ""
        if not cleaned:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="full_name cannot be empty")
        update_data["full_name"] = cleaned
    if not update_data:
        return current_user
    for field, value in update_data.items():
        setattr(current_user, field, value)
    await db.commit()
    await db.refresh(current_user)
    # Names are denormalised into the cached provider and appointment listings.
    await cache.invalidate("providers")
    await cache.invalidate("appointments")
    return current_user
