"""
Users Router — account listing and administrative role / delete operations.
"""

import structlog
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from api.deps import get_db
from core.security import is_valid_role
from db.models import User

logger = structlog.get_logger()

router = APIRouter(prefix="/api/users", tags=["users"])


class UserResponse(BaseModel):
    id: int
    full_name: str | None
    email: str
    role: str

    model_config = {"from_attributes": True}


class RoleUpdate(BaseModel):
    role: str | None = None


class MessageResponse(BaseModel):
    message: str


@router.get("", response_model=list[UserResponse])
async def list_users(db: AsyncSession = Depends(get_db)):
    """List all accounts (never the password hash)."""
    result = await db.execute(select(User).order_by(User.id))
    return result.scalars().all()


@router.patch("/secrets/{user_id}/role", response_model=MessageResponse)
async def update_user_role(
    user_id: int,
    body: RoleUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Change a user's role; only admin, coordinator and driver are accepted."""
    if not is_valid_role(body.role):
        raise HTTPException(status_code=400, detail="Invalid role")

    result = await db.execute(update(User).where(User.id == user_id).values(role=body.role))
    await db.commit()
    if result.rowcount == 0:
        raise HTTPException(status_code=404, detail="User not found")

    logger.info("user.role_updated", user_id=user_id, role=body.role)
    return {"message": "Role updated successfully"}


@router.delete("/secrets/{user_id}", response_model=MessageResponse)
async def delete_user(user_id: int, db: AsyncSession = Depends(get_db)):
    """Permanently remove a user."""
    result = await db.execute(delete(User).where(User.id == user_id))
    await db.commit()
    if result.rowcount == 0:
        raise HTTPException(status_code=404, detail="User not found")

    logger.info("user.deleted", user_id=user_id)
    return {"message": "User deleted successfully"}
