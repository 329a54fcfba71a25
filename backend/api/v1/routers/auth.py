"""
Auth Router — login and self-registration against the users table.

Login answers "Invalid credentials" for both an unknown email and a wrong
password so callers cannot probe which accounts exist.
"""

import structlog
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from api.deps import get_db
from core.security import DEFAULT_ROLE, hash_password, is_valid_role, verify_password
from db.models import User

logger = structlog.get_logger()

router = APIRouter(prefix="/api/auth", tags=["auth"])


# ─── Schemas ────────────────────────────────────────────────────────────────


class LoginRequest(BaseModel):
    email: str
    password: str


class RegisterRequest(BaseModel):
    email: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1)
    role: str = DEFAULT_ROLE
    full_name: str | None = Field(None, alias="fullName")

    model_config = {"populate_by_name": True}


class UserProfile(BaseModel):
    id: int
    email: str
    role: str
    full_name: str | None = Field(None, serialization_alias="fullName")

    model_config = {"from_attributes": True}


class LoginResponse(BaseModel):
    success: bool
    message: str
    user: UserProfile | None


class RegisteredUser(BaseModel):
    id: int
    email: str
    role: str
    full_name: str | None

    model_config = {"from_attributes": True}


class RegisterResponse(BaseModel):
    user: RegisteredUser


INVALID_CREDENTIALS = {"success": False, "message": "Invalid credentials", "user": None}


# ─── Endpoints ──────────────────────────────────────────────────────────────


@router.post("/login", response_model=LoginResponse)
async def login(body: LoginRequest, db: AsyncSession = Depends(get_db)):
    """Verify email + password and return the public profile."""
    result = await db.execute(select(User).where(User.email == body.email))
    user = result.scalar_one_or_none()

    if user is None or not verify_password(body.password, user.password):
        logger.info("auth.login_rejected")
        return JSONResponse(status_code=401, content=INVALID_CREDENTIALS)

    logger.info("auth.login", user_id=user.id)
    return {"success": True, "message": "Login successful", "user": user}


@router.post("/register", response_model=RegisterResponse, status_code=201)
async def register(body: RegisterRequest, db: AsyncSession = Depends(get_db)):
    """Create an account with a bcrypt-hashed password."""
    if not is_valid_role(body.role):
        raise HTTPException(status_code=400, detail="Invalid role")

    user = User(
        email=body.email,
        password=hash_password(body.password),
        role=body.role,
        full_name=body.full_name,
    )
    db.add(user)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise HTTPException(status_code=409, detail="Email already exists")
    await db.refresh(user)

    logger.info("auth.registered", user_id=user.id, role=user.role)
    return {"user": user}
