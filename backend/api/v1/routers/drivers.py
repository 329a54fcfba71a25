"""
Drivers Router — CRUD for drivers.
"""

import structlog
from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel
from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from api.deps import get_db
from db.models import Driver

logger = structlog.get_logger()

router = APIRouter(prefix="/api/drivers", tags=["drivers"])


# ─── Schemas ────────────────────────────────────────────────────────────────


class DriverPayload(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    license_number: str = Field(..., min_length=1, max_length=50)
    vehicle_assigned: str | None = None
    status: str | None = None

    model_config = {"alias_generator": to_camel, "populate_by_name": True}


class DriverResponse(BaseModel):
    id: int
    name: str
    license_number: str
    vehicle_assigned: str | None
    status: str | None

    model_config = {"alias_generator": to_camel, "populate_by_name": True, "from_attributes": True}


# ─── Endpoints ──────────────────────────────────────────────────────────────


@router.get("", response_model=list[DriverResponse])
async def list_drivers(db: AsyncSession = Depends(get_db)):
    """List all drivers ordered by id."""
    result = await db.execute(select(Driver).order_by(Driver.id))
    return result.scalars().all()


@router.post("", response_model=DriverResponse, status_code=201)
async def create_driver(body: DriverPayload, db: AsyncSession = Depends(get_db)):
    """Add a driver."""
    driver = Driver(**body.model_dump())
    db.add(driver)
    await db.commit()
    await db.refresh(driver)
    logger.info("driver.created", driver_id=driver.id)
    return driver


@router.put("/{driver_id}", response_model=DriverResponse)
async def update_driver(driver_id: int, body: DriverPayload, db: AsyncSession = Depends(get_db)):
    """Replace every field of a driver."""
    table = Driver.__table__
    result = await db.execute(
        update(table).where(table.c.id == driver_id).values(**body.model_dump()).returning(*table.c)
    )
    row = result.mappings().first()
    await db.commit()
    if row is None:
        raise HTTPException(status_code=404, detail="Driver not found")
    return dict(row)


@router.delete("/{driver_id}", status_code=204)
async def delete_driver(driver_id: int, db: AsyncSession = Depends(get_db)):
    """Delete a driver."""
    result = await db.execute(delete(Driver).where(Driver.id == driver_id))
    await db.commit()
    if result.rowcount == 0:
        raise HTTPException(status_code=404, detail="Driver not found")
    logger.info("driver.deleted", driver_id=driver_id)
    return Response(status_code=204)
