"""
Vehicles Router — CRUD for fleet vehicles plus the active-vehicle picker used
when assigning drivers.

Vehicle ids are supplied by the client; reusing one is a 409.
"""

import structlog
from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel
from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from api.deps import get_db
from db.models import Vehicle

logger = structlog.get_logger()

router = APIRouter(tags=["vehicles"])

ACTIVE_STATUS = "Active"


# ─── Schemas ────────────────────────────────────────────────────────────────


class VehicleCreate(BaseModel):
    id: str = Field(..., min_length=1, max_length=50)
    type: str = Field(..., min_length=1, max_length=100)
    plate_number: str = Field(..., min_length=1, max_length=50)
    status: str = ACTIVE_STATUS

    model_config = {"alias_generator": to_camel, "populate_by_name": True}


class VehicleUpdate(BaseModel):
    type: str = Field(..., min_length=1, max_length=100)
    plate_number: str = Field(..., min_length=1, max_length=50)
    status: str = Field(..., min_length=1, max_length=50)

    model_config = {"alias_generator": to_camel, "populate_by_name": True}


class VehicleResponse(BaseModel):
    id: str
    type: str
    plate_number: str
    status: str

    model_config = {"alias_generator": to_camel, "populate_by_name": True, "from_attributes": True}


class ActiveVehicle(BaseModel):
    id: str
    type: str
    plate_number: str

    model_config = {"from_attributes": True}


# ─── Endpoints ──────────────────────────────────────────────────────────────


@router.get("/api/vehicles-drivers", response_model=list[ActiveVehicle])
async def list_active_vehicles(db: AsyncSession = Depends(get_db)):
    """Vehicles that can be assigned to a driver right now."""
    result = await db.execute(select(Vehicle).where(Vehicle.status == ACTIVE_STATUS).order_by(Vehicle.id))
    return result.scalars().all()


@router.get("/api/vehicles", response_model=list[VehicleResponse])
async def list_vehicles(db: AsyncSession = Depends(get_db)):
    """List all vehicles ordered by id."""
    result = await db.execute(select(Vehicle).order_by(Vehicle.id))
    return result.scalars().all()


@router.post("/api/vehicles", response_model=VehicleResponse, status_code=201)
async def create_vehicle(body: VehicleCreate, db: AsyncSession = Depends(get_db)):
    """Register a vehicle under a client-chosen id."""
    vehicle = Vehicle(**body.model_dump())
    db.add(vehicle)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise HTTPException(status_code=409, detail="Vehicle ID already exists")
    await db.refresh(vehicle)
    logger.info("vehicle.created", vehicle_id=vehicle.id)
    return vehicle


@router.put("/api/vehicles/{vehicle_id}", response_model=VehicleResponse)
async def update_vehicle(vehicle_id: str, body: VehicleUpdate, db: AsyncSession = Depends(get_db)):
    """Replace type, plate number and status."""
    table = Vehicle.__table__
    result = await db.execute(
        update(table).where(table.c.id == vehicle_id).values(**body.model_dump()).returning(*table.c)
    )
    row = result.mappings().first()
    await db.commit()
    if row is None:
        raise HTTPException(status_code=404, detail="Vehicle not found")
    return dict(row)


@router.delete("/api/vehicles/{vehicle_id}", status_code=204)
async def delete_vehicle(vehicle_id: str, db: AsyncSession = Depends(get_db)):
    """Delete a vehicle."""
    result = await db.execute(delete(Vehicle).where(Vehicle.id == vehicle_id))
    await db.commit()
    if result.rowcount == 0:
        raise HTTPException(status_code=404, detail="Vehicle not found")
    logger.info("vehicle.deleted", vehicle_id=vehicle_id)
    return Response(status_code=204)
