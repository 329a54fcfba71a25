"""
Routes Router — CRUD for delivery routes keyed by a client-supplied route code.
"""

import structlog
from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel
from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from api.deps import get_db
from db.models import Route

logger = structlog.get_logger()

router = APIRouter(prefix="/api/routes", tags=["routes"])


class RouteCreate(BaseModel):
    id: str = Field(..., min_length=1, max_length=50)
    address: str = Field(..., min_length=1)
    drop_point: str = Field(..., min_length=1, max_length=255)

    model_config = {"alias_generator": to_camel, "populate_by_name": True}


class RouteUpdate(BaseModel):
    address: str = Field(..., min_length=1)
    drop_point: str = Field(..., min_length=1, max_length=255)

    model_config = {"alias_generator": to_camel, "populate_by_name": True}


class RouteResponse(BaseModel):
    id: str
    address: str
    drop_point: str

    model_config = {"alias_generator": to_camel, "populate_by_name": True, "from_attributes": True}


@router.get("", response_model=list[RouteResponse])
async def list_routes(db: AsyncSession = Depends(get_db)):
    result = await db.execute(select(Route).order_by(Route.id))
    return result.scalars().all()


@router.post("", response_model=RouteResponse, status_code=201)
async def create_route(body: RouteCreate, db: AsyncSession = Depends(get_db)):
    route = Route(**body.model_dump())
    db.add(route)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise HTTPException(status_code=409, detail="Route code already exists")
    await db.refresh(route)
    logger.info("route.created", route_id=route.id)
    return route


@router.put("/{route_id}", response_model=RouteResponse)
async def update_route(route_id: str, body: RouteUpdate, db: AsyncSession = Depends(get_db)):
    table = Route.__table__
    result = await db.execute(
        update(table).where(table.c.id == route_id).values(**body.model_dump()).returning(*table.c)
    )
    row = result.mappings().first()
    await db.commit()
    if row is None:
        raise HTTPException(status_code=404, detail="Route not found")
    return dict(row)


@router.delete("/{route_id}", status_code=204)
async def delete_route(route_id: str, db: AsyncSession = Depends(get_db)):
    result = await db.execute(delete(Route).where(Route.id == route_id))
    await db.commit()
    if result.rowcount == 0:
        raise HTTPException(status_code=404, detail="Route not found")
    logger.info("route.deleted", route_id=route_id)
    return Response(status_code=204)
