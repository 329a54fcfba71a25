"""
Documents Router — shipments, dispatch outputs, delivery forwards, customers,
summaries, item snapshots and item activity logs.

All seven share one table shape (metadata + one spreadsheet), so the five
endpoints are built once per resource by ``build_document_router``:

  GET    /api/{slug}             list, newest id first, dates as YYYY-MM-DD
  POST   /api/{slug}             create (multipart, file required)
  PUT    /api/{slug}/{id}        sparse patch, optional new file
  PUT    /api/{slug}/{id}/excel  replace only the spreadsheet
  DELETE /api/{slug}/{id}
"""

import base64
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any

import structlog
from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from pydantic import BaseModel, Field
from sqlalchemy import Table, delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from api.deps import get_db
from api.errors import MISSING_FIELDS
from db.models import (
    Customer,
    DeliveryForward,
    DispatchOutput,
    ItemActivityLog,
    ItemSnapshot,
    Shipment,
    Summary,
    utcnow,
)
from db.patch import DOCUMENT_PATCH_FIELDS, Attachment, apply_sparse_patch, build_sparse_patch

logger = structlog.get_logger()


@dataclass(frozen=True)
class DocumentResource:
    slug: str
    model: type
    label: str

    @property
    def table(self) -> Table:
        return self.model.__table__


DOCUMENT_RESOURCES = (
    DocumentResource("shipments", Shipment, "Shipment"),
    DocumentResource("dispatch-outputs", DispatchOutput, "Dispatch output"),
    DocumentResource("delivery-forwards", DeliveryForward, "Delivery forward"),
    DocumentResource("customers", Customer, "Customer"),
    DocumentResource("summary", Summary, "Summary"),
    DocumentResource("item-snapshots", ItemSnapshot, "Item snapshot"),
    DocumentResource("item-activity-logs", ItemActivityLog, "Item activity log"),
)


# ─── Schemas ────────────────────────────────────────────────────────────────


class DocumentListItem(BaseModel):
    id: int
    name: str
    description: str | None
    created_at: str | None = Field(serialization_alias="createdAt")
    created_by: str | None = Field(serialization_alias="createdBy")
    updated_at: str | None = Field(serialization_alias="updatedAt")
    updated_by: str | None = Field(serialization_alias="updatedBy")
    status: str
    file_name: str | None
    file_data: str | None


class DocumentCreated(BaseModel):
    id: int
    name: str
    description: str | None
    status: str
    created_at: datetime
    updated_at: datetime
    created_by: str | None
    updated_by: str | None
    file_name: str | None

    model_config = {"from_attributes": True}


class DocumentRow(DocumentCreated):
    file_data: str | None


class FileReplaced(BaseModel):
    id: int
    file_name: str | None


class MessageResponse(BaseModel):
    message: str


# ─── Helpers ────────────────────────────────────────────────────────────────


def encode_file_data(content: bytes | None) -> str | None:
    """Spreadsheet bytes as base64 text; JSON cannot carry raw bytes."""
    if content is None:
        return None
    return base64.b64encode(content).decode("ascii")


def format_day(value: datetime | date | None) -> str | None:
    if value is None:
        return None
    return value.strftime("%Y-%m-%d")


async def read_attachment(upload: UploadFile | None) -> Attachment | None:
    if upload is None or not upload.filename:
        return None
    return Attachment(filename=upload.filename, content=await upload.read())


def _list_item(doc: Any) -> dict:
    return {
        "id": doc.id,
        "name": doc.name,
        "description": doc.description,
        "created_at": format_day(doc.created_at),
        "created_by": doc.created_by,
        "updated_at": format_day(doc.updated_at),
        "updated_by": doc.updated_by,
        "status": doc.status,
        "file_name": doc.file_name,
        "file_data": encode_file_data(doc.file_data),
    }


def _full_row(row: Any) -> dict:
    data = dict(row)
    data["file_data"] = encode_file_data(data.get("file_data"))
    return data


# ─── Router factory ─────────────────────────────────────────────────────────


def build_document_router(resource: DocumentResource) -> APIRouter:
    """Build the list/create/update/replace-file/delete endpoints for one document table."""
    router = APIRouter(prefix=f"/api/{resource.slug}", tags=[resource.slug])
    model = resource.model
    table = resource.table
    not_found = f"{resource.label} not found"

    @router.get("", response_model=list[DocumentListItem])
    async def list_documents(db: AsyncSession = Depends(get_db)):
        result = await db.execute(select(model).order_by(model.id.desc()))
        return [_list_item(doc) for doc in result.scalars().all()]

    @router.post("", response_model=DocumentCreated, status_code=201)
    async def create_document(
        name: str | None = Form(None),
        description: str | None = Form(None),
        status: str | None = Form(None),
        created_by: str | None = Form(None, alias="createdBy"),
        file_data: UploadFile | None = File(None),
        db: AsyncSession = Depends(get_db),
    ):
        attachment = await read_attachment(file_data)
        if not name or not created_by or attachment is None:
            raise HTTPException(status_code=400, detail=MISSING_FIELDS)

        now = utcnow()
        doc = model(
            name=name,
            description=description or None,
            status=status or "incomplete",
            created_at=now,
            updated_at=now,
            created_by=created_by,
            updated_by=created_by,
            file_name=attachment.filename,
            file_data=attachment.content,
        )
        db.add(doc)
        await db.commit()
        await db.refresh(doc)
        logger.info("document.created", resource=resource.slug, id=doc.id, created_by=created_by)
        return doc

    @router.put("/{doc_id}", response_model=DocumentRow)
    async def update_document(
        doc_id: int,
        name: str | None = Form(None),
        description: str | None = Form(None),
        status: str | None = Form(None),
        created_by: str | None = Form(None, alias="createdBy"),
        updated_by: str | None = Form(None, alias="updatedBy"),
        file_data: UploadFile | None = File(None),
        db: AsyncSession = Depends(get_db),
    ):
        acting_user = created_by or updated_by
        if not acting_user:
            raise HTTPException(status_code=400, detail=MISSING_FIELDS)

        patch = build_sparse_patch(
            {"name": name, "description": description, "status": status},
            DOCUMENT_PATCH_FIELDS,
            acting_user,
            attachment=await read_attachment(file_data),
        )
        row = await apply_sparse_patch(db, table, doc_id, patch)
        if row is None:
            raise HTTPException(status_code=404, detail=not_found)
        logger.info("document.updated", resource=resource.slug, id=doc_id, columns=patch.columns)
        return _full_row(row)

    @router.put("/{doc_id}/excel", response_model=FileReplaced)
    async def replace_document_file(
        doc_id: int,
        file_name: str | None = Form(None),
        file_data: UploadFile | None = File(None),
        db: AsyncSession = Depends(get_db),
    ):
        attachment = await read_attachment(file_data)
        if attachment is None:
            raise HTTPException(status_code=400, detail="No file uploaded")

        result = await db.execute(
            update(table)
            .where(table.c.id == doc_id)
            .values(
                file_name=file_name or attachment.filename,
                file_data=attachment.content,
                updated_at=utcnow(),
            )
            .returning(table.c.id, table.c.file_name)
        )
        row = result.mappings().first()
        await db.commit()
        if row is None:
            raise HTTPException(status_code=404, detail=not_found)
        logger.info("document.file_replaced", resource=resource.slug, id=doc_id)
        return dict(row)

    @router.delete("/{doc_id}", response_model=MessageResponse)
    async def delete_document(doc_id: int, db: AsyncSession = Depends(get_db)):
        result = await db.execute(delete(table).where(table.c.id == doc_id))
        await db.commit()
        if result.rowcount == 0:
            raise HTTPException(status_code=404, detail=not_found)
        logger.info("document.deleted", resource=resource.slug, id=doc_id)
        return {"message": f"{resource.label} deleted successfully"}

    return router


routers = [build_document_router(resource) for resource in DOCUMENT_RESOURCES]
