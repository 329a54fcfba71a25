"""
Sparse patch: partial UPDATE for document-shaped rows.

Only fields the caller actually supplied land in the SET clause. The audit
pair (``updated_at`` / ``updated_by``) is always refreshed, and an attached
file replaces ``file_name`` / ``file_data`` together.

Empty strings count as "not supplied", so a text column cannot be cleared
through a sparse patch.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from sqlalchemy import Table, update
from sqlalchemy.engine import RowMapping
from sqlalchemy.ext.asyncio import AsyncSession

from db.models import utcnow

DOCUMENT_PATCH_FIELDS = ("name", "description", "status")


@dataclass(frozen=True)
class Attachment:
    """An uploaded spreadsheet: original filename plus raw bytes."""

    filename: str
    content: bytes


@dataclass
class SparsePatch:
    values: dict[str, Any] = field(default_factory=dict)

    @property
    def columns(self) -> list[str]:
        return list(self.values)

    @property
    def has_attachment(self) -> bool:
        return "file_data" in self.values


def build_sparse_patch(
    fields: Mapping[str, Any],
    allowed: Iterable[str],
    acting_user: str | None,
    attachment: Attachment | None = None,
    now: datetime | None = None,
) -> SparsePatch:
    """Build the SET values for a partial update.

    ``fields`` may hold anything (e.g. a whole form); only names listed in
    ``allowed`` with a non-empty string value are kept, in ``allowed`` order.
    """
    if not acting_user:
        raise ValueError("acting user is required for a partial update")

    values: dict[str, Any] = {
        "updated_at": now or utcnow(),
        "updated_by": acting_user,
    }
    for name in allowed:
        value = fields.get(name)
        if isinstance(value, str) and value:
            values[name] = value
    if attachment is not None:
        values["file_name"] = attachment.filename
        values["file_data"] = attachment.content
    return SparsePatch(values=values)


async def apply_sparse_patch(
    db: AsyncSession,
    table: Table,
    row_id: Any,
    patch: SparsePatch,
) -> RowMapping | None:
    """Run the patch as one UPDATE ... RETURNING. ``None`` means no row matched."""
    stmt = (
        update(table)
        .where(table.c.id == row_id)
        .values(**patch.values)
        .returning(*table.c)
    )
    result = await db.execute(stmt)
    row = result.mappings().first()
    await db.commit()
    return row
