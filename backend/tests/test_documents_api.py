"""
API Integration Tests — the seven document resources (metadata + spreadsheet).
"""

import base64
from datetime import datetime

import pytest
from httpx import AsyncClient

from db.models import Shipment

DOCUMENT_SLUGS = [
    "shipments",
    "dispatch-outputs",
    "delivery-forwards",
    "customers",
    "summary",
    "item-snapshots",
    "item-activity-logs",
]

LAST_YEAR = datetime(2025, 1, 1)


async def _create(client: AsyncClient, slug: str, xlsx_upload, **form) -> dict:
    data = {"name": "Weekly report", "createdBy": "Jane", **form}
    resp = await client.post(f"/api/{slug}", data=data, files=xlsx_upload())
    assert resp.status_code == 201, resp.text
    return resp.json()


@pytest.fixture
async def stale_shipment(test_db, xlsx_bytes):
    shipment = Shipment(
        name="January manifest",
        status="incomplete",
        created_at=LAST_YEAR,
        updated_at=LAST_YEAR,
        created_by="Jane",
        updated_by="Jane",
        file_name="january.xlsx",
        file_data=xlsx_bytes,
    )
    test_db.add(shipment)
    await test_db.commit()
    return shipment


@pytest.mark.asyncio
@pytest.mark.parametrize("slug", DOCUMENT_SLUGS)
class TestDocumentLifecycle:
    async def test_create_returns_row_without_bytes(self, client: AsyncClient, xlsx_upload, slug):
        body = await _create(client, slug, xlsx_upload, description="First upload")
        assert isinstance(body["id"], int)
        assert body["name"] == "Weekly report"
        assert body["description"] == "First upload"
        assert body["status"] == "incomplete"
        assert body["created_by"] == "Jane"
        assert body["updated_by"] == "Jane"
        assert body["file_name"] == "manifest.xlsx"
        assert body["created_at"] == body["updated_at"]
        assert "file_data" not in body

    @pytest.mark.parametrize(
        "data,with_file",
        [
            ({"createdBy": "Jane"}, True),
            ({"name": "", "createdBy": "Jane"}, True),
            ({"name": "Weekly report"}, True),
            ({"name": "Weekly report", "createdBy": "Jane"}, False),
        ],
    )
    async def test_create_missing_required_field_writes_nothing(
        self, client: AsyncClient, xlsx_upload, slug, data, with_file
    ):
        files = xlsx_upload() if with_file else None
        resp = await client.post(f"/api/{slug}", data=data, files=files)
        assert resp.status_code == 400
        assert resp.json() == {"error": "Missing required fields"}

        list_resp = await client.get(f"/api/{slug}")
        assert list_resp.json() == []

    async def test_partial_update_status_only(self, client: AsyncClient, xlsx_upload, xlsx_bytes, slug):
        created = await _create(client, slug, xlsx_upload, description="Keep me")

        resp = await client.put(
            f"/api/{slug}/{created['id']}",
            data={"status": "completed", "updatedBy": "Omar"},
        )
        assert resp.status_code == 200
        row = resp.json()
        assert row["status"] == "completed"
        assert row["updated_by"] == "Omar"
        assert row["updated_at"] >= created["updated_at"]
        assert row["name"] == "Weekly report"
        assert row["description"] == "Keep me"
        assert row["file_name"] == "manifest.xlsx"
        assert base64.b64decode(row["file_data"]) == xlsx_bytes
        assert row["created_by"] == "Jane"

    async def test_delete_existing_then_missing(self, client: AsyncClient, xlsx_upload, slug):
        keep = await _create(client, slug, xlsx_upload, description="keep")
        doomed = await _create(client, slug, xlsx_upload, description="doomed")

        resp = await client.delete(f"/api/{slug}/{doomed['id']}")
        assert resp.status_code == 200
        assert resp.json()["message"].endswith("deleted successfully")

        ids = [doc["id"] for doc in (await client.get(f"/api/{slug}")).json()]
        assert ids == [keep["id"]]

        again = await client.delete(f"/api/{slug}/{doomed['id']}")
        assert again.status_code == 404
        assert again.json()["error"].endswith("not found")


@pytest.mark.asyncio
class TestShipmentsApi:
    async def test_list_newest_first_with_plain_dates(self, client: AsyncClient, xlsx_upload, xlsx_bytes):
        first = await _create(client, "shipments", xlsx_upload)
        second = await _create(client, "shipments", xlsx_upload, name="Second report")

        resp = await client.get("/api/shipments")
        assert resp.status_code == 200
        rows = resp.json()
        assert [r["id"] for r in rows] == [second["id"], first["id"]]

        row = rows[0]
        assert set(row) == {
            "id",
            "name",
            "description",
            "createdAt",
            "createdBy",
            "updatedAt",
            "updatedBy",
            "status",
            "file_name",
            "file_data",
        }
        assert row["createdAt"] == second["created_at"][:10]
        assert len(row["updatedAt"]) == 10
        assert row["createdBy"] == "Jane"
        assert base64.b64decode(row["file_data"]) == xlsx_bytes

    async def test_create_with_explicit_status(self, client: AsyncClient, xlsx_upload):
        body = await _create(client, "shipments", xlsx_upload, status="in transit")
        assert body["status"] == "in transit"

    async def test_update_created_by_wins_over_updated_by(self, client: AsyncClient, seeded_db):
        shipment_id = seeded_db["shipment"].id
        resp = await client.put(
            f"/api/shipments/{shipment_id}",
            data={"createdBy": "Lead", "updatedBy": "Omar", "name": "Renamed manifest"},
        )
        assert resp.status_code == 200
        assert resp.json()["updated_by"] == "Lead"
        assert resp.json()["name"] == "Renamed manifest"

    async def test_update_empty_strings_leave_fields_unchanged(self, client: AsyncClient, seeded_db):
        shipment_id = seeded_db["shipment"].id
        resp = await client.put(
            f"/api/shipments/{shipment_id}",
            data={"updatedBy": "Omar", "name": "", "description": "", "status": ""},
        )
        assert resp.status_code == 200
        row = resp.json()
        assert row["name"] == "March manifest"
        assert row["description"] == "Inbound containers"
        assert row["status"] == "incomplete"
        assert row["updated_by"] == "Omar"

    async def test_update_with_new_file(self, client: AsyncClient, seeded_db, xlsx_upload):
        shipment_id = seeded_db["shipment"].id
        resp = await client.put(
            f"/api/shipments/{shipment_id}",
            data={"updatedBy": "Omar"},
            files=xlsx_upload("april.xlsx", b"PK april"),
        )
        assert resp.status_code == 200
        row = resp.json()
        assert row["file_name"] == "april.xlsx"
        assert base64.b64decode(row["file_data"]) == b"PK april"
        assert row["name"] == "March manifest"

    async def test_update_requires_acting_user(self, client: AsyncClient, seeded_db):
        shipment_id = seeded_db["shipment"].id
        resp = await client.put(f"/api/shipments/{shipment_id}", data={"status": "completed"})
        assert resp.status_code == 400

        rows = (await client.get("/api/shipments")).json()
        assert rows[0]["status"] == "incomplete"

    async def test_update_missing_row(self, client: AsyncClient):
        resp = await client.put("/api/shipments/999", data={"updatedBy": "Omar", "status": "completed"})
        assert resp.status_code == 404
        assert resp.json() == {"error": "Shipment not found"}

    async def test_replace_excel_only_swaps_file(self, client: AsyncClient, seeded_db, xlsx_upload):
        shipment_id = seeded_db["shipment"].id
        resp = await client.put(
            f"/api/shipments/{shipment_id}/excel",
            files=xlsx_upload("upload.xlsx", b"PK replaced"),
        )
        assert resp.status_code == 200
        assert resp.json() == {"id": shipment_id, "file_name": "upload.xlsx"}

        row = (await client.get("/api/shipments")).json()[0]
        assert row["file_name"] == "upload.xlsx"
        assert base64.b64decode(row["file_data"]) == b"PK replaced"
        assert row["updatedBy"] == "Jane"
        assert row["name"] == "March manifest"

    async def test_replace_excel_file_name_override(self, client: AsyncClient, seeded_db, xlsx_upload):
        shipment_id = seeded_db["shipment"].id
        resp = await client.put(
            f"/api/shipments/{shipment_id}/excel",
            data={"file_name": "march-v2.xlsx"},
            files=xlsx_upload("blob.xlsx"),
        )
        assert resp.status_code == 200
        assert resp.json()["file_name"] == "march-v2.xlsx"

    async def test_replace_excel_requires_file(self, client: AsyncClient, seeded_db):
        shipment_id = seeded_db["shipment"].id
        resp = await client.put(f"/api/shipments/{shipment_id}/excel", data={"file_name": "x.xlsx"})
        assert resp.status_code == 400
        assert resp.json() == {"error": "No file uploaded"}

    async def test_replace_excel_missing_row(self, client: AsyncClient, xlsx_upload):
        resp = await client.put("/api/shipments/999/excel", files=xlsx_upload())
        assert resp.status_code == 404

    async def test_resources_are_isolated(self, client: AsyncClient, xlsx_upload):
        await _create(client, "customers", xlsx_upload)
        assert (await client.get("/api/summary")).json() == []
        assert len((await client.get("/api/customers")).json()) == 1


@pytest.mark.asyncio
class TestUpdatedAtRefresh:
    async def test_sparse_update_moves_updated_at_forward(self, client: AsyncClient, stale_shipment):
        resp = await client.put(
            f"/api/shipments/{stale_shipment.id}",
            data={"status": "completed", "updatedBy": "Omar"},
        )
        assert resp.status_code == 200
        row = resp.json()
        assert datetime.fromisoformat(row["updated_at"]) > LAST_YEAR
        assert datetime.fromisoformat(row["created_at"]) == LAST_YEAR

    async def test_replace_excel_moves_updated_at_forward(self, client: AsyncClient, test_db, stale_shipment, xlsx_upload):
        resp = await client.put(
            f"/api/shipments/{stale_shipment.id}/excel",
            files=xlsx_upload("february.xlsx", b"PK february"),
        )
        assert resp.status_code == 200

        await test_db.refresh(stale_shipment)
        assert stale_shipment.updated_at > LAST_YEAR
        assert stale_shipment.created_at == LAST_YEAR
        assert stale_shipment.updated_by == "Jane"
        assert stale_shipment.file_data == b"PK february"

    async def test_long_name_is_stored_whole(self, client: AsyncClient, xlsx_upload):
        long_name = "Consolidated manifest " * 20
        body = await _create(client, "shipments", xlsx_upload, name=long_name)
        assert body["name"] == long_name
        assert (await client.get("/api/shipments")).json()[0]["name"] == long_name
