#!/usr/bin/env python3
"""
Seed Logistics Data — Creates demo users, fleet, routes and one sample
spreadsheet document per document table.

Existing rows in every seeded table are removed first.

Run: python backend/scripts/seed_logistics_data.py [--create-tables]
"""

from __future__ import annotations

import argparse
import asyncio
import io
import json
import os
import sys
from datetime import datetime

import pandas as pd
from sqlalchemy import delete

# Add backend/ to path when run as a script.
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from core.config import get_settings
from core.security import hash_password
from db.models import DOCUMENT_MODELS, Driver, Route, User, Vehicle
from db.session import Database

USERS = [
    ("admin@example.com", "admin123", "admin", "Admin User"),
    ("coordinator@example.com", "coordinator123", "coordinator", "Coordinator User"),
    ("driver@example.com", "driver123", "driver", "Driver User"),
]
DRIVERS = [
    ("Alex Turner", "D12345", "Truck 1", "Active"),
    ("Maria Santos", "D67890", "Van 2", "Active"),
    ("John Reyes", "D24680", "", "On Leave"),
]
VEHICLES = [
    ("TRK-001", "Truck", "ABC-1234", "Active"),
    ("VAN-002", "Van", "XYZ-5678", "In Use"),
    ("PCK-003", "Pickup", "LMN-9012", "Maintenance"),
]
ROUTES = [
    ("RT-001", "123 Harbor Road, Port Area", "Warehouse A"),
    ("RT-002", "45 Industrial Ave, North District", "Dock 3"),
]
SAMPLE_ROWS = [
    {"Column1": "Value1", "Column2": "Value2"},
    {"Column1": "Value3", "Column2": "Value4"},
]


def build_workbook(rows: list[dict], sheet_name: str = "Sheet1") -> bytes:
    """Render rows as an .xlsx workbook in memory."""
    buffer = io.BytesIO()
    pd.DataFrame(rows).to_excel(buffer, index=False, sheet_name=sheet_name)
    return buffer.getvalue()


async def seed_data(db: Database, *, create_tables: bool = False) -> dict[str, int]:
    """Clear and repopulate every table. Returns row counts per table."""
    if create_tables:
        await db.create_all()

    counts: dict[str, int] = {}
    async with db.sessionmaker() as session:
        for model in (User, Driver, Vehicle, Route, *DOCUMENT_MODELS):
            await session.execute(delete(model))

        # ── Users ────────────────────────────────────────────
        for email, password, role, full_name in USERS:
            session.add(User(email=email, password=hash_password(password), role=role, full_name=full_name))
        counts["users"] = len(USERS)

        # ── Fleet & routes ───────────────────────────────────
        for name, license_number, vehicle_assigned, status in DRIVERS:
            session.add(
                Driver(
                    name=name,
                    license_number=license_number,
                    vehicle_assigned=vehicle_assigned or None,
                    status=status,
                )
            )
        counts["drivers"] = len(DRIVERS)

        for vehicle_id, vehicle_type, plate_number, status in VEHICLES:
            session.add(Vehicle(id=vehicle_id, type=vehicle_type, plate_number=plate_number, status=status))
        counts["vehicles"] = len(VEHICLES)

        for route_id, address, drop_point in ROUTES:
            session.add(Route(id=route_id, address=address, drop_point=drop_point))
        counts["routes"] = len(ROUTES)

        # ── Documents ────────────────────────────────────────
        stamp = datetime(2025, 3, 7)
        workbook = build_workbook(SAMPLE_ROWS)
        for model in DOCUMENT_MODELS:
            table_name = model.__tablename__
            session.add(
                model(
                    name=f"{table_name} item 1",
                    description="Description of item 1",
                    status="completed",
                    created_at=stamp,
                    created_by="Jane",
                    updated_at=stamp,
                    updated_by="Admin",
                    file_name=f"{table_name}-sample-1.xlsx",
                    file_data=workbook,
                )
            )
            counts[table_name] = 1

        await session.commit()
    return counts


async def _run(create_tables: bool) -> dict[str, int]:
    db = Database.from_settings(get_settings())
    try:
        return await seed_data(db, create_tables=create_tables)
    finally:
        await db.dispose()


def main() -> int:
    parser = argparse.ArgumentParser(description="Seed demo logistics data")
    parser.add_argument("--create-tables", action="store_true", help="Create missing tables before seeding")
    args = parser.parse_args()

    counts = asyncio.run(_run(bool(args.create_tables)))
    print(json.dumps({"status": "success", "seeded": counts}))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
