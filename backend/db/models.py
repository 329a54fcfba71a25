"""
Logistics Back Office Database Models

11 tables for the back-office.

Tables:
  Accounts & fleet (1-4):
  1. users                - Back-office accounts (bcrypt password hash)
  2. drivers              - Drivers and their free-text vehicle assignment
  3. vehicles             - Fleet vehicles (client-supplied id)
  4. routes               - Delivery routes (client-supplied route code)

  Documents (5-11), each pairing metadata with a spreadsheet blob:
  5. shipments
  6. dispatch_outputs
  7. delivery_forwards
  8. customers
  9. summary
  10. item_snapshots
  11. item_activity_logs
"""

from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, Column, DateTime, Integer, LargeBinary, String, Text

from db.session import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


# ─── 1. Users ──────────────────────────────────────────────────────────────


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), nullable=False, unique=True)
    password = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default="driver")
    full_name = Column(String(255))

    __table_args__ = (
        CheckConstraint("role IN ('admin', 'coordinator', 'driver')", name="ck_user_role"),
    )


# ─── 2. Drivers ────────────────────────────────────────────────────────────


class Driver(Base):
    __tablename__ = "drivers"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    license_number = Column(String(50), nullable=False)
    vehicle_assigned = Column(String(255))
    status = Column(String(50))


# ─── 3. Vehicles ───────────────────────────────────────────────────────────


class Vehicle(Base):
    __tablename__ = "vehicles"

    id = Column(String(50), primary_key=True)
    type = Column(String(100), nullable=False)
    plate_number = Column(String(50), nullable=False)
    status = Column(String(50), nullable=False, default="Active", index=True)


# ─── 4. Routes ─────────────────────────────────────────────────────────────


class Route(Base):
    __tablename__ = "routes"

    id = Column(String(50), primary_key=True)
    address = Column(Text, nullable=False)
    drop_point = Column(String(255), nullable=False)


# ─── 5-11. Documents ───────────────────────────────────────────────────────


class DocumentMixin:
    """Shared shape of every document table: metadata plus one spreadsheet."""

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False)
    description = Column(Text)
    status = Column(Text, nullable=False, default="incomplete")
    created_at = Column(DateTime, nullable=False, default=utcnow)
    created_by = Column(Text)
    updated_at = Column(DateTime, nullable=False, default=utcnow)
    updated_by = Column(Text)
    file_name = Column(Text)
    file_data = Column(LargeBinary)


class Shipment(DocumentMixin, Base):
    __tablename__ = "shipments"


class DispatchOutput(DocumentMixin, Base):
    __tablename__ = "dispatch_outputs"


class DeliveryForward(DocumentMixin, Base):
    __tablename__ = "delivery_forwards"


class Customer(DocumentMixin, Base):
    __tablename__ = "customers"


class Summary(DocumentMixin, Base):
    __tablename__ = "summary"


class ItemSnapshot(DocumentMixin, Base):
    __tablename__ = "item_snapshots"


class ItemActivityLog(DocumentMixin, Base):
    __tablename__ = "item_activity_logs"


DOCUMENT_MODELS = (
    Shipment,
    DispatchOutput,
    DeliveryForward,
    Customer,
    Summary,
    ItemSnapshot,
    ItemActivityLog,
)
