"""
Pytest fixtures for the billing test suite.

Provides:
- An in-memory SQLite database per test (StaticPool, one shared connection)
- An operator with a client, driver and vehicle, plus job/invoice factories
- A FastAPI TestClient wired to the test database and a signed JWT

Environment variables are set before the application modules are imported
so that config.settings never builds the SQL Server URL.
"""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("JWT_SECRET", "test-secret")

from datetime import date, datetime
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from jose import jwt
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from config import settings
from database import get_session
from main import app
from models import (
    Base,
    Client,
    Driver,
    Invoice,
    InvoiceStatus,
    Job,
    JobStatus,
    User,
    Vehicle,
    VehicleType,
)


# =============================================================================
# Database fixtures
# =============================================================================


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    # Same options as database.SessionLocal
    return sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.rollback()
    session.close()


# =============================================================================
# Domain fixtures
# =============================================================================


def _add(db, obj):
    db.add(obj)
    db.commit()
    return obj


@pytest.fixture
def operator(db):
    return _add(db, User(
        email="owner@harifleet.in",
        password="not-a-real-hash",
        name="Hari Singh",
        company_name="Hari Fleet Services",
    ))


@pytest.fixture
def other_operator(db):
    return _add(db, User(
        email="owner@otherfleet.in",
        password="not-a-real-hash",
        name="Other Owner",
    ))


@pytest.fixture
def client_c(db, operator):
    return _add(db, Client(
        user_id=operator.id,
        name="Ravi Constructions",
        contact_no="9800000001",
        company="Ravi Infra Pvt Ltd",
        address="Vaishali Nagar, Ajmer",
    ))


@pytest.fixture
def client_d(db, operator):
    return _add(db, Client(
        user_id=operator.id,
        name="Meena Traders",
        contact_no="9800000002",
        address="Kishangarh",
    ))


@pytest.fixture
def foreign_client(db, other_operator):
    return _add(db, Client(
        user_id=other_operator.id,
        name="Somebody Else",
        contact_no="9800000099",
        address="Jaipur",
    ))


@pytest.fixture
def driver(db, operator):
    return _add(db, Driver(user_id=operator.id, name="Mahesh", contact_no="9811111111"))


@pytest.fixture
def vehicle(db, operator):
    vehicle_type = _add(db, VehicleType(user_id=operator.id, name="JCB 3DX"))
    return _add(db, Vehicle(
        user_id=operator.id,
        vehicle_type_id=vehicle_type.id,
        registration_no="RJ01 AB 1234",
        model="3DX Super",
    ))


@pytest.fixture
def make_job(db, operator, client_c, driver, vehicle):
    """Factory for jobs; defaults to a COMPLETED, unbilled job of client_c."""

    def _make(amount, day, status=JobStatus.COMPLETED, client=None, user=None, invoice_id=None):
        return _add(db, Job(
            user_id=(user or operator).id,
            client_id=(client or client_c).id,
            driver_id=driver.id,
            vehicle_id=vehicle.id,
            vehicle_type_id=vehicle.vehicle_type_id,
            location="Ajmer",
            date=day,
            amount=Decimal(str(amount)),
            status=status,
            invoice_id=invoice_id,
        ))

    return _make


@pytest.fixture
def make_invoice(db, operator, client_c):
    """Factory for invoice rows inserted directly (bypassing generation)."""

    def _make(number, total="500.00", client=None, user=None, created_at=None):
        total = Decimal(total)
        fields = dict(
            invoice_number=number,
            user_id=(user or operator).id,
            client_id=(client or client_c).id,
            start_date=date(2025, 6, 1),
            end_date=date(2025, 6, 30),
            subtotal=total,
            tax=Decimal("0.00"),
            total_amount=total,
            paid_amount=Decimal("0.00"),
            balance_amount=total,
            status=InvoiceStatus.SENT,
        )
        if created_at is not None:
            fields["created_at"] = created_at
        return _add(db, Invoice(**fields))

    return _make


@pytest.fixture
def march_jobs(make_job):
    """Three completed, unbilled jobs in March 2025 totalling 4500."""
    return [
        make_job("1000", date(2025, 3, 3)),
        make_job("2000", date(2025, 3, 12)),
        make_job("1500", date(2025, 3, 28)),
    ]


# =============================================================================
# HTTP fixtures
# =============================================================================


def make_token(user_id):
    return jwt.encode({"id": user_id}, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


@pytest.fixture
def api(session_factory):
    def _override_session():
        session = session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    app.dependency_overrides[get_session] = _override_session
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(operator):
    return {"Authorization": f"Bearer {make_token(operator.id)}"}


@pytest.fixture
def other_auth_headers(other_operator):
    return {"Authorization": f"Bearer {make_token(other_operator.id)}"}


@pytest.fixture
def fixed_now():
    return datetime(2025, 4, 10, 11, 0, 0)
