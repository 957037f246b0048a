"""
Test configuration and fixtures.

TESTING/TEST are set before the application is imported so config.py
reads config.test.json: an in-memory SQLite database (shared through a
StaticPool) and no startup seeding.
"""

import os
import uuid

os.environ["TESTING"] = "true"
os.environ["TEST"] = "true"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from database import Base, SessionLocal, engine, get_db  # noqa: E402
from main import app  # noqa: E402
from models import (  # noqa: E402
    Asset,
    Category,
    Department,
    Notification,
    PcPart,
    Status,
    StatusName,
    SubCategory,
    Ticket,
    User,
    UserRole,
)
from seeder.status import seed_statuses  # noqa: E402
from utils.auth import create_access_token  # noqa: E402

DEFAULT_STATUSES = [
    StatusName.OPEN,
    StatusName.IN_PROGRESS,
    StatusName.CLOSED,
    StatusName.FOR_APPROVAL,
]

ROLES = {
    "admin": UserRole.ADMIN,
    "maintenance": UserRole.MAINTENANCE,
    "faculty": UserRole.FACULTY_STAFF,
}


@pytest.fixture(scope="session")
def test_db():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session(test_db):
    db = SessionLocal()
    try:
        yield db
    finally:
        db.rollback()
        # Delete in foreign key order
        db.query(Notification).delete()
        db.query(Ticket).delete()
        db.query(PcPart).delete()
        db.query(Asset).delete()
        db.query(SubCategory).delete()
        db.query(Category).delete()
        db.query(Department).delete()
        db.query(Status).delete()
        db.query(User).delete()
        db.commit()
        db.close()


@pytest.fixture
def client(db_session):
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db_session):
    """Factory creating users with a dummy password hash."""

    def _make_user(
        role: str = "faculty", name: str = None, department: str = "ITS"
    ) -> User:
        user = User(
            name=name or f"{role}-{uuid.uuid4().hex[:8]}",
            hashed_password="hashed",
            department=department,
            role=ROLES[role],
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make_user


@pytest.fixture
def auth_headers_factory(make_user):
    """Factory fixture to create auth headers for a new user of `role`."""

    def _create_auth_headers(
        role: str = "faculty", name: str = None, department: str = "ITS"
    ) -> tuple[dict, User]:
        user = make_user(role, name=name, department=department)
        token = create_access_token(data={"sub": user.name})
        return {"Authorization": f"Bearer {token}"}, user

    return _create_auth_headers


@pytest.fixture
def headers_for():
    """Bearer headers for an existing user."""

    def _headers_for(user: User) -> dict:
        token = create_access_token(data={"sub": user.name})
        return {"Authorization": f"Bearer {token}"}

    return _headers_for


@pytest.fixture
def statuses(db_session):
    """The four default statuses, by name."""
    seed_statuses(db_session, DEFAULT_STATUSES)
    return {s.name: s for s in db_session.query(Status).all()}


@pytest.fixture
def catalog(db_session):
    """One department with a category, sub-category, asset and PC part."""
    department = Department(name="ITS", location="Main", head="R. Santos")
    category = Category(name="Hardware")
    db_session.add_all([department, category])
    db_session.flush()
    sub_category = SubCategory(name="PC Unit", category_id=category.id)
    db_session.add(sub_category)
    db_session.flush()
    asset = Asset(
        item_code="ITS-PC-001",
        date_acquired="2024-01-15",
        serial_no="SN-0001",
        unit_price=35000.0,
        sub_category_id=sub_category.id,
        department_id=department.id,
    )
    db_session.add(asset)
    db_session.flush()
    pc_part = PcPart(
        department_id=department.id,
        asset_item_code=asset.item_code,
        part_name="Monitor",
        date_acquired="2024-01-15",
        serial_no="SN-MN-0001",
        unit_price=7000.0,
    )
    db_session.add(pc_part)
    db_session.commit()
    return {
        "department": department,
        "category": category,
        "sub_category": sub_category,
        "asset": asset,
        "pc_part": pc_part,
    }
