"""
Demo data seeder.

Creates a small catalog (departments, categories, sub-categories, assets,
PC parts) plus one maintenance technician and one faculty/staff account,
so the ticket dialogs have something to offer. Existing rows are reused;
running it twice does not duplicate anything.
"""
import sys

from sqlalchemy.orm import Session

from config import settings
from database import SessionLocal, engine
from models import Base
from models.asset import Asset, PcPart
from models.category import Category, SubCategory
from models.department import Department
from models.user import User, UserRole
from seeder.status import seed_statuses
from utils.auth import get_password_hash

DEPARTMENTS = [
    {"name": "ITS", "location": "Main Building", "head": "R. Santos"},
    {"name": "Engineering", "location": "Annex B", "head": "L. Cruz"},
]

CATEGORIES = {
    "Hardware": ["PC Unit", "Printer"],
    "Facilities": ["Air Conditioning", "Lighting"],
}

# (item_code, serial_no, sub-category, department, price)
ASSETS = [
    ("ITS-PC-001", "SN-PC-0001", "PC Unit", "ITS", 35000.0),
    ("ITS-PR-001", "SN-PR-0001", "Printer", "ITS", 12000.0),
    ("ENG-AC-001", "SN-AC-0001", "Air Conditioning", "Engineering", 42000.0),
]

PC_PARTS = [
    ("ITS-PC-001", "Monitor", "SN-MN-0001", 7000.0),
    ("ITS-PC-001", "Keyboard", "SN-KB-0001", 800.0),
]

DEMO_USERS = [
    ("tech", "ITS", UserRole.MAINTENANCE),
    ("faculty", "Engineering", UserRole.FACULTY_STAFF),
]
DEMO_PASSWORD = "password123"


def _get_or_create(db: Session, model, defaults=None, **lookup):
    instance = db.query(model).filter_by(**lookup).first()
    if instance:
        return instance, False
    instance = model(**lookup, **(defaults or {}))
    db.add(instance)
    db.flush()
    return instance, True


def seed_demo(db: Session) -> dict:
    """Seed the demo catalog; return how many rows of each kind were new."""
    counts = {
        "departments": 0,
        "categories": 0,
        "sub_categories": 0,
        "assets": 0,
        "pc_parts": 0,
        "users": 0,
    }
    seed_statuses(db, settings.default_statuses)

    departments = {}
    for data in DEPARTMENTS:
        department, created = _get_or_create(
            db,
            Department,
            defaults={"location": data["location"], "head": data["head"]},
            name=data["name"],
        )
        departments[department.name] = department
        counts["departments"] += created

    sub_categories = {}
    for category_name, children in CATEGORIES.items():
        category, created = _get_or_create(db, Category, name=category_name)
        counts["categories"] += created
        for child in children:
            sub_category, created = _get_or_create(
                db, SubCategory, name=child, category_id=category.id
            )
            sub_categories[child] = sub_category
            counts["sub_categories"] += created

    for item_code, serial_no, child, department, price in ASSETS:
        _, created = _get_or_create(
            db,
            Asset,
            defaults={
                "serial_no": serial_no,
                "date_acquired": "2024-01-15",
                "unit_price": price,
                "sub_category_id": sub_categories[child].id,
                "department_id": departments[department].id,
            },
            item_code=item_code,
        )
        counts["assets"] += created

    for item_code, part_name, serial_no, price in PC_PARTS:
        asset = db.query(Asset).filter_by(item_code=item_code).one()
        _, created = _get_or_create(
            db,
            PcPart,
            defaults={
                "department_id": asset.department_id,
                "date_acquired": "2024-01-15",
                "unit_price": price,
            },
            asset_item_code=item_code,
            part_name=part_name,
            serial_no=serial_no,
        )
        counts["pc_parts"] += created

    for name, department, role in DEMO_USERS:
        _, created = _get_or_create(
            db,
            User,
            defaults={
                "department": department,
                "role": role,
                "hashed_password": get_password_hash(DEMO_PASSWORD),
            },
            name=name,
        )
        counts["users"] += created

    db.commit()
    return counts


def main():
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        counts = seed_demo(db)
        print("✅ Demo data seeded:")
        for kind, count in counts.items():
            print(f"  {kind}: {count} new")
        print(f"\nDemo accounts use the password '{DEMO_PASSWORD}'.")
    except Exception as e:
        db.rollback()
        print(f"\n❌ Error seeding demo data: {e}")
        sys.exit(1)
    finally:
        db.close()


if __name__ == "__main__":
    main()
