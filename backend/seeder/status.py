"""
Status seeder.

Inserts the ticket statuses that do not exist yet. Safe to run repeatedly.
"""
import sys
from typing import Iterable, List

from sqlalchemy.orm import Session

from config import settings
from database import SessionLocal, engine
from models import Base
from models.status import Status


def seed_statuses(db: Session, names: Iterable[str]) -> List[Status]:
    """Create missing statuses; return only the newly created ones."""
    existing = {name for (name,) in db.query(Status.name).all()}
    created = []
    for name in names:
        if name in existing:
            continue
        status = Status(name=name)
        db.add(status)
        created.append(status)
        existing.add(name)
    if created:
        db.commit()
        for status in created:
            db.refresh(status)
    return created


def main():
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        created = seed_statuses(db, settings.default_statuses)
        if created:
            print(
                "✅ Created statuses: "
                + ", ".join(status.name for status in created)
            )
        else:
            print("Statuses already seeded, nothing to do.")
    except Exception as e:
        print(f"\n❌ Error seeding statuses: {e}")
        sys.exit(1)
    finally:
        db.close()


if __name__ == "__main__":
    main()
