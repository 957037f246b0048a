from sqlalchemy import Column, Integer, String

from database import Base


class StatusName:
    OPEN = "Open"
    IN_PROGRESS = "In Progress"
    CLOSED = "Closed"
    FOR_APPROVAL = "For Approval"


class Status(Base):
    __tablename__ = "statuses"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, nullable=False)
