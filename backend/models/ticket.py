from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Integer,
    Text,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from database import Base


class Ticket(Base):
    __tablename__ = "tickets"

    id = Column(Integer, primary_key=True, index=True)
    department_id = Column(
        Integer,
        ForeignKey("departments.id", ondelete="CASCADE"),
        nullable=False,
    )
    category_id = Column(
        Integer,
        ForeignKey("categories.id", ondelete="CASCADE"),
        nullable=False,
    )
    subcategory_id = Column(
        Integer,
        ForeignKey("sub_categories.id", ondelete="SET NULL"),
        nullable=True,
    )
    # Creator of the ticket
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    asset_id = Column(
        Integer, ForeignKey("assets.id", ondelete="SET NULL"), nullable=True
    )
    pc_part_id = Column(
        Integer, ForeignKey("pc_parts.id", ondelete="SET NULL"), nullable=True
    )
    description = Column(Text, nullable=True)
    resolution = Column(Text, nullable=True)
    status_id = Column(Integer, ForeignKey("statuses.id"), nullable=False)
    technician_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now())

    department = relationship("Department")
    category = relationship("Category")
    sub_category = relationship("SubCategory")
    creator = relationship("User", foreign_keys=[user_id])
    technician = relationship("User", foreign_keys=[technician_id])
    asset = relationship("Asset")
    pc_part = relationship("PcPart")
    status = relationship("Status")
