from sqlalchemy import Column, Float, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from database import Base


class Asset(Base):
    __tablename__ = "assets"

    id = Column(Integer, primary_key=True, index=True)
    item_code = Column(String, unique=True, nullable=False, index=True)
    date_acquired = Column(String, nullable=False)
    serial_no = Column(String, unique=True, nullable=False)
    unit_price = Column(Float, nullable=False)
    description = Column(String, nullable=True)
    supplier = Column(String, nullable=True)
    sub_category_id = Column(
        Integer,
        ForeignKey("sub_categories.id", ondelete="CASCADE"),
        nullable=False,
    )
    department_id = Column(
        Integer,
        ForeignKey("departments.id", ondelete="CASCADE"),
        nullable=False,
    )

    sub_category = relationship("SubCategory", back_populates="assets")
    department = relationship("Department", back_populates="assets")
    pc_parts = relationship(
        "PcPart",
        back_populates="asset",
        cascade="all, delete",
        passive_deletes=True,
    )


class PcPart(Base):
    """A component of a "PC Unit" asset, keyed by the asset's item code."""

    __tablename__ = "pc_parts"

    id = Column(Integer, primary_key=True, index=True)
    department_id = Column(
        Integer,
        ForeignKey("departments.id", ondelete="CASCADE"),
        nullable=False,
    )
    asset_item_code = Column(
        String,
        ForeignKey("assets.item_code", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    part_name = Column(String, nullable=False)
    date_acquired = Column(String, nullable=False)
    serial_no = Column(String, nullable=False)
    unit_price = Column(Float, nullable=False)
    description = Column(String, nullable=True)
    supplier = Column(String, nullable=True)

    asset = relationship("Asset", back_populates="pc_parts")
