from sqlalchemy import (
    Column,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from database import Base


class Category(Base):
    """Ticket category.

    Categories are global: there is no department column. The only
    department linkage is indirect, through the assets filed under a
    category's sub-categories.
    """

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)

    sub_categories = relationship(
        "SubCategory",
        back_populates="category",
        cascade="all, delete",
        passive_deletes=True,
    )


class SubCategory(Base):
    __tablename__ = "sub_categories"
    __table_args__ = (
        UniqueConstraint(
            "name", "category_id", name="uq_sub_categories_name_category"
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    category_id = Column(
        Integer,
        ForeignKey("categories.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    category = relationship("Category", back_populates="sub_categories")
    assets = relationship(
        "Asset",
        back_populates="sub_category",
        cascade="all, delete",
        passive_deletes=True,
    )
