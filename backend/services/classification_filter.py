"""
Cascading classification filter for the Add/Edit ticket dialogs.

Given the current department/category/asset selection, computes which
categories, sub-categories, assets and PC parts can still be picked, and
splits users into requesters (faculty/staff) and technicians (maintenance).
Users carry their department as free text, so requesters are matched to the
selected department by name; technicians are never scoped.

Categories carry no department column. A category is considered to belong
to a department when one of its sub-categories holds an asset of that
department, which is the only linkage the schema records. A department with
no assets therefore offers no categories, sub-categories or assets.

The filter is a pure projection over a Catalog snapshot: it never touches
the database and never raises.
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional

from sqlalchemy.orm import Session

from models import (
    Asset,
    Category,
    Department,
    PcPart,
    SubCategory,
    User,
    UserRole,
)


@dataclass
class Catalog:
    categories: List[Any] = field(default_factory=list)
    sub_categories: List[Any] = field(default_factory=list)
    assets: List[Any] = field(default_factory=list)
    pc_parts: List[Any] = field(default_factory=list)
    users: List[Any] = field(default_factory=list)
    departments: List[Any] = field(default_factory=list)


@dataclass
class ClassificationOptions:
    categories: List[Any] = field(default_factory=list)
    sub_categories: List[Any] = field(default_factory=list)
    assets: List[Any] = field(default_factory=list)
    pc_parts: List[Any] = field(default_factory=list)
    faculty_staff_users: List[Any] = field(default_factory=list)
    maintenance_users: List[Any] = field(default_factory=list)


def load_catalog(db: Session) -> Catalog:
    return Catalog(
        categories=db.query(Category).order_by(Category.id).all(),
        sub_categories=db.query(SubCategory).order_by(SubCategory.id).all(),
        assets=db.query(Asset).order_by(Asset.id).all(),
        pc_parts=db.query(PcPart).order_by(PcPart.id).all(),
        users=db.query(User).order_by(User.id).all(),
        departments=db.query(Department).order_by(Department.id).all(),
    )


def _role(user) -> Optional[str]:
    role = getattr(user, "role", None)
    return getattr(role, "value", role)


def _requesters(catalog: Catalog, department_id: Optional[int]) -> List[Any]:
    """Faculty/staff users, limited to the selected department by name."""
    faculty_staff = [
        u for u in catalog.users if _role(u) == UserRole.FACULTY_STAFF.value
    ]
    if department_id is None:
        return faculty_staff
    department = next(
        (d for d in catalog.departments if d.id == department_id), None
    )
    if department is None:
        return []
    return [u for u in faculty_staff if u.department == department.name]


def filter_classification(
    catalog: Catalog,
    department_id: Optional[int] = None,
    category_id: Optional[int] = None,
    asset_id: Optional[int] = None,
) -> ClassificationOptions:
    sub_category_by_id = {s.id: s for s in catalog.sub_categories}

    if department_id is None:
        categories = list(catalog.categories)
        assets = list(catalog.assets)
    else:
        # asset -> sub-category -> category gives the department's categories
        assets = [
            a
            for a in catalog.assets
            if a.department_id == department_id
            and a.sub_category_id in sub_category_by_id
        ]
        linked_category_ids = {
            sub_category_by_id[a.sub_category_id].category_id for a in assets
        }
        categories = [
            c for c in catalog.categories if c.id in linked_category_ids
        ]

    visible_category_ids = {c.id for c in categories}
    sub_categories = [
        s
        for s in catalog.sub_categories
        if s.category_id in visible_category_ids
    ]
    if category_id is not None:
        sub_categories = [
            s for s in sub_categories if s.category_id == category_id
        ]

    if asset_id is not None:
        selected = next((a for a in catalog.assets if a.id == asset_id), None)
        if selected is None:
            pc_parts = []
        else:
            pc_parts = [
                p
                for p in catalog.pc_parts
                if p.asset_item_code == selected.item_code
            ]
    elif department_id is not None:
        pc_parts = [
            p for p in catalog.pc_parts if p.department_id == department_id
        ]
    else:
        pc_parts = list(catalog.pc_parts)

    return ClassificationOptions(
        categories=categories,
        sub_categories=sub_categories,
        assets=assets,
        pc_parts=pc_parts,
        faculty_staff_users=_requesters(catalog, department_id),
        maintenance_users=[
            u
            for u in catalog.users
            if _role(u) == UserRole.MAINTENANCE.value
        ],
    )
