from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.orm import Session

from database import get_db
from models.category import Category, SubCategory
from models.user import User
from schemas.catalog import (
    CategoryCreate,
    CategoryResponse,
    SubCategoryCreate,
    SubCategoryResponse,
    SubCategoryUpdate,
)
from schemas.ticket import MessageResponse
from services.catalog_service import CatalogService
from utils.auth_dependencies import admin_required, get_current_user
from utils.constants import MAX_ID, SUB_CATEGORY_NAME_TAKEN

router = APIRouter(tags=["categories"])


@router.get("/categories", response_model=List[CategoryResponse])
def list_categories(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return db.query(Category).order_by(Category.id).all()


@router.post(
    "/categories",
    response_model=CategoryResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_category(
    payload: CategoryCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(admin_required),
):
    category = Category(name=payload.name)
    db.add(category)
    db.commit()
    db.refresh(category)
    return category


@router.put("/categories/{category_id}", response_model=CategoryResponse)
def update_category(
    payload: CategoryCreate,
    category_id: int = Path(..., le=MAX_ID),
    db: Session = Depends(get_db),
    current_user: User = Depends(admin_required),
):
    category = CatalogService.get_or_404(
        db, Category, category_id, "Category"
    )
    category.name = payload.name
    db.commit()
    db.refresh(category)
    return category


@router.delete("/categories/{category_id}", response_model=MessageResponse)
def delete_category(
    category_id: int = Path(..., le=MAX_ID),
    db: Session = Depends(get_db),
    current_user: User = Depends(admin_required),
):
    """Delete a category and, with it, its sub-categories"""
    CatalogService.delete(db, Category, category_id, "Category")
    return {"message": "Category deleted successfully."}


@router.get("/sub-categories", response_model=List[SubCategoryResponse])
def list_sub_categories(
    category_id: Optional[int] = Query(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    query = db.query(SubCategory)
    if category_id is not None:
        query = query.filter(SubCategory.category_id == category_id)
    return query.order_by(SubCategory.id).all()


@router.post(
    "/sub-categories",
    response_model=SubCategoryResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_sub_category(
    payload: SubCategoryCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(admin_required),
):
    CatalogService.require_reference(
        db, Category, payload.category_id, "category_id"
    )
    sub_category = SubCategory(
        name=payload.name, category_id=payload.category_id
    )
    db.add(sub_category)
    CatalogService.commit_or_conflict(db, SUB_CATEGORY_NAME_TAKEN)
    db.refresh(sub_category)
    return sub_category


@router.put(
    "/sub-categories/{sub_category_id}", response_model=SubCategoryResponse
)
def update_sub_category(
    payload: SubCategoryUpdate,
    sub_category_id: int = Path(..., le=MAX_ID),
    db: Session = Depends(get_db),
    current_user: User = Depends(admin_required),
):
    sub_category = CatalogService.get_or_404(
        db, SubCategory, sub_category_id, "Sub-category"
    )
    sub_category.name = payload.name
    CatalogService.commit_or_conflict(db, SUB_CATEGORY_NAME_TAKEN)
    db.refresh(sub_category)
    return sub_category


@router.delete(
    "/sub-categories/{sub_category_id}", response_model=MessageResponse
)
def delete_sub_category(
    sub_category_id: int = Path(..., le=MAX_ID),
    db: Session = Depends(get_db),
    current_user: User = Depends(admin_required),
):
    CatalogService.delete(db, SubCategory, sub_category_id, "Sub-category")
    return {"message": "Sub-category deleted successfully."}
