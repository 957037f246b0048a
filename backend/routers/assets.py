from typing import List

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.orm import Session

from database import get_db
from models.asset import Asset, PcPart
from models.category import SubCategory
from models.department import Department
from models.user import User
from schemas.catalog import (
    AssetCreate,
    AssetResponse,
    PcPartCreate,
    PcPartResponse,
)
from schemas.ticket import MessageResponse
from services.catalog_service import CatalogService
from utils.auth_dependencies import admin_required, get_current_user
from utils.constants import ASSET_ALREADY_EXISTS, MAX_ID
from utils.exceptions import InvalidField

router = APIRouter(tags=["assets"])


def _check_asset_references(db: Session, payload: AssetCreate) -> None:
    CatalogService.require_reference(
        db, SubCategory, payload.sub_category_id, "sub_category_id"
    )
    CatalogService.require_reference(
        db, Department, payload.department_id, "department_id"
    )


def _check_pc_part_references(db: Session, payload: PcPartCreate) -> None:
    CatalogService.require_reference(
        db, Department, payload.department_id, "department_id"
    )
    asset = (
        db.query(Asset)
        .filter(Asset.item_code == payload.asset_item_code)
        .first()
    )
    if asset is None:
        raise InvalidField("asset_item_code")


@router.get("/assets", response_model=List[AssetResponse])
def list_assets(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return db.query(Asset).order_by(Asset.id).all()


@router.post(
    "/assets",
    response_model=AssetResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_asset(
    payload: AssetCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(admin_required),
):
    _check_asset_references(db, payload)
    asset = Asset(**payload.model_dump())
    db.add(asset)
    CatalogService.commit_or_conflict(db, ASSET_ALREADY_EXISTS)
    db.refresh(asset)
    return asset


@router.put("/assets/{asset_id}", response_model=AssetResponse)
def update_asset(
    payload: AssetCreate,
    asset_id: int = Path(..., le=MAX_ID),
    db: Session = Depends(get_db),
    current_user: User = Depends(admin_required),
):
    asset = CatalogService.get_or_404(db, Asset, asset_id, "Asset")
    _check_asset_references(db, payload)
    for field, value in payload.model_dump().items():
        setattr(asset, field, value)
    CatalogService.commit_or_conflict(db, ASSET_ALREADY_EXISTS)
    db.refresh(asset)
    return asset


@router.delete("/assets/{asset_id}", response_model=MessageResponse)
def delete_asset(
    asset_id: int = Path(..., le=MAX_ID),
    db: Session = Depends(get_db),
    current_user: User = Depends(admin_required),
):
    CatalogService.delete(db, Asset, asset_id, "Asset")
    return {"message": "Asset deleted successfully."}


@router.get("/pc-parts", response_model=List[PcPartResponse])
def list_pc_parts(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return db.query(PcPart).order_by(PcPart.id).all()


@router.get("/pc-parts/asset/{item_code}", response_model=List[PcPartResponse])
def list_pc_parts_for_asset(
    item_code: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """PC parts belonging to the asset with `item_code`"""
    return (
        db.query(PcPart)
        .filter(PcPart.asset_item_code == item_code)
        .order_by(PcPart.id)
        .all()
    )


@router.post(
    "/pc-parts",
    response_model=PcPartResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_pc_part(
    payload: PcPartCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(admin_required),
):
    _check_pc_part_references(db, payload)
    pc_part = PcPart(**payload.model_dump())
    db.add(pc_part)
    db.commit()
    db.refresh(pc_part)
    return pc_part


@router.put("/pc-parts/{pc_part_id}", response_model=PcPartResponse)
def update_pc_part(
    payload: PcPartCreate,
    pc_part_id: int = Path(..., le=MAX_ID),
    db: Session = Depends(get_db),
    current_user: User = Depends(admin_required),
):
    pc_part = CatalogService.get_or_404(db, PcPart, pc_part_id, "PC part")
    _check_pc_part_references(db, payload)
    for field, value in payload.model_dump().items():
        setattr(pc_part, field, value)
    db.commit()
    db.refresh(pc_part)
    return pc_part


@router.delete("/pc-parts/{pc_part_id}", response_model=MessageResponse)
def delete_pc_part(
    pc_part_id: int = Path(..., le=MAX_ID),
    db: Session = Depends(get_db),
    current_user: User = Depends(admin_required),
):
    CatalogService.delete(db, PcPart, pc_part_id, "PC part")
    return {"message": "PC part deleted successfully."}
