from typing import Optional

from pydantic import BaseModel, Field

from models.department import DepartmentStatus
from utils.constants import MAX_ID


class DepartmentCreate(BaseModel):
    name: str = Field(..., min_length=1)
    location: str
    head: str
    status: DepartmentStatus = DepartmentStatus.ACTIVE


class DepartmentUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    location: Optional[str] = None
    head: Optional[str] = None
    status: Optional[DepartmentStatus] = None


class DepartmentResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: int
    name: str
    location: str
    head: str
    status: DepartmentStatus


class CategoryCreate(BaseModel):
    name: str = Field(..., min_length=1)


class CategoryResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: int
    name: str


class SubCategoryCreate(BaseModel):
    name: str = Field(..., min_length=1)
    category_id: int = Field(..., le=MAX_ID)


class SubCategoryUpdate(BaseModel):
    name: str = Field(..., min_length=1)


class SubCategoryResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: int
    name: str
    category_id: int


class AssetCreate(BaseModel):
    item_code: str = Field(..., min_length=1)
    date_acquired: str
    serial_no: str = Field(..., min_length=1)
    unit_price: float
    description: Optional[str] = None
    supplier: Optional[str] = None
    sub_category_id: int = Field(..., le=MAX_ID)
    department_id: int = Field(..., le=MAX_ID)


class AssetResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: int
    item_code: str
    date_acquired: str
    serial_no: str
    unit_price: float
    description: Optional[str] = None
    supplier: Optional[str] = None
    sub_category_id: int
    department_id: int


class PcPartCreate(BaseModel):
    department_id: int = Field(..., le=MAX_ID)
    asset_item_code: str = Field(..., min_length=1)
    part_name: str = Field(..., min_length=1)
    date_acquired: str
    serial_no: str
    unit_price: float
    description: Optional[str] = None
    supplier: Optional[str] = None


class PcPartResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: int
    department_id: int
    asset_item_code: str
    part_name: str
    date_acquired: str
    serial_no: str
    unit_price: float
    description: Optional[str] = None
    supplier: Optional[str] = None


class StatusResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: int
    name: str


class ClassificationUser(BaseModel):
    model_config = {"from_attributes": True}

    id: int
    name: str
    department: str


class ClassificationResponse(BaseModel):
    categories: list[CategoryResponse]
    sub_categories: list[SubCategoryResponse]
    assets: list[AssetResponse]
    pc_parts: list[PcPartResponse]
    faculty_staff_users: list[ClassificationUser]
    maintenance_users: list[ClassificationUser]
