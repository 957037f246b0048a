from typing import Optional

from pydantic import BaseModel, field_validator

from models.user import UserRole


class UserCreate(BaseModel):
    name: str
    password: str
    department: str
    role: UserRole

    @field_validator("name", "department")
    @classmethod
    def validate_not_blank(cls, v):
        if not v or not v.strip():
            raise ValueError("must not be blank")
        return v.strip()

    @field_validator("password")
    @classmethod
    def validate_password(cls, v):
        if len(v) < 8:
            raise ValueError("Password must be at least 8 characters long")
        return v


class UserUpdate(BaseModel):
    name: Optional[str] = None
    department: Optional[str] = None
    role: Optional[UserRole] = None
    password: Optional[str] = None

    @field_validator("password")
    @classmethod
    def validate_password(cls, v):
        if v is not None and len(v) < 8:
            raise ValueError("Password must be at least 8 characters long")
        return v


class UserResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: int
    name: str
    department: str
    role: UserRole


class LoginRequest(BaseModel):
    name: str
    password: str


class TokenResponse(BaseModel):
    message: str = "Login successful!"
    access_token: str
    token_type: str = "bearer"
    user: UserResponse
