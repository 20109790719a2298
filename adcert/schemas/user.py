"""User schemas."""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from adcert.core.roles import RoleCode


class UserBase(BaseModel):
    email: EmailStr
    full_name: str = Field(..., min_length=1, max_length=255)
    company_name: Optional[str] = Field(None, max_length=255)
    phone: Optional[str] = Field(None, max_length=50)


class UserRegister(UserBase):
    """Public advertiser sign-up."""
    password: str = Field(..., min_length=8)


class UserCreate(UserRegister):
    """Administrator-created account; may be a reviewer or administrator."""
    role: RoleCode = RoleCode.ADVERTISER
    is_verified: bool = False


class UserUpdate(BaseModel):
    full_name: Optional[str] = Field(None, min_length=1, max_length=255)
    company_name: Optional[str] = Field(None, max_length=255)
    phone: Optional[str] = Field(None, max_length=50)
    password: Optional[str] = Field(None, min_length=8)

    @field_validator("full_name", "password")
    @classmethod
    def reject_null(cls, value):
        # Omit the field to leave it unchanged; these columns cannot be cleared
        if value is None:
            raise ValueError("may be omitted but not set to null")
        return value


class UserBrief(BaseModel):
    user_id: int
    full_name: str
    company_name: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class UserResponse(UserBase):
    user_id: int
    role: RoleCode
    is_verified: bool
    created_at: datetime
    role_display: Optional[str] = None
    capabilities: dict = {}

    model_config = ConfigDict(from_attributes=True)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class Token(BaseModel):
    access_token: str
    token_type: str
