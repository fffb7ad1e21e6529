"""
Account Request DTOs

Bodies for sign-up, login, password change and the admin create paths.
"""

from pydantic import BaseModel, EmailStr, Field
from typing import Optional

from domain.value_objects import Role


class SignupRequest(BaseModel):
    """Self-service registration. The account is always created as a normal user."""

    name: str = Field(..., min_length=20, max_length=60, description="Full name")
    email: EmailStr = Field(description="Login email, unique across accounts")
    address: Optional[str] = Field(None, max_length=400, description="Postal address")
    password: str = Field(..., min_length=8, max_length=16, description="Plain-text password")


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class ChangePasswordRequest(BaseModel):
    old_password: str = Field(..., description="Current password")
    new_password: str = Field(..., min_length=8, max_length=16, description="Replacement password")


class CreateUserRequest(SignupRequest):
    """Admin-created account with an explicit role."""

    role: Role = Field(description="admin, normal or owner")


class CreateStoreRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=120, description="Store name")
    email: Optional[EmailStr] = Field(None, description="Store contact email")
    address: Optional[str] = Field(None, max_length=400, description="Store address")
    owner_id: Optional[str] = Field(None, description="User id of an owner-role account")
