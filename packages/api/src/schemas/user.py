# This project was developed with assistance from AI tools.
"""Account request/response schemas. Password hashes are never serialized."""

from datetime import datetime

from db.enums import UserRole, VerificationStatus
from pydantic import BaseModel, ConfigDict, Field, field_validator


class RegisterRequest(BaseModel):
    username: str = Field(min_length=3, max_length=100)
    email: str = Field(max_length=255, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    password: str = Field(min_length=8, max_length=72)
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    role: UserRole

    @field_validator("role")
    @classmethod
    def role_must_be_self_registerable(cls, v: UserRole) -> UserRole:
        if v not in UserRole.self_registerable():
            raise ValueError("role must be 'wholesaler' or 'cash_buyer'")
        return v


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str
    first_name: str
    last_name: str
    role: UserRole
    is_verified: bool
    verification_status: VerificationStatus
    created_at: datetime


class Capabilities(BaseModel):
    """Features unlocked by the caller's current verification state."""

    can_post_properties: bool
    can_contact_owners: bool
    can_view_documents: bool
    can_close_deals: bool


class MeResponse(UserResponse):
    capabilities: Capabilities


class UserListResponse(BaseModel):
    data: list[UserResponse]
    count: int


class VerificationDecision(BaseModel):
    """Admin decision on a user's account: 'verified' or 'rejected'."""

    status: VerificationStatus
