"""User Schemas — Pydantic request/response models for the users API.

Invariants:
    - Wire format uses camelCase (phoneNumber, createdAt); Python attributes are snake_case
    - Request bodies are type-coerced only; normalization happens in services/

Design Decisions:
    - alias + populate_by_name: clients may send phoneNumber or phone_number
    - from_attributes on UserResponse: routes return ORM objects directly
    - UserUpdate is a full replacement (PUT), so it shares UserCreate's fields
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class UserCreate(BaseModel):
    """User creation body — all four fields required."""
    model_config = ConfigDict(populate_by_name=True)

    name: str
    age: int
    email: str
    phone_number: str = Field(alias="phoneNumber")


class UserUpdate(UserCreate):
    """User update body — replaces every field of the stored user."""


class UserResponse(BaseModel):
    """User response — public-facing user data."""
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: str
    name: str
    age: int
    email: str
    phone_number: str = Field(alias="phoneNumber")
    created_at: datetime = Field(alias="createdAt")


class MessageResponse(BaseModel):
    """Acknowledgement for writes that do not return the user."""
    message: str
