"""User Schemas — Pydantic models with field-level validation for API boundaries.

Invariants:
    - UserCreate.name is stripped; UserCreate.email is a syntactically valid address
    - UserUpdate fields are optional; "" and whitespace normalize to None
    - UserResponse mirrors the User entity field-for-field

Design Decisions:
    - EmailStr for format checks; emptiness of name is a business rule and
      is enforced again in UserService
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from user_service.core.user_entity import UserChanges


class UserCreate(BaseModel):
    """Create request — both fields required."""
    name: str = Field(max_length=255)
    email: EmailStr

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return v.strip()


class UserUpdate(BaseModel):
    """Partial update — omitted or empty fields are left untouched."""
    name: str | None = Field(None, max_length=255)
    email: EmailStr | None = None

    @field_validator("name", "email", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        if isinstance(v, str):
            return v.strip()
        return v

    def to_changes(self) -> UserChanges:
        return UserChanges(name=self.name or "", email=self.email or "")


class UserResponse(BaseModel):
    """User as returned by the API."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
