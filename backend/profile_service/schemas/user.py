"""User Schemas — Pydantic models with field-level validation for API boundaries.

Invariants:
    - CreateUser.name: 2-100 chars; email: valid address; age: optional int 0-150
    - UpdateUser: every field optional, same per-field rules when present;
      name/email may not be null, age may be null (clears it)
    - Unknown fields are dropped (extra="ignore"), never reported
    - SCHEMAS maps the public schema names to their models
    - age is strict: JSON booleans, floats and strings are not ages
    - MESSAGES holds the client-facing wording per (field, error type)

Design Decisions:
    - Response models use camelCase aliases (createdAt/updatedAt) to keep the
      wire format stable for existing clients
    - Timestamps serialized as UTC with millisecond precision and a Z suffix,
      whatever tz-awareness the store hands back
"""

from datetime import datetime, timezone
from uuid import UUID

from pydantic import (
    AliasChoices, BaseModel, ConfigDict, EmailStr, Field, field_serializer,
    field_validator,
)
from pydantic_core import PydanticCustomError


class CreateUser(BaseModel):
    """User creation — required name and email, optional age."""
    model_config = ConfigDict(extra="ignore")

    name: str = Field(min_length=2, max_length=100)
    email: EmailStr
    age: int | None = Field(None, ge=0, le=150, strict=True)


class UpdateUser(BaseModel):
    """Partial user update — only the fields present in the body change."""
    model_config = ConfigDict(extra="ignore")

    name: str | None = Field(None, min_length=2, max_length=100)
    email: EmailStr | None = None
    age: int | None = Field(None, ge=0, le=150, strict=True)

    @field_validator("name", "email", mode="before")
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise PydanticCustomError("not_null", "must not be null")
        return v

    def changes(self) -> dict:
        """Fields explicitly supplied by the client."""
        return self.model_dump(exclude_unset=True)


class IdParam(BaseModel):
    """Path parameter carrying a user id."""
    model_config = ConfigDict(extra="ignore")

    id: UUID


class Pagination(BaseModel):
    """Listing window — page is 1-based."""
    model_config = ConfigDict(extra="ignore")

    page: int = Field(1, ge=1)
    limit: int = Field(10, ge=1, le=100)


SCHEMAS: dict[str, type[BaseModel]] = {
    "createUser": CreateUser,
    "updateUser": UpdateUser,
    "idParam": IdParam,
    "pagination": Pagination,
}

_NOT_A_NUMBER = ("int_type", "int_parsing", "int_from_float")

# (field, pydantic error type) -> client-facing message
MESSAGES: dict[tuple[str, str], str] = {
    ("name", "missing"): "Name is required",
    ("name", "string_type"): "Name must be a string",
    ("name", "string_too_short"): "Name must be at least 2 characters",
    ("name", "string_too_long"): "Name must be at most 100 characters",
    ("name", "not_null"): "Name must not be null",
    ("email", "missing"): "Email is required",
    ("email", "string_type"): "Email must be a string",
    ("email", "value_error"): "Invalid email format",
    ("email", "not_null"): "Email must not be null",
    **{("age", t): "Age must be a number" for t in _NOT_A_NUMBER},
    ("age", "greater_than_equal"): "Age must be at least 0",
    ("age", "less_than_equal"): "Age must be at most 150",
    ("id", "uuid_parsing"): "Invalid ID format, must be UUID",
    ("id", "uuid_type"): "Invalid ID format, must be UUID",
    **{("page", t): "page must be a number" for t in _NOT_A_NUMBER},
    ("page", "greater_than_equal"): "page must be greater than or equal to 1",
    **{("limit", t): "limit must be a number" for t in _NOT_A_NUMBER},
    ("limit", "greater_than_equal"): "limit must be greater than or equal to 1",
    ("limit", "less_than_equal"): "limit must be less than or equal to 100",
}


# --- Responses -----------------------------------------------------------------

def format_timestamp(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


class UserResponse(BaseModel):
    """User response — public-facing profile data."""
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: UUID
    name: str
    email: str
    age: int | None = None
    created_at: datetime = Field(
        validation_alias=AliasChoices("created_at", "createdAt"),
        serialization_alias="createdAt",
    )
    updated_at: datetime = Field(
        validation_alias=AliasChoices("updated_at", "updatedAt"),
        serialization_alias="updatedAt",
    )

    @field_serializer("created_at", "updated_at")
    def serialize_timestamp(self, value: datetime) -> str:
        return format_timestamp(value)


class PageMeta(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int = Field(
        validation_alias=AliasChoices("total_pages", "totalPages"),
        serialization_alias="totalPages",
    )


class UserListResponse(BaseModel):
    data: list[UserResponse]
    pagination: PageMeta


class DeleteUserResponse(BaseModel):
    message: str
    id: UUID


class ErrorResponse(BaseModel):
    """Uniform error envelope — documented on every route for OpenAPI."""
    success: bool = False
    error: str
    code: str | None = None
