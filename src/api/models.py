"""Pydantic models for API request/response."""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, EmailStr, Field

from domain.model.user import User

# Largest ID a BSON int64 can hold
MAX_USER_ID = 2**63 - 1


class UserDto(BaseModel):
    """Request/response model for a user.

    created_at and updated_at are set by the server; values sent by clients are ignored.
    """
    id: Optional[int] = Field(None, ge=1, le=MAX_USER_ID, description="User ID, omitted when creating a user")
    created_at: Optional[datetime] = Field(None, description="Creation timestamp (read-only)")
    updated_at: Optional[datetime] = Field(None, description="Last update timestamp (read-only)")
    login_name: str = Field(..., min_length=1, max_length=255, pattern=r'^\w+$', description="Unique login name (word characters only)")
    email_address: EmailStr
    first_name: str = Field(..., min_length=1, max_length=255)
    last_name: str = Field(..., min_length=1, max_length=255)

    @classmethod
    def from_domain(cls, user: User) -> "UserDto":
        return cls(
            id=user.id,
            created_at=user.created_at,
            updated_at=user.updated_at,
            login_name=user.login_name,
            email_address=user.email_address,
            first_name=user.first_name,
            last_name=user.last_name,
        )

    def to_domain(self) -> User:
        return User(
            id=self.id,
            login_name=self.login_name,
            email_address=self.email_address,
            first_name=self.first_name,
            last_name=self.last_name,
        )


class ErrorResponse(BaseModel):
    """Response model for failed requests."""
    error_code: str = Field(..., description="HTTP status name, e.g. NOT_FOUND")
    message: str
    status_code: int
    method: str
    path: str
    timestamp: str = Field(..., description="UTC time of the error (ISO-8601)")
