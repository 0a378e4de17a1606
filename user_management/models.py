from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from user_management.user_store import User


class UserRequest(BaseModel):
    # Unknown keys (including a client-supplied "id") are dropped.
    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = Field(default=None, description="Display name, 2-50 letters and spaces")
    username: Optional[str] = Field(default=None, description="3-20 letters, digits, hyphens or underscores")
    email: Optional[str] = Field(default=None, description="Email address, unique across users")


class UserResponse(BaseModel):
    id: str
    name: str
    username: str
    email: str

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(id=user.id, name=user.name, username=user.username, email=user.email)


class ErrorResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    error: str
    status_code: int = Field(serialization_alias="statusCode", validation_alias="statusCode")
    field: Optional[str] = None
