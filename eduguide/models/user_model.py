# /eduguide/models/user_model.py

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, ConfigDict, field_validator


class Role(str, Enum):
    """The two fixed roles of the system."""
    ADMIN = "admin"
    TEACHER = "teacher"


class UserBase(BaseModel):
    name: str = Field(..., min_length=1, description="The user's display name.")
    email: str = Field(..., min_length=3, description="Unique login email.")
    role: Role = Field(default=Role.TEACHER)

    @field_validator("email")
    @classmethod
    def _email_must_look_valid(cls, value: str) -> str:
        value = value.strip().lower()
        if "@" not in value or value.startswith("@") or value.endswith("@"):
            raise ValueError("A valid email address is required.")
        return value


class UserCreate(UserBase):
    """The payload used to register a new user."""
    password: str = Field(..., min_length=6)


class User(UserBase):
    """The public representation of a user. Never includes the password hash."""
    model_config = ConfigDict(from_attributes=True)

    id: str


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"


class TokenPayload(BaseModel):
    sub: Optional[str] = None
    role: Optional[Role] = None
