"""User Schemas: account records, credentials and opaque session tokens.

Invariants:
    - UserToken is never inspected, only passed between auth repository and token store
    - Passwords exist only on request payloads, never on User
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from storefront.core.domain_types import UserRole


class User(BaseModel):
    """Account profile as returned by the auth repository."""
    model_config = ConfigDict(frozen=True, extra="allow")

    id: int
    name: str
    email: str
    avatar: str = ""
    role: UserRole = UserRole.CUSTOMER


class UserToken(BaseModel):
    model_config = ConfigDict(frozen=True)

    access_token: str
    refresh_token: str


class RegisterUserInfo(BaseModel):
    """Sign-up payload."""
    name: str = Field(min_length=1)
    email: str = Field(min_length=3)
    password: str = Field(min_length=4)
    avatar: str = ""
    role: UserRole = UserRole.CUSTOMER

    @field_validator("name", "email")
    @classmethod
    def strip_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("value cannot be empty or whitespace")
        return v


class LoginCredentials(BaseModel):
    email: str = Field(min_length=3)
    password: str = Field(min_length=1)
