"""User data models."""

from pydantic import Field, field_validator

from .common import CamelModel

# bcrypt only looks at the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72


class UserCreate(CamelModel):
    """Registration request."""

    first_name: str = Field(..., examples=["Ada"])
    last_name: str = Field(..., examples=["Lovelace"])
    email: str = Field(..., examples=["ada@example.com"])
    password: str = Field(..., min_length=1)
    profile_picture: str | None = Field(default=None, description="Profile image URL")

    @field_validator("password")
    @classmethod
    def validate_password_length(cls, v: str) -> str:
        """Reject passwords bcrypt would silently truncate."""
        if len(v.encode()) > MAX_PASSWORD_BYTES:
            raise ValueError(f"password must be at most {MAX_PASSWORD_BYTES} bytes")
        return v


class UserPublic(CamelModel):
    """User record without the password digest."""

    id: str
    first_name: str
    last_name: str
    email: str
    profile_picture: str | None = None


class User(UserPublic):
    """Stored user record, including the bcrypt digest."""

    password: str
