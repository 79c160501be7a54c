"""Authentication request and token models."""

from pydantic import Field

from .common import CamelModel


class Credentials(CamelModel):
    """Email/password pair posted to the login and verify routes."""

    email: str
    password: str


class TokenClaims(CamelModel):
    """Identity claims carried inside a bearer token."""

    email: str
    first_name: str
    last_name: str
    profile_picture: str | None = None
    id: str = Field(..., description="User id")


class LoginResponse(CamelModel):
    """Response for a successful credential check."""

    message: str = "Logged in"
