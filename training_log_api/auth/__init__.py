"""Credential hashing and bearer token handling."""

from .passwords import hash_password, verify_password
from .tokens import TokenService

__all__ = ["TokenService", "hash_password", "verify_password"]
