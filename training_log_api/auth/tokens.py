"""Bearer token issuance and verification with PyJWT."""

import logging
from datetime import UTC, datetime, timedelta

import jwt
from pydantic import ValidationError

from ..errors import Unauthorized
from ..models import TokenClaims

logger = logging.getLogger(__name__)


class TokenService:
    """Signs and verifies identity tokens with a single shared secret.

    Issuer and verifier live in the same process, so a symmetric algorithm
    (HS256) is enough. Tokens carry no expiry unless ``expire_minutes`` is set.
    """

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        expire_minutes: int | None = None,
    ):
        if not secret_key:
            raise ValueError("secret_key must not be empty")
        self._secret_key = secret_key
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes

    def issue(self, claims: TokenClaims) -> str:
        """Encode claims into a signed compact token."""
        payload = claims.model_dump(by_alias=True)
        if self.expire_minutes is not None:
            payload["exp"] = datetime.now(UTC) + timedelta(minutes=self.expire_minutes)
        return jwt.encode(payload, self._secret_key, algorithm=self.algorithm)

    def verify(self, token: str | None) -> TokenClaims:
        """Check the token signature and return the embedded claims.

        Raises:
            Unauthorized: If the token is missing, malformed, tampered with,
                expired, or does not carry the expected claims.
        """
        if not token:
            raise Unauthorized("Unauthorized: missing token")

        try:
            payload = jwt.decode(token, self._secret_key, algorithms=[self.algorithm])
        except jwt.ExpiredSignatureError:
            raise Unauthorized("Unauthorized: token expired")
        except jwt.InvalidTokenError as e:
            logger.debug(f"Rejected token: {e}")
            raise Unauthorized("Unauthorized: invalid token")

        try:
            return TokenClaims.model_validate(payload)
        except ValidationError:
            raise Unauthorized("Unauthorized: invalid token claims")
