"""Current-user endpoints: credential check and token issuance.

These routes sit under the public ``/api/user/`` prefix and authenticate with
the email/password in the request body rather than a bearer token.
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from ..auth import TokenService, verify_password
from ..dependencies import get_db, get_token_service
from ..errors import Unauthorized
from ..models import Credentials, LoginResponse, TokenClaims, User
from ..storage import Database

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/user", tags=["identity"])


async def authenticate(credentials: Credentials, db: Database) -> User:
    """Look up a user by email and check the password.

    Raises:
        Unauthorized: If no user has that email or the password does not match.
    """
    user = await db.get_user_by_email(credentials.email)
    if not user:
        raise Unauthorized("User not found")

    if not verify_password(credentials.password, user.password):
        logger.info(f"Invalid password for user {user.id}")
        raise Unauthorized("Invalid password")

    return user


@router.post("/login", response_model=LoginResponse, summary="Check credentials")
async def login(
    request: Credentials,
    db: Database = Depends(get_db),
) -> LoginResponse:
    """Check credentials without issuing a token."""
    await authenticate(request, db)
    return LoginResponse()


@router.post(
    "/verify",
    response_class=PlainTextResponse,
    summary="Check credentials and issue a token",
    description="""
Returns a bearer token as plain text. Send it on protected routes as
`Authorization: Bearer <token>`.
""",
)
async def verify(
    request: Credentials,
    db: Database = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
) -> PlainTextResponse:
    """Check credentials and issue a signed token."""
    user = await authenticate(request, db)

    token = tokens.issue(
        TokenClaims(
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            profile_picture=user.profile_picture,
            id=user.id,
        )
    )

    logger.info(f"Issued token for user {user.id}")
    return PlainTextResponse(token)
