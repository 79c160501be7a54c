"""User registration endpoint."""

import logging

from fastapi import APIRouter, Depends

from ..auth import hash_password
from ..config import Settings
from ..dependencies import get_db, get_settings
from ..models import User, UserCreate
from ..storage import Database

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["users"])


@router.post(
    "",
    response_model=User,
    summary="Register a user",
    description="""
Register a new user. The password is stored as a bcrypt hash.

Example:
```bash
curl -X POST /api/users \\
  -H "Content-Type: application/json" \\
  -d '{"firstName": "Ada", "lastName": "Lovelace", "email": "ada@example.com", "password": "pw"}'
```

Registering an email twice returns 409.
""",
)
async def register_user(
    request: UserCreate,
    db: Database = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> User:
    """Register a new user."""
    logger.info(f"Registering user: {request.email}")

    user = await db.create_user(
        first_name=request.first_name,
        last_name=request.last_name,
        email=request.email,
        password_hash=hash_password(request.password, rounds=settings.bcrypt_rounds),
        profile_picture=request.profile_picture,
    )

    logger.info(f"User registered: {user.id}")
    return user
