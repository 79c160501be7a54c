"""Animal endpoints."""

import logging

from fastapi import APIRouter, Depends

from ..dependencies import get_current_user, get_db
from ..models import Animal, AnimalCreate, TokenClaims
from ..storage import Database

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/animals", tags=["animals"])


@router.post("", response_model=Animal, summary="Create an animal")
async def create_animal(
    request: AnimalCreate,
    db: Database = Depends(get_db),
    user: TokenClaims = Depends(get_current_user),
) -> Animal:
    """Create an animal. Owner defaults to the caller."""
    owner = request.owner or user.id
    animal = await db.create_animal(request, owner=owner)
    logger.info(f"Animal created: {animal.id} (owner={owner})")
    return animal
