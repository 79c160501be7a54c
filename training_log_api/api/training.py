"""Training log endpoints."""

import logging

from fastapi import APIRouter, Depends

from ..dependencies import get_current_user, get_db
from ..models import TokenClaims, TrainingLog, TrainingLogCreate
from ..storage import Database

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/training", tags=["training"])


@router.post("", response_model=TrainingLog, summary="Record a training session")
async def create_training_log(
    request: TrainingLogCreate,
    db: Database = Depends(get_db),
    user: TokenClaims = Depends(get_current_user),
) -> TrainingLog:
    """Record a training session. User defaults to the caller."""
    user_id = request.user or user.id
    log = await db.create_training_log(request, user=user_id)
    logger.info(f"Training log created: {log.id} (animal={log.animal}, user={user_id})")
    return log
