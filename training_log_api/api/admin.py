"""Admin listing endpoints with limit/offset paging."""

from fastapi import APIRouter, Depends

from ..dependencies import Pagination, get_db
from ..models import Animal, TrainingLog, UserPublic
from ..storage import Database

router = APIRouter(prefix="/api/admin", tags=["admin"])


@router.get("/animals", response_model=list[Animal], summary="List animals")
async def list_animals(
    page: Pagination = Depends(),
    db: Database = Depends(get_db),
) -> list[Animal]:
    return await db.list_animals(limit=page.count, offset=page.offset)


@router.get(
    "/users",
    response_model=list[UserPublic],
    summary="List users",
    description="List registered users. Password hashes are never included.",
)
async def list_users(
    page: Pagination = Depends(),
    db: Database = Depends(get_db),
) -> list[UserPublic]:
    return await db.list_users(limit=page.count, offset=page.offset)


@router.get("/training", response_model=list[TrainingLog], summary="List training logs")
async def list_training_logs(
    page: Pagination = Depends(),
    db: Database = Depends(get_db),
) -> list[TrainingLog]:
    return await db.list_training_logs(limit=page.count, offset=page.offset)
