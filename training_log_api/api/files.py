"""File upload endpoint linking stored media to records."""

import logging

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile

from ..config import Settings
from ..dependencies import get_blob_store, get_db, get_settings
from ..errors import NotFound, PersistenceError
from ..models import UploadResponse, UploadType
from ..storage import BlobStore, Database

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/file", tags=["files"])

# Record label used in not-found messages, per upload type
_TARGET_NAMES = {
    UploadType.USER_IMAGE: "User",
    UploadType.ANIMAL_IMAGE: "Animal",
    UploadType.TRAINING_LOG_VIDEO: "Training log",
}


async def link_upload(db: Database, upload_type: UploadType, record_id: str, url: str) -> bool:
    """Point the target record at the uploaded object. Returns False if it doesn't exist."""
    if upload_type is UploadType.USER_IMAGE:
        return await db.set_user_profile_picture(record_id, url)
    if upload_type is UploadType.ANIMAL_IMAGE:
        return await db.set_animal_profile_picture(record_id, url)
    return await db.set_training_log_video(record_id, url)


async def discard_object(store: BlobStore, key: str) -> None:
    """Delete an object whose record could not be linked. Failures are only logged."""
    try:
        await store.delete(key)
    except PersistenceError as e:
        logger.warning(f"Could not delete orphaned object {key}: {e.detail}")


@router.post(
    "/upload",
    response_model=UploadResponse,
    summary="Upload an image or video",
    description="""
Multipart upload. Form fields:
- `type`: one of `user-image`, `animal-image`, `training-log-video`
- `id`: id of the user, animal or training log to attach the file to
- `file`: the file itself

Example:
```bash
curl -X POST /api/file/upload \\
  -H "Authorization: Bearer $TOKEN" \\
  -F type=animal-image -F id=$ANIMAL_ID -F "file=@rex.jpg"
```

If the target record does not exist the stored file is removed and 404 is returned.
""",
)
async def upload_file(
    upload_type: UploadType = Form(..., alias="type", description="What the file is attached to"),
    record_id: str = Form(..., alias="id", description="Target record id"),
    file: UploadFile = File(..., description="Image or video"),
    db: Database = Depends(get_db),
    store: BlobStore = Depends(get_blob_store),
    settings: Settings = Depends(get_settings),
) -> UploadResponse:
    """Store a file and attach it to a user, animal or training log."""
    content = await file.read()

    max_bytes = settings.max_upload_size_mb * 1024 * 1024
    if len(content) > max_bytes:
        raise HTTPException(
            status_code=413,
            detail=f"File too large. Maximum size: {settings.max_upload_size_mb}MB",
        )

    object_key = store.new_key()
    await store.put(object_key, content, content_type=file.content_type)
    public_url = store.public_url(object_key)

    try:
        linked = await link_upload(db, upload_type, record_id, public_url)
    except PersistenceError:
        await discard_object(store, object_key)
        raise

    if not linked:
        await discard_object(store, object_key)
        raise NotFound(f"{_TARGET_NAMES[upload_type]} not found")

    logger.info(f"Uploaded {upload_type.value} {object_key} for {record_id}")
    return UploadResponse(object_key=object_key, public_url=public_url)
