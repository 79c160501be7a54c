"""Object storage for uploaded images and video (Supabase Storage)."""

import asyncio
import logging
import uuid

from supabase import Client, create_client

from ..errors import PersistenceError

logger = logging.getLogger(__name__)


class BlobStore:
    """Writes, deletes and resolves public URLs for objects in one bucket.

    The supabase client is synchronous, so each call runs in a worker thread.
    """

    def __init__(self, client: Client, bucket: str):
        self._client = client
        self.bucket = bucket

    @classmethod
    def from_credentials(cls, url: str | None, key: str | None, bucket: str) -> "BlobStore":
        """Build a store from project credentials.

        Raises:
            RuntimeError: If the URL or key is not configured.
        """
        if not url or not key:
            raise RuntimeError("SUPABASE_URL and SUPABASE_KEY must be set for file uploads")

        return cls(create_client(url, key), bucket)

    @staticmethod
    def new_key() -> str:
        """Generate an object key for a new upload."""
        return str(uuid.uuid4())

    async def put(self, key: str, data: bytes, content_type: str | None = None) -> None:
        """Store ``data`` under ``key``."""
        options = {"content-type": content_type or "application/octet-stream"}
        try:
            await asyncio.to_thread(
                self._client.storage.from_(self.bucket).upload,
                path=key,
                file=data,
                file_options=options,
            )
        except Exception as e:
            logger.error(f"Upload of {key} to {self.bucket} failed: {e}", exc_info=True)
            raise PersistenceError(f"Upload failed: {e}") from e

        logger.debug(f"Stored object {key} ({len(data)} bytes)")

    async def delete(self, key: str) -> None:
        """Remove the object stored under ``key``."""
        try:
            await asyncio.to_thread(self._client.storage.from_(self.bucket).remove, [key])
        except Exception as e:
            raise PersistenceError(f"Delete failed: {e}") from e

        logger.debug(f"Deleted object {key}")

    def public_url(self, key: str) -> str:
        """Public URL clients can fetch the object from."""
        return self._client.storage.from_(self.bucket).get_public_url(key)
