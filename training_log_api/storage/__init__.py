"""Storage layer for records and uploaded media."""

from .blobs import BlobStore
from .database import Database

__all__ = ["BlobStore", "Database"]
