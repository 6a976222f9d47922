"""
Storage gateway factory.
"""

from functools import lru_cache

from app.storage.base import StorageBackend
from app.storage.s3 import S3StorageBackend


@lru_cache
def get_storage_backend() -> StorageBackend:
    """
    Get the configured storage gateway.

    Uses LRU cache to ensure only one boto3 client is created.
    """
    return S3StorageBackend()


def get_storage() -> StorageBackend:
    """
    Dependency function for FastAPI.

    Usage:
        @app.post("/upload")
        async def upload(storage: StorageBackend = Depends(get_storage)):
            ...
    """
    return get_storage_backend()
