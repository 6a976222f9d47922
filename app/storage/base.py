"""
Abstract storage gateway interface.
The server never handles object bytes; it only hands out signed URLs.
"""

from abc import ABC, abstractmethod


class StorageBackend(ABC):
    """
    Abstract base class for object storage gateways.
    """

    @abstractmethod
    def generate_upload_url(self, key: str, expires_in: int) -> str:
        """
        Issue a pre-signed PUT URL for a single object.

        Args:
            key: Object key in the bucket (e.g., "assets/{userId}/teapot.obj")
            expires_in: Validity window in seconds

        Returns:
            URL the client can PUT the object to without holding credentials

        Raises:
            StorageException: If the URL cannot be signed
        """
        pass

    @abstractmethod
    def get_public_url(self, key: str) -> str:
        """
        Unsigned URL at which a public-read object is served.

        Args:
            key: Object key in the bucket

        Returns:
            Public URL of the object
        """
        pass


def asset_object_key(user_id: int, filename: str) -> str:
    """Object key for an uploaded model file."""
    return f"assets/{user_id}/{filename}"


def thumbnail_object_key(user_id: int, filename: str) -> str:
    """Object key for an uploaded thumbnail."""
    return f"thumbnails/{user_id}/{filename}"
