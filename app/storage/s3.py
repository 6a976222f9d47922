"""
S3-compatible storage gateway.
Supports DigitalOcean Spaces, AWS S3 and MinIO.
"""

import logging
from urllib.parse import quote, urlsplit

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from app.config import get_settings
from app.core.exceptions import StorageException
from app.storage.base import StorageBackend

logger = logging.getLogger(__name__)
settings = get_settings()


class S3StorageBackend(StorageBackend):
    """
    S3-compatible pre-signed URL issuer.

    Configured via SPACES_* environment variables. Signing is computed
    locally by botocore; no request reaches the bucket here.
    """

    def __init__(
        self,
        endpoint_url: str | None = None,
        access_key: str | None = None,
        secret_key: str | None = None,
        bucket_name: str | None = None,
        region: str | None = None,
    ):
        """
        Initialize S3 storage gateway.

        Args:
            endpoint_url: S3 endpoint URL (Spaces region endpoint, MinIO, ...)
            access_key: Access key ID
            secret_key: Secret access key
            bucket_name: Bucket name
            region: Signing region
        """
        self.endpoint_url = endpoint_url or settings.SPACES_ENDPOINT_URL
        self.access_key = access_key or settings.SPACES_ACCESS_KEY
        self.secret_key = secret_key or settings.SPACES_SECRET
        self.bucket_name = bucket_name or settings.SPACES_BUCKET_NAME
        self.region = region or settings.SPACES_REGION

        # Virtual-hosted addressing: https://<bucket>.<endpoint-host>/<key>
        config = Config(
            signature_version="s3v4",
            s3={"addressing_style": "virtual"},
            retries={"max_attempts": 3, "mode": "standard"},
        )

        self.client = boto3.client(
            "s3",
            endpoint_url=self.endpoint_url,
            aws_access_key_id=self.access_key,
            aws_secret_access_key=self.secret_key,
            region_name=self.region,
            config=config,
        )

    def generate_upload_url(self, key: str, expires_in: int) -> str:
        """Generate a presigned PUT URL for a public-read object."""
        try:
            return self.client.generate_presigned_url(
                "put_object",
                Params={
                    "Bucket": self.bucket_name,
                    "Key": key,
                    "ACL": "public-read",
                },
                ExpiresIn=expires_in,
            )
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Failed to presign upload for {key}: {e}")
            raise StorageException(
                message=f"Failed to generate upload URL: {str(e)}",
                details={"key": key, "bucket": self.bucket_name},
            )

    def get_public_url(self, key: str) -> str:
        """Build the virtual-hosted public URL for an object."""
        parts = urlsplit(self.endpoint_url)
        return f"{parts.scheme}://{self.bucket_name}.{parts.netloc}/{quote(key)}"
