"""
Pydantic schemas for Asset request/response validation.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ===================
# Request Schemas
# ===================

class AssetUpdate(BaseModel):
    """Schema for renaming an asset (PUT /api/assets/{id})."""

    name: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Human-readable asset name",
    )
    description: str = Field(
        ...,
        min_length=1,
        description="Asset description",
    )


class AssetUploadRequest(BaseModel):
    """
    Schema for POST /api/assets/upload.

    Only filenames travel here; the bytes go straight to object storage.
    """

    name: str = Field(..., min_length=1, max_length=100)
    description: str = Field(..., min_length=1)
    asset_filename: str = Field(
        ...,
        min_length=1,
        max_length=255,
        alias="assetFilename",
        examples=["teapot.obj"],
    )
    thumbnail_filename: str = Field(
        ...,
        min_length=1,
        max_length=255,
        alias="thumbnailFilename",
        examples=["teapot.jpg"],
    )
    tags: list[str] = Field(
        default=[],
        max_length=20,
        description="Classification and discovery tags (0-20 tags)",
    )
    is_public: bool = Field(default=True, alias="isPublic")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("asset_filename", "thumbnail_filename")
    @classmethod
    def validate_filename(cls, v: str) -> str:
        """Filenames become object keys under the owner's prefix."""
        if "/" in v or "\\" in v or v in (".", ".."):
            raise ValueError("Filename must not contain path separators")
        return v

    @field_validator("tags")
    @classmethod
    def validate_tags(cls, v: list[str]) -> list[str]:
        """Validate each tag is 1-50 characters."""
        for tag in v:
            if not 1 <= len(tag) <= 50:
                raise ValueError(f"Each tag must be 1-50 characters, got: '{tag}'")
        return v


# ===================
# Response Schemas
# ===================

class AssetResponse(BaseModel):
    """Catalog row as returned to clients."""

    id: int
    name: str
    description: str
    file_url: str
    thumbnail_url: str
    created_by: int
    created_at: datetime
    updated_at: datetime
    tags: list[str]
    is_public: bool
    downloads: int
    views: int

    model_config = ConfigDict(from_attributes=True)


class PopularAssetResponse(AssetResponse):
    """Asset joined with its owner's username."""

    username: str


class AssetUpdateResponse(BaseModel):
    message: str
    asset: AssetResponse


class UploadURLsResponse(BaseModel):
    """Pre-signed PUT URLs for the client to upload to directly."""

    asset_id: int = Field(serialization_alias="assetId")
    asset_upload_url: str = Field(serialization_alias="assetUploadURL")
    thumbnail_upload_url: str = Field(serialization_alias="thumbnailUploadURL")
    expires_in: int = Field(serialization_alias="expiresIn")
