"""
Asset endpoints.
Catalog queries, owner-only updates and upload URL issuance.
"""

import logging

from fastapi import APIRouter, Path, Query

from app.auth.dependencies import CurrentUser, OptionalUser
from app.auth.permissions import ensure_asset_owner
from app.config import get_settings
from app.core.exceptions import UnauthorizedException, ValidationException
from app.dependencies import DbSession, Storage
from app.schemas.asset import (
    AssetResponse,
    AssetUpdate,
    AssetUpdateResponse,
    AssetUploadRequest,
    PopularAssetResponse,
    UploadURLsResponse,
)
from app.schemas.error import ErrorResponse
from app.services.asset_service import AssetService
from app.storage.base import asset_object_key, thumbnail_object_key

logger = logging.getLogger(__name__)

# Largest value an INTEGER column holds
MAX_INTEGER = 2**31 - 1

router = APIRouter(
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
    },
)
settings = get_settings()


@router.get("/user/assets", response_model=list[AssetResponse])
async def list_user_assets(
    db: DbSession,
    user: CurrentUser,
):
    """
    List the caller's own assets, newest first.
    Requires a valid session cookie.
    """
    service = AssetService(db)
    return await service.list_for_owner(user.id)


@router.get("/search", response_model=list[AssetResponse])
async def search_assets(
    db: DbSession,
    query: str | None = Query(default=None, description="Full-text search query"),
):
    """
    Full-text search over the catalog.
    Returns the 10 best-ranked matches.
    """
    if not query:
        raise ValidationException("Missing query parameter")

    service = AssetService(db)
    return await service.search(query)


@router.get("/assets/popular/{count}", response_model=list[PopularAssetResponse])
async def get_popular_assets(
    db: DbSession,
    count: int = Path(..., gt=0, le=MAX_INTEGER, description="Number of assets to return"),
):
    """
    Most viewed public assets, with the owner's username.
    """
    service = AssetService(db)
    rows = await service.get_popular(count)

    return [
        PopularAssetResponse(
            **AssetResponse.model_validate(asset).model_dump(),
            username=username,
        )
        for asset, username in rows
    ]


@router.put("/assets/{asset_id}", response_model=AssetUpdateResponse)
async def update_asset(
    db: DbSession,
    user: OptionalUser,
    data: AssetUpdate,
    asset_id: int = Path(..., gt=0, le=MAX_INTEGER),
):
    """
    Rename an asset and replace its description.
    Requires a valid session belonging to the asset owner.

    The body is validated before the session is checked, so a malformed
    request never learns whether the asset exists.
    """
    if user is None:
        raise UnauthorizedException()

    service = AssetService(db)
    owner_id = await service.get_owner_id(asset_id)
    ensure_asset_owner(owner_id, user)

    asset = await service.update_metadata(
        asset_id=asset_id,
        name=data.name,
        description=data.description,
    )

    return AssetUpdateResponse(
        message="Successfully updated asset",
        asset=AssetResponse.model_validate(asset),
    )


@router.post("/assets/upload", status_code=201, response_model=UploadURLsResponse)
async def upload_asset(
    db: DbSession,
    storage: Storage,
    user: CurrentUser,
    data: AssetUploadRequest,
):
    """
    Register an asset and issue pre-signed upload URLs.
    Requires a valid session cookie.

    The catalog row is committed first; the client then PUTs the model
    and thumbnail straight to object storage within the expiry window.
    """
    asset_key = asset_object_key(user.id, data.asset_filename)
    thumbnail_key = thumbnail_object_key(user.id, data.thumbnail_filename)

    service = AssetService(db)
    asset = await service.create_upload_record(
        name=data.name,
        description=data.description,
        file_url=storage.get_public_url(asset_key),
        thumbnail_url=storage.get_public_url(thumbnail_key),
        user_id=user.id,
        tags=data.tags,
        is_public=data.is_public,
    )
    logger.info(f"Asset {asset.id} registered by user {user.id}, issuing upload URLs")

    expires_in = settings.PRESIGNED_URL_EXPIRES
    return UploadURLsResponse(
        asset_id=asset.id,
        asset_upload_url=storage.generate_upload_url(asset_key, expires_in),
        thumbnail_upload_url=storage.generate_upload_url(thumbnail_key, expires_in),
        expires_in=expires_in,
    )
