"""
Asset service - Business logic for asset operations.
Handles listing, search, popularity ranking, updates and upload records.
"""

from datetime import datetime, timezone
from typing import Sequence

from sqlalchemy import Text, cast, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import AssetNotFoundException
from app.models.asset import Asset
from app.models.user import User

SEARCH_LIMIT = 10


class AssetService:
    """Service class for asset operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, asset_id: int) -> Asset:
        """
        Get asset by ID.

        Raises:
            AssetNotFoundException: If asset not found
        """
        asset = await self.db.get(Asset, asset_id)
        if not asset:
            raise AssetNotFoundException(asset_id)
        return asset

    async def get_owner_id(self, asset_id: int) -> int:
        """
        Fetch only the owner of an asset.

        Raises:
            AssetNotFoundException: If asset not found
        """
        result = await self.db.execute(
            select(Asset.created_by).where(Asset.id == asset_id)
        )
        owner_id = result.scalar_one_or_none()
        if owner_id is None:
            raise AssetNotFoundException(asset_id)
        return owner_id

    async def list_for_owner(self, user_id: int) -> Sequence[Asset]:
        """All assets created by a user, newest first."""
        query = (
            select(Asset)
            .where(Asset.created_by == user_id)
            .order_by(Asset.created_at.desc(), Asset.id.desc())
        )
        result = await self.db.execute(query)
        return result.scalars().all()

    async def search(self, query_str: str, limit: int = SEARCH_LIMIT) -> Sequence[Asset]:
        """
        Full-text search over name, description and tags.

        PostgreSQL ranks with ts_rank over websearch_to_tsquery. Other
        dialects (the SQLite dev fallback) fall back to substring matching.

        Args:
            query_str: Free-text query in web-search syntax
            limit: Maximum number of results

        Returns:
            Best matches first
        """
        if self.db.get_bind().dialect.name == "postgresql":
            document = func.to_tsvector(
                "english",
                func.concat_ws(" ", Asset.name, Asset.description, cast(Asset.tags, Text)),
            )
            ts_query = func.websearch_to_tsquery("english", query_str)
            query = (
                select(Asset)
                .where(document.op("@@")(ts_query))
                .order_by(func.ts_rank(document, ts_query).desc())
                .limit(limit)
            )
        else:
            pattern = f"%{query_str}%"
            query = (
                select(Asset)
                .where(
                    or_(
                        Asset.name.ilike(pattern),
                        Asset.description.ilike(pattern),
                    )
                )
                .order_by(Asset.views.desc(), Asset.id.asc())
                .limit(limit)
            )

        result = await self.db.execute(query)
        return result.scalars().all()

    async def get_popular(self, count: int) -> Sequence[tuple[Asset, str]]:
        """
        Public assets ordered by view count, each with its owner's username.

        Args:
            count: Maximum number of assets to return

        Returns:
            List of (asset, username) rows
        """
        query = (
            select(Asset, User.username)
            .join(User, Asset.created_by == User.id)
            .where(Asset.is_public.is_(True))
            .order_by(Asset.views.desc(), Asset.id.asc())
            .limit(count)
        )
        result = await self.db.execute(query)
        return result.all()

    async def update_metadata(self, asset_id: int, name: str, description: str) -> Asset:
        """
        Rename an asset and replace its description.

        Ownership must already have been checked by the caller.
        """
        asset = await self.get_by_id(asset_id)

        asset.name = name
        asset.description = description
        asset.updated_at = datetime.now(timezone.utc)

        await self.db.flush()
        await self.db.refresh(asset)

        return asset

    async def create_upload_record(
        self,
        name: str,
        description: str,
        file_url: str,
        thumbnail_url: str,
        user_id: int,
        tags: list[str] | None = None,
        is_public: bool = True,
    ) -> Asset:
        """
        Insert and commit the catalog row for an upload.

        The row is committed before any upload URL exists, so it survives
        even if the client never uploads the objects.

        Returns:
            Created Asset model
        """
        asset = Asset(
            name=name,
            description=description,
            file_url=file_url,
            thumbnail_url=thumbnail_url,
            created_by=user_id,
            tags=tags or [],
            is_public=is_public,
            downloads=0,
            views=0,
        )
        self.db.add(asset)

        await self.db.commit()
        await self.db.refresh(asset)

        return asset

    async def totals(self) -> dict[str, int]:
        """Catalog-wide counters for the metrics endpoints."""
        result = await self.db.execute(
            select(
                func.count(Asset.id),
                func.coalesce(func.sum(Asset.views), 0),
                func.coalesce(func.sum(Asset.downloads), 0),
            )
        )
        assets, views, downloads = result.one()
        return {
            "total_assets": assets,
            "total_views": views,
            "total_downloads": downloads,
        }
