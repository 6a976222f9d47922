"""
Health and metrics endpoints.
No authentication required.
"""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from app.dependencies import DbSession
from app.services.asset_service import AssetService
from app.services.metrics import get_metrics_collector

router = APIRouter()


@router.get("/health")
async def health_check(db: DbSession):
    """
    Service health check endpoint.

    Returns:
        {"status": "ok", "database": "<dialect>"} when service is healthy
        {"status": "degraded", "issues": [...]} when the database is unreachable
    """
    try:
        await db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        return {
            "status": "degraded",
            "issues": [f"Database: {str(e)}"],
        }

    return {
        "status": "ok",
        "database": db.get_bind().dialect.name,
    }


@router.get("/metrics")
async def metrics(db: DbSession):
    """
    Request metrics plus catalog totals, as JSON.
    """
    collector = get_metrics_collector()

    metrics_data = collector.get_metrics()
    metrics_data["catalog"] = await AssetService(db).totals()

    return metrics_data


@router.get("/metrics/prometheus", response_class=PlainTextResponse)
async def metrics_prometheus(db: DbSession):
    """
    Prometheus text exposition format endpoint.
    """
    collector = get_metrics_collector()
    catalog = await AssetService(db).totals()

    return PlainTextResponse(
        content=collector.to_prometheus(catalog),
        media_type="text/plain; version=0.0.4; charset=utf-8",
    )
