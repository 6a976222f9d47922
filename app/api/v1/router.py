"""
API Router - Aggregates all endpoints.
Account routes sit at the root, catalog routes under /api.
"""

from fastapi import APIRouter

from app.api.v1 import assets, auth, health

api_router = APIRouter()

# Include endpoint routers
api_router.include_router(health.router, tags=["health"])
api_router.include_router(auth.router, tags=["auth"])
api_router.include_router(assets.router, prefix="/api", tags=["assets"])
