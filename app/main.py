"""
Asset Warehouse API - Main Application Entry Point.

FastAPI application serving the asset catalog, account signup/login
and pre-signed upload URLs.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app import __version__
from app.config import get_settings
from app.core.exceptions import WarehouseAPIException
from app.api.v1.router import api_router
from app.services.metrics import MetricsMiddleware

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager.
    Owns the database engine: built on startup, disposed on shutdown.
    """
    from app.db.base import Base
    from app.db.session import create_engine, create_sessionmaker
    # Import all models to register them
    from app.models import Asset, User, UserSession  # noqa: F401

    logger.info(f"Starting {settings.PROJECT_NAME}")
    logger.info(f"Bucket: {settings.SPACES_BUCKET_NAME} at {settings.SPACES_ENDPOINT_URL}")

    engine = create_engine(settings)
    app.state.engine = engine
    app.state.sessionmaker = create_sessionmaker(engine)
    logger.info(f"Database: {engine.dialect.name}")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield

    logger.info(f"Shutting down {settings.PROJECT_NAME}")
    await engine.dispose()


# Create FastAPI application
app = FastAPI(
    title=settings.PROJECT_NAME,
    description="""
## Asset Warehouse API

Catalog of uploadable 3D assets (model + thumbnail).

### Features
- **Accounts**: Signup and login with httpOnly session cookies
- **Catalog**: Your assets, full-text search, most popular public assets
- **Uploads**: Pre-signed object storage URLs, the server never touches file bytes
    """,
    version=__version__,
    openapi_tags=[
        {"name": "auth", "description": "Signup and login"},
        {"name": "assets", "description": "3D asset catalog operations"},
        {"name": "health", "description": "Service health and metrics"},
    ],
    lifespan=lifespan,
)

# Session cookies are sent cross-site, so origins must be explicit
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(MetricsMiddleware)


@app.exception_handler(WarehouseAPIException)
async def warehouse_exception_handler(request: Request, exc: WarehouseAPIException) -> JSONResponse:
    """
    Global exception handler for Asset Warehouse exceptions.
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Malformed input is a 400, not FastAPI's default 422.
    """
    return JSONResponse(
        status_code=400,
        content={
            "error": "validation_failed",
            "message": "Request validation failed",
            "details": jsonable_encoder(exc.errors()),
        },
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Catch-all exception handler for unexpected errors.
    Logs the full error but returns a sanitized response.
    """
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "error": "internal_error",
            "message": "An unexpected error occurred",
        },
    )


# Include API routers
app.include_router(api_router)


@app.get("/", include_in_schema=False)
async def root():
    """Service banner."""
    return {
        "name": settings.PROJECT_NAME,
        "version": __version__,
        "docs": "/docs",
        "openapi": "/openapi.json",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )
