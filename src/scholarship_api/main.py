"""
Athlete Scholarship API - Main Application Entry Point

This module initializes and configures the FastAPI application including:
- Logging
- Database connection lifecycle
- CORS middleware
- API routing
- Health check endpoints

Run with:
    uvicorn scholarship_api.main:app --reload
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text

from scholarship_api.api import api_router
from scholarship_api.core.config import settings
from scholarship_api.core.database import close_db, get_session_maker, init_db

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """
    Application lifespan manager.

    Opens the database engine on startup and disposes of it on shutdown.
    """
    # Startup
    print(f"Starting Athlete Scholarship API in {settings.python_env} mode...")

    try:
        await init_db()
        print(f"[OK] Database connected ({settings.database_backend})")
    except Exception as e:
        print(f"[FAIL] Database connection failed: {e}")
        if settings.is_production:
            raise

    yield  # Application runs here

    # Shutdown
    print("Shutting down Athlete Scholarship API...")
    await close_db()
    print("[OK] Cleanup complete")


app = FastAPI(
    title="Athlete Scholarship API",
    description="Student-athlete scholarship applications: submission, listing and search",
    version="0.1.0",
    docs_url="/docs" if settings.is_development else None,
    redoc_url="/redoc" if settings.is_development else None,
    lifespan=lifespan,
)

app.include_router(api_router, prefix="/api")

# CORS configuration (credentials allowed for the session cookie)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/", tags=["Root"])
async def root() -> dict[str, str]:
    """Root endpoint - API welcome message."""
    return {
        "message": "Welcome to the Athlete Scholarship API",
        "status": "running",
        "environment": settings.python_env,
    }


@app.get("/health", tags=["Health"])
async def health_check() -> dict[str, str]:
    """Health check endpoint for container orchestration."""
    return {"status": "healthy"}


@app.get("/ready", tags=["Health"])
async def readiness_check() -> dict[str, str]:
    """Readiness check endpoint: the database must answer."""
    try:
        async with get_session_maker()() as session:
            await session.execute(text("SELECT 1"))
    except Exception as e:
        logger.warning(f"Readiness check failed: {e}")
        return {"status": "not ready", "database": "unavailable"}
    return {"status": "ready", "database": "connected"}
