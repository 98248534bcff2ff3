"""
smartlist: FastAPI backend for smart shopping lists.

Run with: uvicorn smartlist.main:app --reload

Architecture:
- Turns recipes and meal plans into one consolidated list per trip
- Groups items by store section along a fixed shopping route
- Estimates cost, bulk savings and time in store from static tables
- Stateless: lists travel with the request, exports are plain-text notes
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from smartlist import __version__
from smartlist.api import health
from smartlist.api import shopping as shopping_api
from smartlist.config import get_settings
from smartlist.services.catalog import get_catalog

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan - startup and shutdown."""
    logger.info("Starting smartlist backend...")

    # Freeze the lookup tables once; every request shares them
    app.state.catalog = get_catalog()
    logger.info(f"Exports will be written to {settings.export_dir}")

    yield

    logger.info("Shutting down smartlist backend...")


app = FastAPI(
    title="smartlist",
    description="Smart shopping list generation and optimization API",
    version=__version__,
    lifespan=lifespan,
)

# CORS - allow frontend access
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if not settings.is_production else ["http://localhost:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health.router, tags=["health"])
app.include_router(shopping_api.router)  # /api/shopping


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": "smartlist",
        "version": __version__,
        "description": "Consolidated, categorized shopping lists from recipes and meal plans",
        "docs": "/docs",
        "endpoints": {
            "health": "/health",
            "shopping": "/api/shopping",
        },
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "smartlist.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=not settings.is_production,
    )
