"""Health check endpoints."""

import platform
from datetime import datetime

from fastapi import APIRouter, Request

from smartlist import __version__

router = APIRouter()


@router.get("/health")
async def health_check():
    """Basic health check."""
    return {
        "status": "healthy",
        "timestamp": datetime.utcnow().isoformat(),
    }


@router.get("/health/detailed")
async def detailed_health(request: Request):
    """Health check with runtime and catalog info."""
    catalog = getattr(request.app.state, "catalog", None)

    return {
        "status": "healthy" if catalog is not None else "degraded",
        "timestamp": datetime.utcnow().isoformat(),
        "version": __version__,
        "system": {
            "platform": platform.system(),
            "python": platform.python_version(),
        },
        "catalog": {
            "loaded": catalog is not None,
            "categories": len(catalog.categories) if catalog else 0,
            "unit_spellings": len(catalog.unit_synonyms) if catalog else 0,
        },
    }
