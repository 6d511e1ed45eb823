"""
System API endpoints (health, configuration status).
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from moviedb.api.config import get_admin_password_hash, get_omdb_api_key, get_tmdb_api_key
from moviedb.api.dependencies import get_db
from moviedb.database import crud

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["system"])


@router.get("/health")
def health_check(db: Session = Depends(get_db)):
    """Health check: database reachable and which credentials are configured."""
    configuration = {
        "tmdb": get_tmdb_api_key() is not None,
        "omdb": get_omdb_api_key() is not None,
        "admin": get_admin_password_hash() is not None,
    }
    try:
        movie_count = crud.get_movie_count(db)
        pending_count = crud.get_pending_count(db)
        # A password stored through the settings page counts as configured
        if not configuration["admin"]:
            configuration["admin"] = crud.get_admin_password_hash(db) is not None
    except Exception as e:
        logger.error("Health check failed: %s", e)
        return {"status": "unhealthy", "database": str(e), "configuration": configuration}
    missing = [name for name, configured in configuration.items() if not configured]
    return {
        "status": "healthy" if not missing else "misconfigured",
        "database": "connected",
        "movies": movie_count,
        "pending": pending_count,
        "configuration": configuration,
        "missing_configuration": missing,
    }
