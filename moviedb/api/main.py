"""
FastAPI application entry point for the MovieDB API.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from moviedb.api.config import get_api_host, get_api_port, get_log_level
from moviedb.api.routers import admin, movies, pending, proxy, search, system
from moviedb.utils.logging_config import configure_api_logging, setup_logging

setup_logging(level=get_log_level())

app = FastAPI(
    title="MovieDB API",
    description="REST API for a personal movie library with TMDb/OMDb metadata",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(proxy.router)
app.include_router(movies.router)
app.include_router(search.router)
app.include_router(pending.router)
app.include_router(admin.router)
app.include_router(system.router)


@app.get("/")
def root():
    """Root endpoint."""
    return {
        "message": "MovieDB API",
        "docs": "/docs",
        "health": "/api/health",
    }


if __name__ == "__main__":
    import uvicorn

    configure_api_logging(debug=get_log_level() == "DEBUG")

    uvicorn.run(app, host=get_api_host(), port=get_api_port())
