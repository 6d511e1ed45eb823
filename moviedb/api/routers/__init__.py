"""
API route handlers.
"""

from moviedb.api.routers import admin, movies, pending, proxy, search, system

__all__ = ["admin", "movies", "pending", "proxy", "search", "system"]
