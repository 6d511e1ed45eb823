"""
Proxy endpoints for the third-party movie APIs.

The browser never sees the API keys: these endpoints attach them server-side
and relay the upstream JSON.
"""

import logging

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from moviedb.api.config import PROXY_CACHE_CONTROL
from moviedb.api.dependencies import get_omdb_client, get_tmdb_client
from moviedb.core.errors import MovieDBError, ValidationError
from moviedb.core.upstream import OmdbClient, TmdbClient

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["proxy"])


def _error_response(error: MovieDBError) -> JSONResponse:
    body = {"error": error.message}
    if error.detail:
        body["message"] = error.detail
    return JSONResponse(status_code=error.status_code, content=body)


def _relay(data: dict) -> JSONResponse:
    return JSONResponse(
        status_code=200,
        content=data,
        headers={"Cache-Control": PROXY_CACHE_CONTROL},
    )


@router.get("/omdb")
def omdb_proxy(
    i: str | None = Query(None, description="IMDb ID"),
    client: OmdbClient = Depends(get_omdb_client),
):
    """Relay an OMDb lookup by IMDb ID."""
    try:
        return _relay(client.fetch(i))
    except MovieDBError as e:
        return _error_response(e)


@router.get("/tmdb")
def tmdb_proxy(
    request: Request,
    endpoint: str | None = Query(None, description="TMDb path, e.g. search/movie"),
    client: TmdbClient = Depends(get_tmdb_client),
):
    """Relay a TMDb call, forwarding every other query parameter."""
    params = [(key, value) for key, value in request.query_params.multi_items() if key != "endpoint"]
    try:
        if not endpoint:
            raise ValidationError("Endpoint parameter is required")
        return _relay(client.fetch(endpoint, params))
    except MovieDBError as e:
        return _error_response(e)
