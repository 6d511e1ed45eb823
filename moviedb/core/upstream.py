"""
Clients for the third-party movie APIs behind the proxy endpoints.

Each client attaches the server-side API key to a single GET request and
returns the decoded JSON body. Failures are mapped onto the application's
error taxonomy; nothing is retried.
"""

import logging
from typing import Any, Dict, Optional, Sequence, Tuple, Union

import requests

from moviedb.core.errors import (
    ConfigurationError,
    UpstreamError,
    UpstreamNotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

TMDB_API_BASE_URL = "https://api.themoviedb.org/3"
OMDB_API_BASE_URL = "https://www.omdbapi.com"
DEFAULT_TIMEOUT = 10


class _UpstreamClient:
    """Shared request handling for the upstream APIs."""

    name = "upstream"

    def __init__(
        self,
        api_key: Optional[str],
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    def _require_key(self) -> str:
        if not self.api_key:
            logger.error("%s API key not configured", self.name)
            raise ConfigurationError("API key not configured")
        return self.api_key

    def _get_json(self, url: str, params: Any) -> Dict[str, Any]:
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.exceptions.Timeout as e:
            logger.error("%s API request timed out: %s", self.name, url)
            raise UpstreamError(f"Failed to fetch from {self.name}", "Request timed out") from e
        except requests.exceptions.RequestException as e:
            logger.error("%s API request failed: %s", self.name, str(e))
            raise UpstreamError(f"Failed to fetch from {self.name}", str(e)) from e

        if not response.ok:
            logger.error("%s API error: %s", self.name, response.status_code)
            raise UpstreamError(
                f"Failed to fetch from {self.name}",
                f"{self.name} API error: {response.status_code}",
            )

        try:
            return response.json()
        except ValueError as e:
            logger.error("%s API returned malformed JSON: %s", self.name, str(e))
            raise UpstreamError(f"Failed to fetch from {self.name}", "Malformed response") from e


class OmdbClient(_UpstreamClient):
    """OMDb lookup by IMDb ID."""

    name = "OMDb"

    def __init__(self, api_key: Optional[str], base_url: str = OMDB_API_BASE_URL, **kwargs):
        super().__init__(api_key, base_url, **kwargs)

    def fetch(self, imdb_id: Optional[str]) -> Dict[str, Any]:
        """
        Fetch an OMDb record.

        Args:
            imdb_id: IMDb ID, e.g. 'tt0111161'

        Returns:
            OMDb JSON body

        Raises:
            ValidationError: If imdb_id is missing
            ConfigurationError: If no API key is configured
            UpstreamNotFoundError: If OMDb answers Response == 'False'
            UpstreamError: On network failure, non-OK status or bad JSON
        """
        if not imdb_id:
            raise ValidationError("IMDb ID (i) parameter is required")
        api_key = self._require_key()

        data = self._get_json(f"{self.base_url}/", {"apikey": api_key, "i": imdb_id})
        if data.get("Response") == "False":
            logger.info("OMDb has no record for %s: %s", imdb_id, data.get("Error"))
            raise UpstreamNotFoundError("Movie not found", data.get("Error"))
        return data


class TmdbClient(_UpstreamClient):
    """Pass-through access to any TMDb v3 endpoint."""

    name = "TMDb"

    def __init__(self, api_key: Optional[str], base_url: str = TMDB_API_BASE_URL, **kwargs):
        super().__init__(api_key, base_url, **kwargs)

    def fetch(
        self,
        endpoint: Optional[str],
        params: Union[Dict[str, Any], Sequence[Tuple[str, Any]], None] = None,
    ) -> Dict[str, Any]:
        """
        Call a TMDb endpoint.

        Args:
            endpoint: Path below /3, e.g. 'search/movie' or 'movie/550'
            params: Extra query parameters as a dict or a list of pairs
                (repeated keys allowed), forwarded verbatim

        Returns:
            TMDb JSON body

        Raises:
            ValidationError: If endpoint is missing
            ConfigurationError: If no API key is configured
            UpstreamError: On network failure, non-OK status or bad JSON
        """
        if not endpoint:
            raise ValidationError("Endpoint parameter is required")
        api_key = self._require_key()

        items = params.items() if isinstance(params, dict) else (params or [])
        query = [(key, value) for key, value in items if key != "api_key"]
        query.append(("api_key", api_key))
        return self._get_json(f"{self.base_url}/{endpoint.lstrip('/')}", query)
