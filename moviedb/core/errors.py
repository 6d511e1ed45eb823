"""
Exception taxonomy for the movie library.

Routers translate these into HTTP responses; the UI shows their message
as a notification.
"""


class MovieDBError(Exception):
    """Base class for all application errors."""

    status_code = 500

    def __init__(self, message: str, detail: str | None = None):
        super().__init__(message)
        self.message = message
        self.detail = detail


class ConfigurationError(MovieDBError):
    """A required credential or setting is missing."""

    status_code = 500


class UpstreamError(MovieDBError):
    """A third-party API returned a non-OK status, malformed JSON, or was unreachable."""

    status_code = 500


class UpstreamNotFoundError(UpstreamError):
    """The third-party API reported that the requested title does not exist."""

    status_code = 404


class ValidationError(MovieDBError):
    """Local input validation failed before any network or database call."""

    status_code = 400


class AdminAuthError(MovieDBError):
    """Admin password or session is missing, wrong, or expired."""

    status_code = 401


class MovieNotFoundError(MovieDBError):
    """No movie or suggestion exists with the given identifier."""

    status_code = 404


class DuplicateMovieError(MovieDBError):
    """A movie with the same catalog ID is already in the collection."""

    status_code = 409


class InvalidSuggestionError(MovieDBError):
    """The suggestion has already been reviewed."""

    status_code = 409
