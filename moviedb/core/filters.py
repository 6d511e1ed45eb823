"""
Filtering, sorting and statistics over the in-memory movie list.

All functions accept either ORM objects or plain dicts (as returned by the
API), so the same pipeline serves the API routers and the Streamlit pages.
"""

import random
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Sequence

EPOCH = datetime(1970, 1, 1)

SORT_KEYS = ('date_watched', 'admin_rating', 'imdb_rating', 'date_added', 'title', 'year')
TABS = ('watched', 'watchlist')


@dataclass
class FilterState:
    """Current filter, sort and tab selection."""

    genres: List[str] = field(default_factory=list)
    country: str = ''
    decades: List[int] = field(default_factory=list)
    min_rating: float = 0.0
    search: str = ''
    sort: str = 'date_watched'
    current_tab: str = 'watched'

    def clear(self) -> None:
        """Reset every filter; tab and sort are kept."""
        self.genres = []
        self.country = ''
        self.decades = []
        self.min_rating = 0.0
        self.search = ''


def _get(movie: Any, name: str, default: Any = None) -> Any:
    if isinstance(movie, dict):
        return movie.get(name, default)
    return getattr(movie, name, default)


def _as_float(value: Any) -> float:
    if value is None or value == '':
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def _as_datetime(value: Any) -> datetime:
    """Coerce a date, datetime or ISO string to a naive datetime; missing values map to the epoch."""
    if not value:
        return EPOCH
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    else:
        try:
            parsed = datetime.fromisoformat(str(value).replace('Z', '+00:00'))
        except ValueError:
            return EPOCH
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def decade_of(year: Optional[int]) -> Optional[int]:
    """Return the decade a year falls in, e.g. 1994 -> 1990."""
    if not year:
        return None
    return (int(year) // 10) * 10


def effective_rating(movie: Any) -> float:
    """IMDb rating, falling back to the admin rating, then 0."""
    return _as_float(_get(movie, 'imdb_rating') or _get(movie, 'admin_rating') or 0)


def matches_filters(movie: Any, state: FilterState) -> bool:
    """Check a single movie against every active filter."""
    if _get(movie, 'status') != state.current_tab:
        return False

    if state.search:
        term = state.search.lower()
        title = (_get(movie, 'title') or '').lower()
        genres = _get(movie, 'genres') or []
        country = (_get(movie, 'country') or '').lower()
        if (
            term not in title
            and not any(term in genre.lower() for genre in genres)
            and term not in country
        ):
            return False

    if state.genres:
        genres = _get(movie, 'genres') or []
        if not any(genre in genres for genre in state.genres):
            return False

    if state.country and _get(movie, 'country') != state.country:
        return False

    if state.decades:
        decade = decade_of(_get(movie, 'year'))
        if decade is None or decade not in state.decades:
            return False

    if state.min_rating > 0 and effective_rating(movie) < state.min_rating:
        return False

    return True


def apply_filters(movies: Sequence[Any], state: FilterState) -> List[Any]:
    """
    Filter movies by tab, search, genre, country, decade and rating, then sort.

    Args:
        movies: Movies (ORM objects or dicts)
        state: Current filter state

    Returns:
        New list of matching movies in the order given by state.sort
    """
    filtered = [movie for movie in movies if matches_filters(movie, state)]
    return apply_sort(filtered, state.sort)


_SORTS: Dict[str, tuple] = {
    'date_watched': (lambda m: _as_datetime(_get(m, 'date_watched')), True),
    'admin_rating': (lambda m: _as_float(_get(m, 'admin_rating')), True),
    'imdb_rating': (lambda m: _as_float(_get(m, 'imdb_rating')), True),
    'date_added': (lambda m: _as_datetime(_get(m, 'date_added')), True),
    'title': (lambda m: (_get(m, 'title') or '').casefold(), False),
    'year': (lambda m: int(_get(m, 'year') or 0), True),
}


def apply_sort(movies: Sequence[Any], sort_by: str) -> List[Any]:
    """
    Sort movies by one of the fixed sort keys.

    Sorting is stable. Missing dates sort as the epoch and missing numbers as 0,
    so they end up last in the descending orders. Unknown keys keep the input order.

    Args:
        movies: Movies to sort
        sort_by: One of SORT_KEYS

    Returns:
        New sorted list
    """
    ordered = list(movies)
    if sort_by not in _SORTS:
        return ordered
    key, descending = _SORTS[sort_by]
    ordered.sort(key=key, reverse=descending)
    return ordered


def get_all_genres(movies: Sequence[Any]) -> List[str]:
    """Unique genres across the movies, alphabetical."""
    genres = set()
    for movie in movies:
        value = _get(movie, 'genres')
        if isinstance(value, list):
            genres.update(value)
    return sorted(genres)


def get_all_countries(movies: Sequence[Any]) -> List[str]:
    """Unique known countries across the movies, alphabetical."""
    countries = {
        _get(movie, 'country') for movie in movies
        if _get(movie, 'country') and _get(movie, 'country') != 'Unknown'
    }
    return sorted(countries)


def get_all_decades(movies: Sequence[Any]) -> List[int]:
    """Unique decades across the movies, newest first."""
    decades = {decade_of(_get(movie, 'year')) for movie in movies if _get(movie, 'year')}
    return sorted(decades, reverse=True)


def compute_stats(movies: Sequence[Any], today: Optional[date] = None) -> Dict[str, Any]:
    """
    Collection statistics.

    Args:
        movies: Every movie in the collection
        today: Reference date for the "this month" count (default: today)

    Returns:
        Dict with watched_count, watchlist_count, average_rating (None if no
        watched movie has a rating) and watched_this_month
    """
    today = today or date.today()
    watched = [movie for movie in movies if _get(movie, 'status') == 'watched']
    watchlist_count = sum(1 for movie in movies if _get(movie, 'status') == 'watchlist')

    rated = [_as_float(_get(movie, 'admin_rating')) for movie in watched]
    rated = [rating for rating in rated if rating > 0]
    average = round(sum(rated) / len(rated), 1) if rated else None

    this_month = 0
    for movie in watched:
        if not _get(movie, 'date_watched'):
            continue
        watched_on = _as_datetime(_get(movie, 'date_watched'))
        if watched_on.year == today.year and watched_on.month == today.month:
            this_month += 1

    return {
        'watched_count': len(watched),
        'watchlist_count': watchlist_count,
        'average_rating': average,
        'watched_this_month': this_month,
    }


def pick_random(
    movies: Sequence[Any],
    state: FilterState,
    choice: Callable[[Sequence[Any]], Any] = random.choice,
) -> Optional[Any]:
    """
    Pick a random movie among those matching the current filters.

    Returns:
        A movie, or None when nothing matches
    """
    candidates = apply_filters(movies, state)
    if not candidates:
        return None
    return choice(candidates)
