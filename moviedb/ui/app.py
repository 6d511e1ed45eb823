"""
Streamlit main app for the MovieDB personal movie library.

Run: streamlit run moviedb/ui/app.py --server.port 8501
"""

import sys
from pathlib import Path

import streamlit as st

# Ensure project root in path
sys.path.insert(0, str(Path(__file__).resolve().parents[2]))

from moviedb.core.filters import SORT_KEYS
from moviedb.ui.utils import api_client
from moviedb.ui.utils.session_state import (
    get_admin_token,
    get_filter_state,
    init_session_state,
)
from moviedb.ui.components.movie_card import render_movie_card
from moviedb.ui.components.movie_detail import render_movie_detail
from moviedb.utils.logging_config import configure_ui_logging

SORT_LABELS = {
    "date_watched": "Date watched",
    "admin_rating": "My rating",
    "imdb_rating": "IMDb rating",
    "date_added": "Date added",
    "title": "Title",
    "year": "Year",
}
GRID_COLUMNS = 4

st.set_page_config(
    page_title="MovieDB",
    page_icon="🎬",
    layout="wide",
    initial_sidebar_state="expanded",
)

configure_ui_logging()
init_session_state()
state = get_filter_state()
token = get_admin_token()

st.title("🎬 MovieDB")

# Startup configuration check; missing configuration blocks the page
try:
    health = api_client.health_check()
except Exception as e:
    st.error(f"API not available: {e}")
    st.info("Start the API with: uvicorn moviedb.api.main:app --host 0.0.0.0 --port 8000")
    st.stop()

if health.get("status") == "misconfigured":
    st.error("Configuration Required")
    st.markdown(
        "Set the following environment variables for the API and restart it: "
        + ", ".join(f"`{name.upper()}`" for name in health.get("missing_configuration", []))
    )
    st.caption("TMDb key: themoviedb.org/settings/api · OMDb key: omdbapi.com/apikey.aspx")
    st.stop()

if token:
    st.caption("🔓 Admin mode")

# Stats
stats = {}
try:
    stats = api_client.get_stats()
    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Watched", stats["watched_count"])
    col2.metric("Watchlist", stats["watchlist_count"])
    col3.metric("Avg rating", f"{stats['average_rating']:.1f}" if stats["average_rating"] else "-")
    col4.metric("This month", stats["watched_this_month"])
except Exception as e:
    st.error(f"Error loading movies from database: {api_client.error_message(e)}")

# Sidebar filters
try:
    facets = api_client.get_facets()
except Exception:
    facets = {"genres": [], "countries": [], "decades": []}

with st.sidebar:
    st.header("Filters")
    state.search = st.text_input("Search", value=state.search, placeholder="Title, genre, country").strip()
    state.genres = st.multiselect(
        "Genres", options=facets["genres"], default=[g for g in state.genres if g in facets["genres"]]
    )
    countries = [""] + facets["countries"]
    state.country = st.selectbox(
        "Country",
        options=countries,
        index=countries.index(state.country) if state.country in countries else 0,
        format_func=lambda c: c or "Any Country",
    )
    state.decades = st.multiselect(
        "Decades",
        options=facets["decades"],
        default=[d for d in state.decades if d in facets["decades"]],
        format_func=lambda d: f"{d}s",
    )
    state.min_rating = st.slider("Minimum rating", 0.0, 10.0, value=float(state.min_rating), step=0.5)
    state.sort = st.selectbox(
        "Sort by",
        options=list(SORT_KEYS),
        index=list(SORT_KEYS).index(state.sort),
        format_func=SORT_LABELS.get,
    )
    if st.button("Clear filters", use_container_width=True):
        state.clear()
        st.rerun()

# Tabs
tab = st.radio(
    "Collection",
    options=["watched", "watchlist"],
    index=0 if state.current_tab == "watched" else 1,
    format_func=str.title,
    horizontal=True,
    label_visibility="collapsed",
)
if tab != state.current_tab:
    state.current_tab = tab
    state.clear()
    st.session_state["selected_movie_id"] = None
    st.rerun()

filter_params = dict(
    tab=state.current_tab,
    search=state.search,
    genres=state.genres,
    country=state.country,
    decades=state.decades,
    min_rating=state.min_rating,
    sort=state.sort,
)


def open_movie(movie_id: str) -> None:
    st.session_state["selected_movie_id"] = movie_id
    st.rerun()


if st.button("🎲 Random pick"):
    picked = api_client.random_movie(**filter_params)
    if picked is None:
        st.warning("No movies found with current filters")
    else:
        open_movie(picked["id"])

try:
    data = api_client.list_movies(**filter_params)
except Exception as e:
    st.error(f"Error loading movies from database: {api_client.error_message(e)}")
    st.stop()

movies = data["movies"]
st.caption(f"Showing {data['total']} {'title' if data['total'] == 1 else 'titles'}")

# Detail panel for the selected movie
selected = next((m for m in movies if m["id"] == st.session_state["selected_movie_id"]), None)
if selected:
    with st.expander(selected["title"], expanded=True):
        changes = render_movie_detail(selected, is_admin=token is not None)
        if changes is not None:
            try:
                api_client.update_movie(token, selected["id"], **changes)
                st.toast("Movie updated successfully!")
                st.rerun()
            except Exception as e:
                st.error(f"Failed to update movie: {api_client.error_message(e)}")
        if token and st.button("Delete movie", type="primary"):
            try:
                api_client.delete_movie(token, selected["id"])
                st.session_state["selected_movie_id"] = None
                st.toast(f"{selected['title']} deleted successfully!")
                st.rerun()
            except Exception as e:
                st.error(f"Failed to delete movie: {api_client.error_message(e)}")

if not movies:
    if not stats.get("total"):
        st.info("Start building your collection by adding movies!")
    elif state.current_tab == "watchlist":
        st.info("No movies in your watchlist yet. Add some movies you want to watch!")
    else:
        st.info("No movies found with current filters. Try adjusting your filters.")
else:
    for start in range(0, len(movies), GRID_COLUMNS):
        columns = st.columns(GRID_COLUMNS)
        for column, movie in zip(columns, movies[start:start + GRID_COLUMNS]):
            with column:
                render_movie_card(movie, on_open=open_movie)
