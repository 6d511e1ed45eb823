"""
Search page - find movies on TMDb and add (admin) or suggest (public) them.
"""

import sys
from pathlib import Path

import streamlit as st

# Ensure project root in path
sys.path.insert(0, str(Path(__file__).resolve().parents[3]))

from moviedb.core.metadata import MIN_SEARCH_LENGTH
from moviedb.ui.utils import api_client
from moviedb.ui.utils.session_state import get_admin_token, init_session_state

init_session_state()
token = get_admin_token()

st.title("➕ Add New Movie" if token else "💡 Suggest a Movie")

query = st.text_input("Search TMDb", placeholder="Search TMDb...").strip()

if len(query) < MIN_SEARCH_LENGTH:
    st.info("Search for movies to add to your collection")
    st.stop()


def add_movie(tmdb_id: int, status: str) -> None:
    """Add directly as admin, otherwise submit a suggestion."""
    try:
        if token:
            movie = api_client.add_from_catalog(token, tmdb_id, status)
            st.success(f"{movie['title']} added successfully!")
        else:
            movie = api_client.suggest_from_catalog(tmdb_id, status)
            st.success(f"{movie['title']} submitted for approval!")
    except Exception as e:
        st.error(f"Failed to add movie: {api_client.error_message(e)}")


with st.spinner("Searching..."):
    try:
        results = api_client.search_catalog(query)
    except Exception as e:
        st.error(f"Failed to search movies. Please try again. ({api_client.error_message(e)})")
        results = []

if not results:
    st.info("No results found")
    st.stop()

columns = st.columns(3)
for index, movie in enumerate(results):
    with columns[index % 3]:
        with st.container(border=True):
            st.image(movie["poster"], use_container_width=True)
            st.markdown(f"**{movie['title']}**")
            caption = str(movie["year"])
            if movie["rating"] != "N/A":
                caption += f" · ★ {movie['rating']}"
            st.caption(caption)
            if movie.get("existing_status"):
                label = "Watched" if movie["existing_status"] == "watched" else "Watchlist"
                st.success(f"Already in {label}")
            else:
                col1, col2 = st.columns(2)
                if col1.button("Watched", key=f"watched_{movie['id']}", use_container_width=True):
                    add_movie(movie["id"], "watched")
                if col2.button("Watchlist", key=f"watchlist_{movie['id']}", use_container_width=True):
                    add_movie(movie["id"], "watchlist")
