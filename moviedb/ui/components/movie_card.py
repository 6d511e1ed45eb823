"""
Movie display card component.
"""

from datetime import date

import streamlit as st

from moviedb.core.metadata import PLACEHOLDER_POSTER
from moviedb.ui.components.rating_widget import format_stars


def _short_date(date_string: str | None) -> str:
    """'2024-03-07' -> 'Mar 7'."""
    if not date_string:
        return ""
    try:
        watched = date.fromisoformat(date_string[:10])
    except ValueError:
        return ""
    return f"{watched.strftime('%b')} {watched.day}"


def render_movie_card(movie: dict, on_open=None) -> None:
    """
    Render a movie card.

    Args:
        movie: Movie as returned by the API
        on_open: Callback(movie_id) when the details button is clicked
    """
    with st.container(border=True):
        st.image(movie.get("poster_path") or PLACEHOLDER_POSTER, use_container_width=True)
        st.markdown(f"**{movie['title']}**")
        meta = []
        if movie.get("year"):
            meta.append(str(movie["year"]))
        if movie.get("genres"):
            meta.append(", ".join(movie["genres"][:2]))
        if meta:
            st.caption(" | ".join(meta))

        ratings = []
        if movie.get("imdb_rating"):
            ratings.append(f"IMDb {movie['imdb_rating']}")
        if movie.get("admin_rating"):
            ratings.append(format_stars(movie["admin_rating"]))
        if movie.get("date_watched"):
            ratings.append(_short_date(movie["date_watched"]))
        if movie.get("notes"):
            ratings.append("📝")
        if ratings:
            st.caption(" · ".join(ratings))

        if on_open and st.button("Details", key=f"open_{movie['id']}", use_container_width=True):
            on_open(movie["id"])
