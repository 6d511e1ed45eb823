"""
Movie detail panel with the admin edit form.
"""

from datetime import date

import streamlit as st

from moviedb.core.metadata import PLACEHOLDER_POSTER
from moviedb.ui.components.rating_widget import format_stars, render_rating_widget


def render_movie_detail(movie: dict, is_admin: bool) -> dict | None:
    """
    Render a movie's details; admins get an edit form.

    Args:
        movie: Movie as returned by the API
        is_admin: Whether to show the edit form

    Returns:
        Dict of changed fields if the admin saved, else None.
    """
    col1, col2 = st.columns([1, 2])
    with col1:
        st.image(movie.get("poster_path") or PLACEHOLDER_POSTER, use_container_width=True)
    with col2:
        st.subheader(movie["title"])
        meta = [str(movie["year"]) if movie.get("year") else "N/A"]
        if movie.get("runtime"):
            meta.append(f"{movie['runtime']} min")
        meta.append(movie.get("country") or "Unknown")
        st.caption(" | ".join(meta))
        if movie.get("genres"):
            st.write(" ".join(f"`{genre}`" for genre in movie["genres"]))
        st.write(movie.get("plot") or "No plot available")
        st.caption(f"IMDb: {movie.get('imdb_rating') or 'N/A'}")

        if not is_admin:
            if movie.get("admin_rating"):
                st.write(f"Rating: {format_stars(movie['admin_rating'])} ({movie['admin_rating']:g}/10)")
            if movie.get("letterboxd_rating"):
                st.write(f"Letterboxd: {movie['letterboxd_rating']}")
            if movie.get("date_watched"):
                st.write(f"Watched: {movie['date_watched']}")
            if movie.get("notes"):
                st.write(movie["notes"])
            return None

    with st.form(f"edit_{movie['id']}"):
        rating = render_rating_widget(f"rating_{movie['id']}", movie.get("admin_rating"))
        letterboxd = st.text_input(
            "Letterboxd rating", value=movie.get("letterboxd_rating") or "", placeholder="e.g. 4.5"
        )
        status = st.radio(
            "Status",
            options=["watched", "watchlist"],
            index=0 if movie.get("status") == "watched" else 1,
            format_func=str.title,
            horizontal=True,
        )
        watched_on = st.date_input(
            "Date watched",
            value=date.fromisoformat(movie["date_watched"][:10]) if movie.get("date_watched") else None,
        )
        notes = st.text_area("Notes", value=movie.get("notes") or "")
        if st.form_submit_button("Save changes"):
            return {
                "admin_rating": rating or None,
                "letterboxd_rating": letterboxd.strip() or None,
                "status": status,
                "date_watched": watched_on.isoformat() if watched_on else None,
                "notes": notes,
            }
    return None
