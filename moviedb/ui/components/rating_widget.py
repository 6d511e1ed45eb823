"""
Star rating widget component.

Ratings run from 0 to 10 in half-point steps and are shown as five stars,
each star worth two points.
"""

import math

import streamlit as st

RATING_OPTIONS = [step / 2 for step in range(0, 21)]


def star_counts(rating: float | None) -> tuple[int, bool, int]:
    """
    Split a 0-10 rating into five stars.

    Returns:
        (full stars, has half star, empty stars)
    """
    rating = float(rating or 0)
    full = min(int(math.floor(rating / 2)), 5)
    half = full < 5 and (rating % 2) >= 0.5
    empty = 5 - full - (1 if half else 0)
    return full, half, empty


def format_stars(rating: float | None) -> str:
    """Text rendering of a rating, e.g. 7.0 -> '★★★⯨☆'."""
    full, half, empty = star_counts(rating)
    return "★" * full + ("⯨" if half else "") + "☆" * empty


def render_rating_widget(key: str, current_rating: float | None = None) -> float:
    """
    Render the half-star rating input.

    Args:
        key: Unique widget key
        current_rating: Existing rating to pre-fill (None shows 0)

    Returns:
        Selected rating, 0-10 in 0.5 steps
    """
    value = float(current_rating or 0)
    if value not in RATING_OPTIONS:
        value = round(value * 2) / 2
    return st.select_slider(
        "Your rating",
        options=RATING_OPTIONS,
        value=value,
        format_func=lambda x: f"{x:g} {format_stars(x)}",
        key=key,
    )
