"""
Unit tests for the pure helpers behind the Streamlit components.
"""

from unittest.mock import MagicMock

import pytest
import requests

from moviedb.ui.components.movie_card import _short_date
from moviedb.ui.components.rating_widget import RATING_OPTIONS, format_stars, star_counts
from moviedb.ui.utils import api_client


class TestRatingWidget:
    """Tests for star rendering."""

    @pytest.mark.parametrize("rating, expected", [
        (None, (0, False, 5)),
        (0, (0, False, 5)),
        (1.0, (0, True, 4)),
        (7.0, (3, True, 1)),
        (8.0, (4, False, 1)),
        (10.0, (5, False, 0)),
    ])
    def test_star_counts(self, rating, expected):
        assert star_counts(rating) == expected

    def test_format_stars(self):
        assert format_stars(10) == "★★★★★"
        assert format_stars(None) == "☆☆☆☆☆"

    def test_rating_options(self):
        assert RATING_OPTIONS[0] == 0.0
        assert RATING_OPTIONS[-1] == 10.0
        assert len(RATING_OPTIONS) == 21


class TestMovieCard:
    """Tests for movie card helpers."""

    def test_short_date(self):
        assert _short_date("2024-03-07") == "Mar 7"
        assert _short_date(None) == ""
        assert _short_date("not a date") == ""


class TestApiClient:
    """Tests for API client helpers."""

    def test_error_message_uses_detail(self):
        response = MagicMock()
        response.json.return_value = {"detail": "Admin access required"}
        error = requests.HTTPError("401 Client Error", response=response)
        assert api_client.error_message(error) == "Admin access required"

    def test_error_message_uses_proxy_error(self):
        response = MagicMock()
        response.json.return_value = {"error": "API key not configured"}
        error = requests.HTTPError("500 Server Error", response=response)
        assert api_client.error_message(error) == "API key not configured"

    def test_error_message_non_dict_body(self):
        response = MagicMock()
        response.json.return_value = ["unexpected", "list"]
        error = requests.HTTPError("502 Server Error", response=response)
        assert api_client.error_message(error) == "502 Server Error"

    def test_error_message_validation_detail_list(self):
        response = MagicMock()
        response.json.return_value = {"detail": [{"msg": "field required"}]}
        error = requests.HTTPError("422 Client Error", response=response)
        assert api_client.error_message(error) == "422 Client Error"

    def test_error_message_plain_exception(self):
        assert api_client.error_message(ValueError("boom")) == "boom"

    def test_base_url_from_env(self, monkeypatch):
        monkeypatch.setenv("API_BASE_URL", "http://api.test:9000/")
        assert api_client.get_api_base_url() == "http://api.test:9000"
