"""
Shared utilities package.

This package contains logging configuration shared by the API and the
Streamlit front end.
"""

from moviedb.utils.logging_config import setup_logging, get_logger

__all__ = ['setup_logging', 'get_logger']
