"""
MovieDB Personal Movie Library Package.

This package contains the application logic for a single-admin movie
collection tracker: the REST API, persistence adapter, metadata lookup
against TMDb/OMDb, filtering and sorting, and the Streamlit front end.
"""

__version__ = "1.0.0"
