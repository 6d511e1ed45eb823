"""
Core application logic.

This package contains:
- Filtering, sorting and statistics over the movie list
- TMDb/OMDb clients and the metadata lookup service
- Admin session handling
- The application error taxonomy
"""
