"""
Movie Catalog API.

A FastAPI backend for movies, actors and ratings:
- Token authentication with HS256 access tokens
- API token protection for administrative writes
- Async SQLAlchemy persistence
"""
__version__ = "0.1.0"
