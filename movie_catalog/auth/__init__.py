"""
Authentication for the Movie Catalog API.

This package provides:
- HS256 token encoding, signing and verification
- An in-memory user store with registration and login
- The user token guard and the API key guard
- Per-route authorization policies
"""
