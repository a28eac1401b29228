"""Rating endpoints and service."""
