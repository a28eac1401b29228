"""Actor endpoints and service."""
