"""Movie endpoints and service."""
