"""
Logging setup and the base class for catalog services.

This module provides:
- Root logging configuration from LOG_LEVEL
- BaseService with structured event and error logging
"""
import os
import logging
from typing import Any, Dict, Optional

# Setup logging
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(message)s",
)


class BaseService:
    """
    Base class for catalog services. Provides:
    - A named logger
    - Event logging
    - Error logging
    """
    def __init__(self, service_name: str = "movie_catalog"):
        self.service_name = service_name
        self.logger = logging.getLogger(service_name)

    def log_event(self, event: str, details: Optional[Dict[str, Any]] = None):
        self.logger.info(f"EVENT: {event} | Details: {details or {}}")

    def log_error(self, error: Exception, context: str = ""):
        self.logger.error(
            f"ERROR: {error.__class__.__name__}: {error} | Context: {context}"
        )
