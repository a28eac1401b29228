#!/usr/bin/env python3
"""
Run script for the Movie Catalog API.
"""
import os
import sys
import traceback

import uvicorn

if __name__ == "__main__":
    port = int(os.getenv("PORT", 3000))
    try:
        print("Starting Movie Catalog API server...")
        print(f"Access the API at http://localhost:{port}/api")
        print(f"API documentation at http://localhost:{port}/docs")

        uvicorn.run(
            "movie_catalog.main:app",
            host="0.0.0.0",
            port=port,
            reload=os.getenv("RELOAD", "false").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "info").lower(),
        )
    except Exception as e:
        print(f"Error starting server: {e}")
        traceback.print_exc()
        sys.exit(1)
