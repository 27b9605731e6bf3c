#!/usr/bin/env python3
"""Startup script for the Recipe Catalog Backend Service"""

import sys
import logging
import uvicorn

from core.config import get_settings

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def start_server():
    """Start the FastAPI server using host and port from settings"""
    settings = get_settings()

    logger.info("Starting Recipe Catalog Backend Service")
    logger.info(f"Host: {settings.HOST}")
    logger.info(f"Port: {settings.PORT}")
    logger.info(f"Environment: {settings.ENVIRONMENT}")

    try:
        # Import the app here to catch any import errors
        from main import app
        logger.info("Successfully imported FastAPI app")

        config = uvicorn.Config(
            app=app,
            host=settings.HOST,
            port=settings.PORT,
            log_level="info",
            access_log=True,
            use_colors=False,
            server_header=False,
            limit_concurrency=1000,
            timeout_keep_alive=5,
            loop="auto"
        )

        server = uvicorn.Server(config)
        logger.info(f"Server configured, starting on {settings.HOST}:{settings.PORT}")
        server.run()

    except ImportError as e:
        logger.error(f"Failed to import app: {e}")
        sys.exit(1)

    # A failed lifespan startup leaves the server unstarted rather than raising
    if not server.started:
        logger.error("Server failed to start; check the database connection settings")
        sys.exit(1)


if __name__ == "__main__":
    start_server()
