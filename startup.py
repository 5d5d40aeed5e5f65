#!/usr/bin/env python3
"""Startup script for the Recipe Box Backend Service"""

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
    """Start the FastAPI server on the configured host and port"""
    settings = get_settings()

    logger.info("Starting Recipe Box Backend Service")
    logger.info(f"Port: {settings.PORT}")
    logger.info(f"Host: {settings.HOST}")
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
            timeout_keep_alive=5,
            log_config=None,
        )

        server = uvicorn.Server(config)
        logger.info(f"Server configured, starting on {settings.HOST}:{settings.PORT}")
        server.run()

    except ImportError as e:
        logger.error(f"Failed to import app: {e}")
        sys.exit(1)
    except Exception as e:
        logger.exception(f"Failed to start server: {e}")
        sys.exit(1)


if __name__ == "__main__":
    start_server()
