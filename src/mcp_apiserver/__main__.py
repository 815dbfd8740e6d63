"""API server startup script."""

import sys

import uvicorn
from loguru import logger

from mcp_apiserver.api.config.settings import load_settings
from mcp_apiserver.utils.logging_setup import setup_logging


def main():
    """Run the API server."""
    try:
        settings = load_settings()
        setup_logging(settings.logging.level, settings.logging.log_dir)

        # Import here so logging is configured before services are built
        from mcp_apiserver.api.importer.importer_app import create_apiserver_app

        app = create_apiserver_app(settings)

        uvicorn.run(
            app,
            host=settings.service.host,
            port=settings.service.port,
            log_level=settings.service.log_level.lower()
        )

    except Exception as e:
        logger.exception(f"Failed to start API server: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
