"""Entry point for the directory API.

Serves the FastAPI application with Uvicorn.  Host and port are read
from the ``API_HOST``/``API_PORT`` environment variables (see
``mmo_directory_api.app.core.config``); other settings such as
``DATA_FILE`` and ``LOG_LEVEL`` are read the same way.

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from mmo_directory_api.app.core.config import settings
from mmo_directory_api.app.core.logging_config import setup_logging
from mmo_directory_api.app.main import app


async def main() -> None:
    """Start the API server and run until interrupted."""
    setup_logging(settings.log_level, settings.log_file or None)
    logging.getLogger(__name__).info(
        "Serving %s on %s:%s", settings.project_name, settings.api_host, settings.api_port
    )
    config = Config(app=app, host=settings.api_host, port=settings.api_port, reload=False, log_level="info")
    server = Server(config)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
