"""
Run the API under uvicorn.

uvicorn installs SIGINT/SIGTERM handlers: on a signal it stops
accepting connections, waits up to ``settings.shutdown_timeout``
seconds for in-flight requests, then runs the application's lifespan
shutdown which releases the storage backend.
"""

import asyncio
import logging

from uvicorn import Config, Server

from .core.config import settings
from .main import app


async def serve() -> None:
    """Start the API server and block until it has shut down."""
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
        timeout_graceful_shutdown=settings.shutdown_timeout,
    )
    server = Server(config)
    logging.getLogger(__name__).info("Listening on %s:%s", settings.host, settings.port)
    await server.serve()


def main() -> None:
    try:
        asyncio.run(serve())
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
