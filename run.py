"""Entry point for serving the WedSimplify API with Uvicorn.

Host, port and reload mode are read from the environment variables
``API_HOST``, ``API_PORT`` and ``API_RELOAD``.  All other configuration
(database path, secret, CORS origins, object storage) is read by
``wedsimplify_api.app.core.config`` at import time, so it must be set
before this script starts.

Usage:
    python run.py
"""
import asyncio
import logging
import os

from uvicorn import Config, Server


async def main() -> None:
    host = os.getenv("API_HOST", "0.0.0.0")
    port = int(os.getenv("API_PORT", "8000"))
    reload = os.getenv("API_RELOAD", "false").lower() in {"1", "true", "yes"}
    config = Config(
        app="wedsimplify_api.app.main:app",
        host=host,
        port=port,
        reload=reload,
        log_level="info",
    )
    server = Server(config)
    logging.getLogger(__name__).info("Serving WedSimplify API on %s:%d", host, port)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
