"""Entry point that serves the Contact Keeper API with Uvicorn.

Host and port come from the ``HOST`` and ``PORT`` environment
variables (see ``contact_keeper_api.app.core.config``); defaults are
``0.0.0.0`` and ``5000``.

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from contact_keeper_api.app.core.config import settings
from contact_keeper_api.app.main import app


async def main() -> None:
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    logging.getLogger(__name__).info("server started on %s", settings.port)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
