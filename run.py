"""Serve the development backend.

Launches the FastAPI app from :mod:`wedding_guests.app.main` with
uvicorn so the ``guest-admin`` client has something to talk to.

Configuration such as ADMIN_EMAIL, ADMIN_PASSWORD, SECRET_KEY and
DATABASE_URL is read from the environment.  Host and port come from
``BACKEND_HOST`` and ``BACKEND_PORT`` (defaults ``127.0.0.1`` and
``8000``).

Usage:
    ADMIN_PASSWORD=secret python run.py
"""
import asyncio
import logging
import os

from uvicorn import Config, Server

from wedding_guests.app.main import app


async def run_backend() -> None:
    host = os.getenv("BACKEND_HOST", "127.0.0.1")
    port = int(os.getenv("BACKEND_PORT", "8000"))
    config = Config(app=app, host=host, port=port, reload=False, log_level="info")
    server = Server(config)
    await server.serve()


def main() -> None:
    try:
        asyncio.run(run_backend())
    except (KeyboardInterrupt, SystemExit):
        logging.getLogger(__name__).info("Backend stopped")


if __name__ == "__main__":
    main()
