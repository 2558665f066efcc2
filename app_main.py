"""Application entry point for the Math Millionaire game server."""

from __future__ import annotations

from pathlib import Path
import socket

from millionaire_app.constants.network_constants import (
    DEFAULT_HOST,
    DEFAULT_PORT,
    LOCAL_STORE_PATH,
    REMOTE_STORE_URL,
)
from millionaire_app.core.game_controller import GameController
from millionaire_app.server.api_server import create_api_app, run_api_server
from millionaire_app.storage import select_store
from millionaire_app.utils.logging_config import configure_logging


def _determine_audience_url(port: int) -> str:
    """Best-effort determination of the local IP for the audience-facing URL."""
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
            sock.connect(("8.8.8.8", 80))
            ip_address = sock.getsockname()[0]
    except OSError:
        ip_address = "127.0.0.1"
    return f"http://{ip_address}:{port}/"


def main() -> None:
    """Initialize logging, select the store, and serve the API."""
    logger = configure_logging()
    logger.info("Starting Math Millionaire server…")

    store = select_store(REMOTE_STORE_URL, Path(LOCAL_STORE_PATH) if LOCAL_STORE_PATH else None)
    controller = GameController(store)
    app = create_api_app(controller, store)
    logger.info("Audience endpoints available at %s", _determine_audience_url(DEFAULT_PORT))

    run_api_server(app, host=DEFAULT_HOST, port=DEFAULT_PORT)


if __name__ == "__main__":
    main()
