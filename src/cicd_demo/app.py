"""Process entry point for the demo server."""
from __future__ import annotations

import logging
import os
import sys

from .config import load_config
from .lifecycle import ServerLifecycle

LOGGER = logging.getLogger(__name__)


def configure_logging() -> None:
    logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO").upper(), format="%(message)s")


def main() -> int:
    configure_logging()
    try:
        config = load_config()
    except ValueError as exc:
        LOGGER.error("Invalid configuration: %s", exc)
        return 1

    lifecycle = ServerLifecycle(config)
    lifecycle.install_signal_handlers()
    try:
        lifecycle.start()
    except OSError as exc:
        LOGGER.error("Failed to bind %s:%s: %s", config.host, config.port, exc)
        return 1

    lifecycle.wait_for_shutdown()
    lifecycle.drain()
    return 0


if __name__ == "__main__":  # pragma: no cover - manual execution
    sys.exit(main())
