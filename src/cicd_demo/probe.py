"""Container health probe that queries the local ``/health`` endpoint."""
from __future__ import annotations

import logging
import sys
from typing import Optional

import requests

from .app import configure_logging
from .config import load_config

LOGGER = logging.getLogger(__name__)


def check_health(port: Optional[int] = None, host: str = "127.0.0.1", timeout: float = 2.0) -> bool:
    """Return ``True`` when the server answers 200 with ``status == "healthy"``."""
    if port is None:
        port = load_config().port
    url = f"http://{host}:{port}/health"
    try:
        response = requests.get(url, timeout=timeout)
    except requests.RequestException as exc:
        LOGGER.warning("Health probe failed for %s: %s", url, exc)
        return False
    if response.status_code != 200:
        LOGGER.warning("Health probe got HTTP %s from %s", response.status_code, url)
        return False
    try:
        payload = response.json()
    except ValueError:
        LOGGER.warning("Health probe got a non-JSON body from %s", url)
        return False
    return isinstance(payload, dict) and payload.get("status") == "healthy"


def main() -> int:
    configure_logging()
    try:
        healthy = check_health()
    except ValueError as exc:
        LOGGER.error("Invalid configuration: %s", exc)
        return 1
    return 0 if healthy else 1


if __name__ == "__main__":  # pragma: no cover - manual execution
    sys.exit(main())
