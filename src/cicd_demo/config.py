"""Immutable runtime configuration for the demo server."""
from __future__ import annotations

import logging
import os
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

LOGGER = logging.getLogger(__name__)

_REPO_ROOT = Path(__file__).resolve().parents[2]

DEFAULT_PORT = 3000
DEFAULT_HOST = "0.0.0.0"
APP_NAME = "DevOps CI/CD Demo"
COURSE_LABEL = "CSC11004 - Mạng máy tính nâng cao"
VERSION = "1.0.0"


@dataclass(frozen=True)
class ServerConfig:
    """Settings resolved once at startup and shared by router and lifecycle."""

    port: int = DEFAULT_PORT
    host: str = DEFAULT_HOST
    app_name: str = APP_NAME
    course: str = COURSE_LABEL
    version: str = VERSION
    started_at: float = field(default_factory=time.monotonic)
    drain_timeout: Optional[float] = None

    def uptime(self) -> float:
        return max(0.0, time.monotonic() - self.started_at)


def load_env_file() -> Optional[Path]:
    """Load the first ``.env`` candidate that exists; existing variables win."""
    for candidate in (os.getenv("ENV_FILE"), _REPO_ROOT / ".env"):
        if not candidate:
            continue
        candidate_path = Path(candidate).expanduser()
        if candidate_path.exists():
            load_dotenv(candidate_path)
            LOGGER.debug("Loaded environment from %s", candidate_path)
            return candidate_path
    return None


def _parse_port(raw: Optional[str]) -> int:
    if raw is None or not raw.strip():
        return DEFAULT_PORT
    try:
        port = int(raw.strip())
    except ValueError as exc:
        raise ValueError(f"PORT must be an integer, got {raw!r}") from exc
    if port < 0 or port > 65535:
        raise ValueError("PORT must be between 0 and 65535")
    return port


def load_config(environ: Optional[Mapping[str, str]] = None) -> ServerConfig:
    """Build the server configuration from ``environ`` (``os.environ`` by default)."""
    if environ is None:
        load_env_file()
        environ = os.environ
    return ServerConfig(port=_parse_port(environ.get("PORT")))
