"""Path-based request dispatch for the demo server."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict

from .config import ServerConfig
from .pages import NOT_FOUND_PAGE, render_status_page
from .responses import Response, html_response, json_response
from .snapshot import ServerInfo, collect_snapshot, format_megabytes, iso_timestamp

__all__ = ["Request", "Router"]

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class Request:
    method: str
    path: str
    remote_address: str


Handler = Callable[[Request], Response]


class Router:
    """Maps exact request paths to handlers; the method is not considered."""

    def __init__(
        self,
        config: ServerConfig,
        collect: Callable[[ServerConfig], ServerInfo] = collect_snapshot,
    ) -> None:
        self._config = config
        self._collect = collect
        self._routes: Dict[str, Handler] = {
            "/": self.home,
            "/index.html": self.home,
            "/health": self.health,
            "/api/info": self.info,
        }

    def dispatch(self, request: Request) -> Response:
        LOGGER.info(
            "[%s] %s %s from %s",
            iso_timestamp(),
            request.method,
            request.path,
            request.remote_address,
        )
        handler = self._routes.get(request.path, self.not_found)
        return handler(request)

    def home(self, request: Request) -> Response:
        info = self._collect(self._config)
        return html_response(render_status_page(info, self._config))

    def health(self, request: Request) -> Response:
        info = self._collect(self._config)
        return json_response(
            {
                "status": "healthy",
                "timestamp": info.timestamp,
                "hostname": info.hostname,
                "uptime": info.uptime,
            }
        )

    def info(self, request: Request) -> Response:
        info = self._collect(self._config)
        return json_response(
            {
                "app": self._config.app_name,
                "course": self._config.course,
                "version": self._config.version,
                "hostname": info.hostname,
                "timestamp": info.timestamp,
                "runtime": info.runtime,
                "platform": info.platform,
                "arch": info.arch,
                "memory": {
                    "total": format_megabytes(info.memory_total_mb),
                    "free": format_megabytes(info.memory_free_mb),
                },
            }
        )

    def not_found(self, request: Request) -> Response:
        return html_response(NOT_FOUND_PAGE, status=404)
