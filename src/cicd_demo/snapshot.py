"""Point-in-time host and process metrics reported by the HTTP endpoints."""
from __future__ import annotations

import os
import platform
import socket
import sys
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from .config import ServerConfig

_MEMINFO_PATH = Path("/proc/meminfo")
_BYTES_PER_MB = 1024 * 1024


@dataclass(frozen=True)
class ServerInfo:
    hostname: str
    timestamp: str
    uptime: float
    runtime: str
    platform: str
    arch: str
    memory_total_mb: int
    memory_free_mb: int


def iso_timestamp(now: Optional[datetime] = None) -> str:
    """Return ``now`` as ``YYYY-MM-DDTHH:MM:SS.mmmZ`` in UTC."""
    current = (now or datetime.now(timezone.utc)).astimezone(timezone.utc)
    return current.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def format_megabytes(value: int) -> str:
    return f"{int(value)} MB"


def _read_meminfo(path: Path) -> dict[str, int]:
    values: dict[str, int] = {}
    with path.open("r", encoding="utf-8") as handle:
        for line in handle:
            key, _, rest = line.partition(":")
            parts = rest.split()
            if parts and parts[0].isdigit():
                values[key.strip()] = int(parts[0]) * 1024
    return values


def _sysconf_totals() -> tuple[int, int]:
    page_size = os.sysconf("SC_PAGE_SIZE")
    total = page_size * os.sysconf("SC_PHYS_PAGES")
    try:
        free = page_size * os.sysconf("SC_AVPHYS_PAGES")
    except (ValueError, OSError):
        free = total
    return total, free


def memory_totals(meminfo_path: Path = _MEMINFO_PATH) -> tuple[int, int]:
    """Return ``(total_mb, free_mb)``; free never exceeds total."""
    if meminfo_path.exists():
        meminfo = _read_meminfo(meminfo_path)
        total = meminfo.get("MemTotal", 0)
        free = meminfo.get("MemAvailable", meminfo.get("MemFree", 0))
    else:
        total, free = _sysconf_totals()
    total_mb = round(total / _BYTES_PER_MB)
    free_mb = min(round(free / _BYTES_PER_MB), total_mb)
    return total_mb, free_mb


def runtime_version() -> str:
    return f"{platform.python_implementation()} {platform.python_version()}"


def collect_snapshot(config: ServerConfig) -> ServerInfo:
    total_mb, free_mb = memory_totals()
    return ServerInfo(
        hostname=socket.gethostname(),
        timestamp=iso_timestamp(),
        uptime=config.uptime(),
        runtime=runtime_version(),
        platform=sys.platform,
        arch=platform.machine(),
        memory_total_mb=total_mb,
        memory_free_mb=free_mb,
    )
