"""Minimal HTTP status server used to demonstrate a CI/CD deployment pipeline."""

from .config import ServerConfig, load_config
from .lifecycle import LifecycleState, ServerLifecycle
from .router import Request, Router

__all__ = [
    "LifecycleState",
    "Request",
    "Router",
    "ServerConfig",
    "ServerLifecycle",
    "load_config",
]
