"""Deployment entry point that serves the status page until SIGTERM/SIGINT."""

import sys
from pathlib import Path

SRC_DIR = Path(__file__).resolve().parent / "src"
if SRC_DIR.exists():
    sys.path.insert(0, str(SRC_DIR))

from cicd_demo.app import main  # noqa: E402


if __name__ == "__main__":  # pragma: no cover - manual execution
    sys.exit(main())
