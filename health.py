"""Container health check: exits 0 when the local server reports healthy."""

import sys
from pathlib import Path

SRC_DIR = Path(__file__).resolve().parent / "src"
if SRC_DIR.exists():
    sys.path.insert(0, str(SRC_DIR))

from cicd_demo.probe import main  # noqa: E402


if __name__ == "__main__":  # pragma: no cover - manual execution
    sys.exit(main())
