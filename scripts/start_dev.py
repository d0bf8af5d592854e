#!/usr/bin/env python3
"""Run the access-control API locally with role switching enabled.

Usage:
    python scripts/start_dev.py
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

DEFAULT_PORT = os.environ.get("RENTFLOW_BACKEND_PORT", "8000")


def main() -> None:
    import uvicorn

    # Settings are read at import time, so the environment must be set first.
    os.environ.setdefault("ALLOW_ROLE_SWITCHING", "true")
    os.environ.setdefault("LOG_FORMAT", "plain")

    print(f"[launcher] starting backend on port {DEFAULT_PORT}")
    uvicorn.run(
        "backend.main:app",
        host="127.0.0.1",
        port=int(DEFAULT_PORT),
        reload=True,
        reload_dirs=[str(ROOT / "backend")],
    )


if __name__ == "__main__":
    main()
