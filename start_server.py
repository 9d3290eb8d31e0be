#!/usr/bin/env python3
"""Serve the FetchRoute API with uvicorn on $PORT (8000 when unset)."""

import os
import sys
from pathlib import Path

import uvicorn

DEFAULT_PORT = 8000
SRC_DIR = Path(__file__).resolve().parent / "src"


def _port_from_env() -> int:
    raw = os.environ.get("PORT", str(DEFAULT_PORT))
    try:
        return int(raw)
    except ValueError:
        print(f"FetchRoute: PORT={raw!r} is not a number, serving on {DEFAULT_PORT}", file=sys.stderr)
        return DEFAULT_PORT


def main() -> None:
    port = _port_from_env()
    print(f"FetchRoute: routing API on 0.0.0.0:{port} (docs at /docs)", file=sys.stderr)
    # app_dir makes a plain checkout importable without `pip install -e .`
    uvicorn.run(
        "fetchroute.main:app",
        host="0.0.0.0",
        port=port,
        app_dir=str(SRC_DIR),
        proxy_headers=True,
        forwarded_allow_ips="*",
    )


if __name__ == "__main__":
    main()
