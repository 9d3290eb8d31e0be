"""Run outputs written under the data root, one directory per planned route."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from ..config import settings

SUMMARY_FILE = "summary.json"
WAYPOINTS_FILE = "waypoints.csv"


class FileStorage:
    """Writes route summaries and waypoint sheets below ``<data_root>/outputs``."""

    def __init__(self, root: Path | None = None) -> None:
        base = Path(root) if root is not None else settings.data_root
        self.root = base.resolve()
        self.output_root = self.root / "outputs"
        self.output_root.mkdir(parents=True, exist_ok=True)

    def make_run_directory(self, prefix: str = "route") -> Path:
        # microseconds keep two plans for the same user and day apart
        stamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%S%fZ")
        run_dir = self.output_root / f"{prefix}_{stamp}"
        run_dir.mkdir(exist_ok=False)
        return run_dir

    def write_json(self, path: Path, data: Any, *, indent: int = 2) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data, ensure_ascii=False, indent=indent), encoding="utf-8")

    def write_csv(self, path: Path, content: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        # csv module output already carries its own line endings
        with path.open("w", encoding="utf-8", newline="") as handle:
            handle.write(content)

    def save_route(self, prefix: str, summary: dict[str, Any], waypoints_csv: str) -> Path:
        """Create a run directory holding ``summary.json`` and ``waypoints.csv``."""
        run_dir = self.make_run_directory(prefix=prefix)
        self.write_json(run_dir / SUMMARY_FILE, summary)
        self.write_csv(run_dir / WAYPOINTS_FILE, waypoints_csv)
        logging.info(f"Route outputs written to {run_dir}")
        return run_dir
