from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from streaming_dashboard import config
from streaming_dashboard.queries.errors import TopologyFetchError, TopologyParseError

logger = logging.getLogger("TopologyLoader")

# Endpoint path -> file inside the snapshot directory
SNAPSHOT_FILES: Dict[str, str] = {
    config.ACTORS_PATH: "actors.json",
    config.FRAGMENTS_PATH: "fragments.json",
    config.MVIEWS_PATH: "materialized_view.json",
}


class StaticTopologySource:
    """Serves a pinned snapshot from JSON files, standing in for the live API."""

    name = config.SOURCE_STATIC

    def __init__(self, directory: Optional[Path | str] = None) -> None:
        self.directory = Path(directory) if directory else config.static_snapshot_dir()

    async def fetch(self, path: str, optional: bool = False) -> Any:
        filename = SNAPSHOT_FILES.get(path)
        if filename is None:
            raise TopologyFetchError(f"No static file mapped for {path}", path=path)

        file_path = self.directory / filename
        if not file_path.exists():
            if optional:
                return None
            logger.error("Static snapshot file missing: %s", file_path)
            raise TopologyFetchError(f"Snapshot file not found: {file_path}", path=path)

        try:
            with open(file_path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.error("Parse failed for %s: %s", file_path, e)
            raise TopologyParseError(f"{file_path.name} is not valid JSON", path=path) from e
        except OSError as e:
            logger.error("Read failed for %s: %s", file_path, e)
            raise TopologyFetchError(f"Cannot read snapshot file {file_path.name}", path=path) from e
