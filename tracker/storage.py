"""JSON file persistence for the three record collections.

Each collection lives in its own ``<name>.json`` file and is always read and
written whole. Nothing coordinates two processes writing the same data
directory; the last full write wins.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterable

from tracker import config

logger = logging.getLogger(__name__)


class JsonStore:
    def __init__(self, data_dir: Path | None = None):
        self.data_dir = Path(data_dir or config.DATA_DIR)

    def path_for(self, name: str) -> Path:
        return self.data_dir / f"{name}.json"

    def load_collection(self, name: str) -> tuple[dict, ...]:
        target = self.path_for(name)
        if not target.exists():
            return ()
        try:
            with target.open('r', encoding='utf-8') as handle:
                data = json.load(handle)
        except (json.JSONDecodeError, OSError) as exc:
            logger.warning("Could not read %s, starting empty: %s", target, exc)
            return ()
        if not isinstance(data, list):
            logger.warning("Ignoring %s: expected a list, got %s", target, type(data).__name__)
            return ()
        return tuple(item for item in data if isinstance(item, dict))

    def save_collection(self, name: str, records: Iterable[dict]) -> bool:
        target = self.path_for(name)
        payload = list(records)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            with target.open('w', encoding='utf-8') as handle:
                json.dump(payload, handle, indent=2, ensure_ascii=False)
        except OSError as exc:
            logger.error("Failed to save %s: %s", target, exc)
            return False
        logger.debug("Saved %d %s to %s", len(payload), name, target)
        return True
