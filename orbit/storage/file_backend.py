"""
File-based Storage Backend.

Keeps the whole graph in a single JSON document on disk, in the same
shape the admin API stores it.
"""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Union

from orbit.model import GraphModel
from orbit.storage.protocol import PersistenceError

logger = logging.getLogger(__name__)


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


class JsonFileGateway:
    """Local JSON document storage."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    @property
    def backend_type(self) -> str:
        return "file"

    def load(self) -> GraphModel:
        if not self.path.exists():
            logger.info(f"No graph at {self.path}, starting from the default document")
            return GraphModel.default()
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            raise PersistenceError(f"Failed to read graph from {self.path}: {e}") from e
        model = GraphModel.from_dict(data)
        logger.info(f"Loaded {len(model.categories)} categories from {self.path}")
        return model

    def save(self, model: GraphModel) -> Dict[str, Any]:
        payload = model.to_dict()
        payload["updatedAt"] = _now_iso()
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2, ensure_ascii=False)
        except OSError as e:
            logger.error(f"Failed to save graph to {self.path}: {e}")
            return {"success": False, "message": f"Failed to save: {e}"}
        logger.info(f"Saved {len(model.categories)} categories to {self.path}")
        return {"success": True, "message": "Universe updated successfully!"}
