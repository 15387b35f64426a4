"""
Project Store
=============

Reads and writes projects.json. A missing or malformed file means "no
projects"; individual invalid entries are skipped.
"""

import json
import logging
from pathlib import Path
from typing import List

from pydantic import ValidationError

from ..models.project_models import ProjectRecord

logger = logging.getLogger(__name__)


class ProjectStore:
    """projects.json on disk."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def load(self) -> List[ProjectRecord]:
        if not self.path.exists():
            logger.warning(f"[PROJECTS] {self.path} not found, no project cards")
            return []

        try:
            with open(self.path, encoding="utf-8") as f:
                raw = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"[PROJECTS] Could not read {self.path}: {e}")
            return []

        if not isinstance(raw, list):
            logger.warning(f"[PROJECTS] {self.path} does not hold a list, ignoring it")
            return []

        records = []
        for index, item in enumerate(raw):
            try:
                records.append(ProjectRecord.model_validate(item))
            except ValidationError as e:
                logger.warning(f"[PROJECTS] Skipping entry {index}: {e.error_count()} validation errors")
        logger.info(f"[PROJECTS] Loaded {len(records)} projects from {self.path}")
        return records

    def save(self, records: List[ProjectRecord]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump([r.model_dump() for r in records], f, indent=2, ensure_ascii=False)
        logger.info(f"[PROJECTS] Wrote {len(records)} projects to {self.path}")
