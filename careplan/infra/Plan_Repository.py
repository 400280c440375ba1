"""File-backed store for plan snapshots, one JSON document keyed by user handle."""
import json
import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Optional

from careplan.domain.Catalog import DEFAULT_CATALOG
from careplan.domain.Plan import Plan
from careplan.infra.paths import PLAN_FILE

logger = logging.getLogger(__name__)


class PlanRepository:
    def __init__(self, path=None, catalog=DEFAULT_CATALOG):
        self.path = Path(path) if path is not None else PLAN_FILE
        self.catalog = catalog

    def _read_store(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                store = json.load(f) or {}
        except json.JSONDecodeError as e:
            logger.error("Invalid JSON in plan file %s: %s", self.path, e)
            return {}
        except OSError as e:
            logger.error("Could not read plan file %s: %s", self.path, e)
            return {}
        if not isinstance(store, dict):
            logger.error("Plan file %s does not hold an object, ignoring it", self.path)
            return {}
        return store

    def _atomic_write(self, store: dict):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=str(self.path.parent), prefix=".plans_", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                json.dump(store, tmp, indent=2, ensure_ascii=False)
            shutil.move(tmp_path, self.path)
        finally:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)

    def get_plan(self, user_handle: str) -> Optional[Plan]:
        """Return the saved plan of a user, or None if nothing was saved."""
        data = self._read_store().get(str(user_handle))
        if data is None:
            return None
        return Plan.from_dict(data, self.catalog)

    def save_plan(self, user_handle: str, plan: Plan) -> None:
        store = self._read_store()
        store[str(user_handle)] = plan.to_dict()
        self._atomic_write(store)
        logger.info("Saved plan for %s to %s", user_handle, self.path)

    def delete_plan(self, user_handle: str) -> bool:
        store = self._read_store()
        if store.pop(str(user_handle), None) is None:
            return False
        self._atomic_write(store)
        return True

    def list_users(self):
        return sorted(self._read_store().keys())
