# engine/state.py
import logging
import threading
from datetime import datetime, timezone
from typing import Dict, Optional

from ..data_model import BusinessPlan
from .storage import load_plans, save_plans

logger = logging.getLogger(__name__)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class PlanStore:
    """One business-plan document per owner, persisted as a single JSON file.

    Saving replaces the owner's document wholesale. Writes are serialised
    within the process; concurrent edits are not merged and the last write wins.
    """

    def __init__(self, storage_path: str = "user_data/business_plans.json"):
        self.storage_path = storage_path
        self.plans: Dict[str, dict] = load_plans(storage_path)
        self._lock = threading.Lock()

    def list_owners(self):
        return sorted(self.plans.keys())

    def get(self, owner_id: str) -> Optional[BusinessPlan]:
        payload = self.plans.get(owner_id)
        if not payload:
            return None
        return BusinessPlan.from_dict(payload, owner_id=owner_id)

    def save(self, plan: BusinessPlan) -> BusinessPlan:
        with self._lock:
            existing = self.plans.get(plan.owner_id) or {}
            stamp = _now()
            plan.created_at = existing.get("created_at") or plan.created_at or stamp
            plan.updated_at = stamp
            self.plans[plan.owner_id] = plan.to_dict()
            self._save()
        logger.info("Saved business plan for %s (%d agents)", plan.owner_id, len(plan.agents))
        return plan

    def delete(self, owner_id: str) -> bool:
        with self._lock:
            if owner_id not in self.plans:
                return False
            del self.plans[owner_id]
            self._save()
        return True

    def _save(self) -> None:
        save_plans(self.storage_path, self.plans)
