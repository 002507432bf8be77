from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

from .errors import UnsupportedTimeFrame


@dataclass(frozen=True)
class PlanVariant:
    """A named time-frame scaling table.

    The admin and agent tables use different day-count conventions and are
    kept apart so neither variant's output shifts when the other changes.
    """

    name: str
    multipliers: Dict[str, int]
    default_time_frame: str = "yearly"

    @property
    def time_frames(self) -> list[str]:
        return list(self.multipliers)

    def multiplier(self, time_frame: str) -> int:
        key = (time_frame or "").strip().lower()
        if key not in self.multipliers:
            raise UnsupportedTimeFrame(
                f"Time frame '{time_frame}' is not available for the {self.name} plan "
                f"(expected one of: {', '.join(self.multipliers)}).",
                field="time_frame",
            )
        return self.multipliers[key]


AGENT_PLAN = PlanVariant("agent", {"daily": 1, "weekly": 5, "monthly": 20, "yearly": 240})
ADMIN_PLAN = PlanVariant("admin", {"yearly": 1, "monthly": 12, "weekly": 52})

VARIANTS: Dict[str, PlanVariant] = {
    AGENT_PLAN.name: AGENT_PLAN,
    ADMIN_PLAN.name: ADMIN_PLAN,
}


def get_variant(name: str) -> PlanVariant:
    try:
        return VARIANTS[(name or "").strip().lower()]
    except KeyError:
        raise ValueError(f"Unknown plan variant: {name}") from None
