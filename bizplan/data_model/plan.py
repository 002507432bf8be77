# data_model/plan.py
from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from typing import List, Literal, Optional

from .base import optional_number
from .targets import SalesTargetInput

TimeFrame = Literal["daily", "weekly", "monthly", "yearly"]
PlanVariantName = Literal["admin", "agent"]

AMOUNT_FIELDS = ("commission_amount", "franchise_amount", "marketing_expenses", "super_amount")
EXPENSE_FIELDS = ("rent", "staff_salary", "internet", "fuel", "other_expenses")


@dataclass
class AgentFinancialInput:
    name: str
    commission_amount: Optional[float] = None
    franchise_amount: Optional[float] = None
    marketing_expenses: Optional[float] = None
    super_amount: Optional[float] = None
    business_commission_percentage: Optional[float] = None
    agent_commission_percentage: Optional[float] = None
    franchise_fee_percentage: Optional[float] = None

    @classmethod
    def from_dict(cls, row: dict) -> "AgentFinancialInput":
        name = str(row.get("name") or "").strip()
        if not name:
            raise ValueError("Agent name is required.")
        values = {
            f.name: optional_number(row.get(f.name))
            for f in fields(cls)
            if f.name != "name"
        }
        return cls(name=name, **values)

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class PlanAggregateInput:
    business_expenses_percentage: float = 0.0
    agent_expenses_percentage: float = 0.0
    rent: Optional[float] = None
    staff_salary: Optional[float] = None
    internet: Optional[float] = None
    fuel: Optional[float] = None
    other_expenses: Optional[float] = None
    time_frame: TimeFrame = "yearly"

    @classmethod
    def from_dict(cls, row: dict | None) -> "PlanAggregateInput":
        row = row or {}
        return cls(
            business_expenses_percentage=optional_number(row.get("business_expenses_percentage")) or 0.0,
            agent_expenses_percentage=optional_number(row.get("agent_expenses_percentage")) or 0.0,
            rent=optional_number(row.get("rent")),
            staff_salary=optional_number(row.get("staff_salary")),
            internet=optional_number(row.get("internet")),
            fuel=optional_number(row.get("fuel")),
            other_expenses=optional_number(row.get("other_expenses")),
            time_frame=str(row.get("time_frame") or "yearly").strip().lower(),
        )

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class DerivedAgentMetrics:
    net_commission: Optional[int] = None
    business_commission: Optional[int] = None
    agent_commission: Optional[int] = None
    business_expenses: Optional[int] = None
    agent_expenses: Optional[int] = None
    business_earnings: Optional[int] = None
    agent_earnings: Optional[int] = None
    franchise_fee_amount: Optional[int] = None

    def to_dict(self) -> dict:
        return asdict(self)


METRIC_FIELDS = tuple(f.name for f in fields(DerivedAgentMetrics))


@dataclass(frozen=True)
class DerivedPlanTotals:
    net_commission: int = 0
    business_commission: int = 0
    agent_commission: int = 0
    business_expenses: int = 0
    agent_expenses: int = 0
    business_earnings: int = 0
    agent_earnings: int = 0
    franchise_fee_amount: int = 0
    additional_expenses_total: int = 0

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class BusinessPlan:
    owner_id: str
    variant: PlanVariantName = "admin"
    aggregate: PlanAggregateInput = field(default_factory=PlanAggregateInput)
    agents: List[AgentFinancialInput] = field(default_factory=list)
    targets: Optional[SalesTargetInput] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    def agent_names(self) -> List[str]:
        return [agent.name for agent in self.agents]

    def find_agent(self, name: str) -> Optional[AgentFinancialInput]:
        for agent in self.agents:
            if agent.name == name:
                return agent
        return None

    @classmethod
    def from_dict(cls, payload: dict, owner_id: str | None = None) -> "BusinessPlan":
        owner = str(owner_id or payload.get("owner_id", "")).strip()
        if not owner:
            raise ValueError("Plan owner_id is required.")
        variant = str(payload.get("variant") or "admin").strip().lower()
        if variant not in {"admin", "agent"}:
            raise ValueError(f"Unknown plan variant: {variant}")
        agents = [AgentFinancialInput.from_dict(row) for row in payload.get("agents") or []]
        names = [agent.name for agent in agents]
        if len(names) != len(set(names)):
            raise ValueError("Agent names must be unique within a plan.")
        targets_raw = payload.get("targets")
        return cls(
            owner_id=owner,
            variant=variant,
            aggregate=PlanAggregateInput.from_dict(payload.get("aggregate")),
            agents=agents,
            targets=SalesTargetInput.from_dict(targets_raw) if targets_raw else None,
            created_at=payload.get("created_at"),
            updated_at=payload.get("updated_at"),
        )

    def to_dict(self) -> dict:
        return {
            "owner_id": self.owner_id,
            "variant": self.variant,
            "aggregate": self.aggregate.to_dict(),
            "agents": [agent.to_dict() for agent in self.agents],
            "targets": self.targets.to_dict() if self.targets else None,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }
