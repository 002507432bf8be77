"""Business-plan derivation chain.

Every function here is a pure function of its arguments. Missing upstream
values propagate as ``None`` instead of raising, so a half-filled plan still
yields whatever can be computed. Arithmetic runs on ``Decimal`` so that no
amount, however large, overflows between steps.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Iterable, List, Optional

from ..data_model import (
    EXPENSE_FIELDS,
    METRIC_FIELDS,
    AgentFinancialInput,
    BusinessPlan,
    DerivedAgentMetrics,
    DerivedPlanTotals,
    PlanAggregateInput,
    SalesTargets,
)
from .rounding import round_half_up, to_decimal
from .targets import derive_sales_targets
from .timeframes import get_variant


def _round_or_none(value: Optional[Decimal]) -> Optional[int]:
    return None if value is None else round_half_up(value)


def _scale(value: Optional[float], multiplier: float) -> Optional[Decimal]:
    amount = to_decimal(value)
    return None if amount is None else amount * to_decimal(multiplier)


def _share(base, percentage: Optional[float]) -> Optional[int]:
    if base is None or percentage is None:
        return None
    return round_half_up(Decimal(base) * to_decimal(percentage) / 100)


def scaled_amount(value: Optional[float], multiplier: float) -> Optional[int]:
    """One input amount scaled to a time frame and rounded."""
    return _round_or_none(_scale(value, multiplier))


def additional_expenses_total(aggregate: PlanAggregateInput, multiplier: float) -> int:
    """Scaled sum of the pooled plan expenses, unset fields counted as zero."""
    total = sum((to_decimal(getattr(aggregate, name) or 0) for name in EXPENSE_FIELDS), Decimal(0))
    return round_half_up(total * to_decimal(multiplier))


def derive_agent_metrics(
    agent: AgentFinancialInput,
    aggregate: PlanAggregateInput,
    multiplier: float,
) -> DerivedAgentMetrics:
    commission = _scale(agent.commission_amount, multiplier)
    franchise = _scale(agent.franchise_amount, multiplier)
    marketing = _scale(agent.marketing_expenses, multiplier)
    super_amount = _scale(agent.super_amount, multiplier) or 0

    if agent.franchise_fee_percentage is not None:
        franchise_fee_amount = _share(commission, agent.franchise_fee_percentage)
    else:
        franchise_fee_amount = _round_or_none(franchise)

    net_commission = None
    if commission is not None and franchise_fee_amount is not None:
        net_commission = round_half_up(commission - franchise_fee_amount)

    business_commission = _share(net_commission, agent.business_commission_percentage)
    agent_commission = _share(net_commission, agent.agent_commission_percentage)

    business_expenses = _share(marketing, aggregate.business_expenses_percentage)
    agent_expenses = _share(marketing, aggregate.agent_expenses_percentage)

    # The pooled expense total is charged against every agent row, not once per plan.
    pooled = additional_expenses_total(aggregate, multiplier)
    business_earnings = None
    if business_commission is not None and business_expenses is not None:
        business_earnings = round_half_up(business_commission - business_expenses - super_amount - pooled)

    agent_earnings = None
    if agent_commission is not None and agent_expenses is not None and marketing is not None:
        if marketing > 0:
            agent_earnings = round_half_up(agent_commission - agent_expenses + super_amount)
        else:
            agent_earnings = 0

    return DerivedAgentMetrics(
        net_commission=net_commission,
        business_commission=business_commission,
        agent_commission=agent_commission,
        business_expenses=business_expenses,
        agent_expenses=agent_expenses,
        business_earnings=business_earnings,
        agent_earnings=agent_earnings,
        franchise_fee_amount=franchise_fee_amount,
    )


def derive_totals(
    agents: Iterable[DerivedAgentMetrics],
    additional_expenses: int = 0,
) -> DerivedPlanTotals:
    sums = {name: 0 for name in METRIC_FIELDS}
    for metrics in agents:
        for name in METRIC_FIELDS:
            sums[name] += getattr(metrics, name) or 0
    return DerivedPlanTotals(additional_expenses_total=additional_expenses, **sums)


@dataclass(frozen=True)
class AgentProjection:
    name: str
    metrics: DerivedAgentMetrics

    def to_dict(self) -> dict:
        return {"name": self.name, **self.metrics.to_dict()}


@dataclass(frozen=True)
class PlanProjection:
    variant: str
    time_frame: str
    multiplier: int
    agents: List[AgentProjection] = field(default_factory=list)
    totals: DerivedPlanTotals = field(default_factory=DerivedPlanTotals)
    targets: Optional[SalesTargets] = None

    def to_dict(self) -> dict:
        return {
            "variant": self.variant,
            "timeFrame": self.time_frame,
            "multiplier": self.multiplier,
            "agents": [row.to_dict() for row in self.agents],
            "totals": self.totals.to_dict(),
            "targets": self.targets.to_dict() if self.targets else None,
        }


def derive_plan(plan: BusinessPlan) -> PlanProjection:
    variant = get_variant(plan.variant)
    multiplier = variant.multiplier(plan.aggregate.time_frame)
    rows = [
        AgentProjection(agent.name, derive_agent_metrics(agent, plan.aggregate, multiplier))
        for agent in plan.agents
    ]
    totals = derive_totals(
        (row.metrics for row in rows),
        additional_expenses_total(plan.aggregate, multiplier),
    )
    return PlanProjection(
        variant=variant.name,
        time_frame=plan.aggregate.time_frame,
        multiplier=multiplier,
        agents=rows,
        totals=totals,
        targets=derive_sales_targets(plan.targets) if plan.targets else None,
    )
