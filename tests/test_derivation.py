from decimal import Decimal

import pytest

from bizplan.data_model import (
    AgentFinancialInput,
    BusinessPlan,
    DerivedAgentMetrics,
    PlanAggregateInput,
)
from bizplan.engine.derivation import (
    additional_expenses_total,
    derive_agent_metrics,
    derive_plan,
    derive_totals,
)
from bizplan.engine.errors import UnsupportedTimeFrame
from bizplan.engine.rounding import round_half_up
from bizplan.engine.timeframes import ADMIN_PLAN, AGENT_PLAN


def _agent(**overrides):
    values = {
        "name": "Agent 1",
        "commission_amount": 10000.0,
        "franchise_fee_percentage": 10.0,
        "business_commission_percentage": 50.0,
        "agent_commission_percentage": 40.0,
    }
    values.update(overrides)
    return AgentFinancialInput(**values)


def test_worked_example_commission_split():
    metrics = derive_agent_metrics(_agent(), PlanAggregateInput(), 1)

    assert metrics.franchise_fee_amount == 1000
    assert metrics.net_commission == 9000
    assert metrics.business_commission == 4500
    assert metrics.agent_commission == 3600


def test_derivation_is_idempotent():
    agent = _agent(marketing_expenses=2000.0, super_amount=500.0)
    aggregate = PlanAggregateInput(business_expenses_percentage=60.0, agent_expenses_percentage=40.0, rent=100.0)

    first = derive_agent_metrics(agent, aggregate, 12)
    second = derive_agent_metrics(agent, aggregate, 12)

    assert first == second
    assert first.to_dict() == second.to_dict()


def test_missing_commission_propagates_none():
    agent = _agent(commission_amount=None, marketing_expenses=2000.0)
    aggregate = PlanAggregateInput(business_expenses_percentage=50.0, agent_expenses_percentage=50.0)

    metrics = derive_agent_metrics(agent, aggregate, 1)

    assert metrics.franchise_fee_amount is None
    assert metrics.net_commission is None
    assert metrics.business_commission is None
    assert metrics.agent_commission is None
    assert metrics.business_earnings is None
    assert metrics.agent_earnings is None
    # Expense shares only depend on marketing expenses.
    assert metrics.business_expenses == 1000
    assert metrics.agent_expenses == 1000


def test_empty_agent_yields_all_none():
    metrics = derive_agent_metrics(AgentFinancialInput(name="Blank"), PlanAggregateInput(), 1)

    assert metrics == DerivedAgentMetrics()


def test_earnings_chain_subtracts_pooled_expenses_per_agent():
    agent = _agent(marketing_expenses=2000.0, super_amount=500.0)
    aggregate = PlanAggregateInput(
        business_expenses_percentage=60.0,
        agent_expenses_percentage=40.0,
        rent=100.0,
        fuel=50.0,
    )

    metrics = derive_agent_metrics(agent, aggregate, 1)

    assert metrics.business_expenses == 1200
    assert metrics.agent_expenses == 800
    assert metrics.business_earnings == 4500 - 1200 - 500 - 150
    assert metrics.agent_earnings == 3600 - 800 + 500


def test_agent_earnings_zero_without_marketing_spend():
    agent = _agent(marketing_expenses=0.0, super_amount=500.0)
    aggregate = PlanAggregateInput(business_expenses_percentage=50.0, agent_expenses_percentage=50.0)

    metrics = derive_agent_metrics(agent, aggregate, 1)

    assert metrics.agent_expenses == 0
    assert metrics.agent_earnings == 0
    assert metrics.business_earnings == 4500 - 0 - 500


def test_agent_earnings_none_without_marketing_input():
    metrics = derive_agent_metrics(_agent(), PlanAggregateInput(), 1)

    assert metrics.agent_expenses is None
    assert metrics.agent_earnings is None
    assert metrics.business_earnings is None


def test_franchise_amount_used_when_percentage_missing():
    agent = _agent(franchise_fee_percentage=None, commission_amount=1000.0, franchise_amount=100.0)

    metrics = derive_agent_metrics(agent, PlanAggregateInput(), ADMIN_PLAN.multiplier("monthly"))

    assert metrics.franchise_fee_amount == 1200
    assert metrics.net_commission == 10800


def test_no_franchise_inputs_leaves_net_commission_unset():
    agent = _agent(franchise_fee_percentage=None)

    metrics = derive_agent_metrics(agent, PlanAggregateInput(), 1)

    assert metrics.franchise_fee_amount is None
    assert metrics.net_commission is None


@pytest.mark.parametrize("time_frame, expected", [("daily", 1000), ("weekly", 5000), ("monthly", 20000), ("yearly", 240000)])
def test_agent_plan_scaling(time_frame, expected):
    agent = _agent(commission_amount=1000.0, franchise_fee_percentage=0.0)

    metrics = derive_agent_metrics(agent, PlanAggregateInput(), AGENT_PLAN.multiplier(time_frame))

    assert metrics.net_commission == expected


def test_admin_and_agent_tables_are_distinct():
    assert ADMIN_PLAN.multiplier("weekly") == 52
    assert AGENT_PLAN.multiplier("weekly") == 5
    assert ADMIN_PLAN.time_frames == ["yearly", "monthly", "weekly"]
    with pytest.raises(UnsupportedTimeFrame):
        ADMIN_PLAN.multiplier("daily")


def test_rounding_is_half_up():
    agent = _agent(commission_amount=1001.0, franchise_fee_percentage=0.0,
                   business_commission_percentage=50.0, agent_commission_percentage=50.0)

    metrics = derive_agent_metrics(agent, PlanAggregateInput(), 1)

    assert metrics.business_commission == 501
    assert metrics.agent_commission == 501
    assert round_half_up(2.5) == 3
    assert round_half_up(-2.5) == -3


def test_additional_expenses_total_scales_and_ignores_unset():
    aggregate = PlanAggregateInput(rent=1000.0, staff_salary=2000.0, internet=None, fuel=50.0, other_expenses=None)

    assert additional_expenses_total(aggregate, 12) == 36600
    assert additional_expenses_total(PlanAggregateInput(), 52) == 0


def test_totals_sum_agents_and_treat_none_as_zero():
    rows = [
        DerivedAgentMetrics(business_commission=300, agent_earnings=None),
        DerivedAgentMetrics(business_commission=700, agent_earnings=50),
    ]

    totals = derive_totals(rows)

    assert totals.business_commission == 1000
    assert totals.agent_earnings == 50
    assert totals.net_commission == 0


def test_totals_of_empty_plan_are_zero():
    totals = derive_totals([])

    assert totals.business_commission == 0
    assert totals.business_commission is not None
    assert totals.additional_expenses_total == 0


def test_derive_plan_uses_variant_table():
    plan = BusinessPlan(
        owner_id="owner-1",
        variant="admin",
        aggregate=PlanAggregateInput(time_frame="monthly", rent=100.0),
        agents=[_agent(name="A"), _agent(name="B", business_commission_percentage=60.0)],
    )

    projection = derive_plan(plan)

    assert projection.multiplier == 12
    assert [row.name for row in projection.agents] == ["A", "B"]
    assert projection.agents[0].metrics.net_commission == 108000
    assert projection.totals.business_commission == 54000 + 64800
    assert projection.totals.additional_expenses_total == 1200
    assert projection.targets is None


def test_derive_plan_rejects_time_frame_outside_variant():
    plan = BusinessPlan(owner_id="owner-1", variant="admin", aggregate=PlanAggregateInput(time_frame="daily"))

    with pytest.raises(UnsupportedTimeFrame):
        derive_plan(plan)


@pytest.mark.parametrize("exponent", [28, 300])
def test_very_large_amounts_derive_without_raising(exponent):
    amount = float(10 ** exponent)
    multiplier = AGENT_PLAN.multiplier("yearly")
    agent = _agent(commission_amount=amount, marketing_expenses=amount, super_amount=amount)
    aggregate = PlanAggregateInput(business_expenses_percentage=50.0, agent_expenses_percentage=50.0, rent=amount)

    metrics = derive_agent_metrics(agent, aggregate, multiplier)

    assert metrics.net_commission == 216 * 10 ** exponent
    assert metrics.business_commission == 108 * 10 ** exponent
    assert metrics.business_earnings is not None
    assert metrics.agent_earnings is not None
    assert additional_expenses_total(aggregate, multiplier) == 240 * 10 ** exponent

    plan = BusinessPlan(
        owner_id="owner-1",
        variant="agent",
        aggregate=PlanAggregateInput(time_frame="yearly", rent=amount),
        agents=[agent],
    )
    projection = derive_plan(plan)

    assert projection.totals.net_commission == 216 * 10 ** exponent
    assert projection.totals.additional_expenses_total == 240 * 10 ** exponent


def test_rounding_ignores_context_precision():
    assert round_half_up(Decimal("2.4e29")) == 24 * 10 ** 28
    assert round_half_up(Decimal("1e300")) == 10 ** 300
