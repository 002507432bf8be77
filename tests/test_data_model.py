import math

import pytest

from bizplan.data_model import (
    FIELD_REGISTRY,
    AgentFinancialInput,
    BusinessPlan,
    PlanAggregateInput,
    optional_number,
)


def test_optional_number_boundary():
    assert optional_number(None) is None
    assert optional_number("  ") is None
    assert optional_number("12.5") == 12.5
    assert optional_number(-3) == -3.0
    with pytest.raises(ValueError):
        optional_number("ten")
    with pytest.raises(ValueError):
        optional_number(math.nan)
    with pytest.raises(TypeError):
        optional_number(True)


def test_schema_declares_ranges_and_read_only_fields():
    assert FIELD_REGISTRY["business_commission_percentage"].max_value == 100.0
    assert FIELD_REGISTRY["agent_expenses_percentage"].scope == "aggregate"
    assert FIELD_REGISTRY["rent"].min_value == 0.0
    assert FIELD_REGISTRY["rent"].max_value is None
    assert FIELD_REGISTRY["agent_earnings"].read_only is True
    assert FIELD_REGISTRY["name"].read_only is False


def test_plan_document_from_payload():
    plan = BusinessPlan.from_dict(
        {
            "variant": "Agent",
            "aggregate": {"time_frame": "Weekly", "rent": "250"},
            "agents": [{"name": " Jo ", "commission_amount": "1000"}],
            "targets": {"gross_commission_target": 50000},
        },
        owner_id="owner-9",
    )

    assert plan.variant == "agent"
    assert plan.aggregate.time_frame == "weekly"
    assert plan.aggregate.rent == 250.0
    assert plan.aggregate.business_expenses_percentage == 0.0
    assert plan.agents == [AgentFinancialInput(name="Jo", commission_amount=1000.0)]
    assert plan.targets.gross_commission_target == 50000.0
    assert BusinessPlan.from_dict(plan.to_dict()) == plan


def test_plan_document_rejects_duplicates_and_blank_names():
    with pytest.raises(ValueError):
        BusinessPlan.from_dict({"agents": [{"name": "A"}, {"name": "A"}]}, owner_id="o")
    with pytest.raises(ValueError):
        BusinessPlan.from_dict({"agents": [{"name": ""}]}, owner_id="o")
    with pytest.raises(ValueError):
        BusinessPlan.from_dict({"variant": "team"}, owner_id="o")
    with pytest.raises(ValueError):
        BusinessPlan.from_dict({})


def test_aggregate_defaults():
    aggregate = PlanAggregateInput.from_dict(None)

    assert aggregate.time_frame == "yearly"
    assert aggregate.rent is None


def test_null_agent_name_is_rejected():
    with pytest.raises(ValueError):
        AgentFinancialInput.from_dict({"name": None, "commission_amount": 1000})
    with pytest.raises(ValueError):
        BusinessPlan.from_dict({"agents": [{"name": None}]}, owner_id="o")
