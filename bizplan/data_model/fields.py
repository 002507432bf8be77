from __future__ import annotations

from typing import Dict, List

from .base import FieldSpec, TableModel, amount_field, derived_field, percentage_field

TIME_FRAME_LABELS = {
    "daily": "Daily",
    "weekly": "Weekly",
    "monthly": "Monthly",
    "yearly": "Yearly",
}


def _agent_defaults() -> List[dict[str, float | str | None]]:
    return [
        {
            "name": "Agent 1",
            "commission_amount": None,
            "franchise_amount": None,
            "marketing_expenses": None,
            "super_amount": None,
            "business_commission_percentage": None,
            "agent_commission_percentage": None,
            "franchise_fee_percentage": None,
        }
    ]


class AgentTableModel(TableModel):
    """Per-agent commission inputs, one row per agent."""

    def __init__(self) -> None:
        columns = [
            FieldSpec("name", "Agent", kind="text", default="", help="Unique within the plan"),
            amount_field("commission_amount", "Commission ($)"),
            amount_field(
                "franchise_amount",
                "Franchise Amount ($)",
                help="Used only when no franchise fee percentage is set",
            ),
            amount_field("marketing_expenses", "Marketing Expenses ($)"),
            amount_field("super_amount", "Super ($)"),
            percentage_field("business_commission_percentage", "Business Commission (%)"),
            percentage_field("agent_commission_percentage", "Agent Commission (%)"),
            percentage_field("franchise_fee_percentage", "Franchise Fee (%)"),
        ]
        super().__init__("agents", columns, _agent_defaults())


class AggregateTableModel(TableModel):
    """Plan-wide expense settings shared by every agent row."""

    def __init__(self) -> None:
        columns = [
            percentage_field(
                "business_expenses_percentage",
                "Business Expenses (%)",
                scope="aggregate",
                default=0.0,
                help="Share of each agent's marketing expenses paid by the business",
            ),
            percentage_field(
                "agent_expenses_percentage",
                "Agent Expenses (%)",
                scope="aggregate",
                default=0.0,
                help="Share of each agent's marketing expenses paid by the agent",
            ),
            amount_field("rent", "Rent ($)", scope="aggregate"),
            amount_field("staff_salary", "Staff Salary ($)", scope="aggregate"),
            amount_field("internet", "Internet ($)", scope="aggregate"),
            amount_field("fuel", "Fuel ($)", scope="aggregate"),
            amount_field("other_expenses", "Other Expenses ($)", scope="aggregate"),
            FieldSpec(
                "time_frame",
                "Time Frame",
                kind="select",
                scope="aggregate",
                default="yearly",
                options=list(TIME_FRAME_LABELS),
            ),
        ]
        super().__init__("aggregate", columns)


class DerivedMetricsModel(TableModel):
    """Read-only projection columns."""

    def __init__(self) -> None:
        columns = [
            FieldSpec("name", "Agent", kind="text", scope="derived", read_only=True),
            derived_field("franchise_fee_amount", "Franchise Fee ($)"),
            derived_field("net_commission", "Net Commission ($)"),
            derived_field("business_commission", "Business Commission ($)"),
            derived_field("agent_commission", "Agent Commission ($)"),
            derived_field("business_expenses", "Business Expenses ($)"),
            derived_field("agent_expenses", "Agent Expenses ($)"),
            derived_field("business_earnings", "Business Earnings ($)"),
            derived_field("agent_earnings", "Agent Earnings ($)"),
        ]
        super().__init__("derived", columns)


AGENT_MODEL = AgentTableModel()
AGGREGATE_MODEL = AggregateTableModel()
DERIVED_MODEL = DerivedMetricsModel()

COMMISSION_SPLIT_FIELDS = ("business_commission_percentage", "agent_commission_percentage")


def field_registry() -> Dict[str, FieldSpec]:
    """Every addressable field by name; agent/aggregate inputs win over derived labels."""
    registry: Dict[str, FieldSpec] = {}
    for model in (DERIVED_MODEL, AGGREGATE_MODEL, AGENT_MODEL):
        for col in model.columns:
            registry[col.field] = col
    return registry


FIELD_REGISTRY = field_registry()
