from .base import FieldSpec, TableModel, optional_number
from .fields import (
    AGENT_MODEL,
    AGGREGATE_MODEL,
    COMMISSION_SPLIT_FIELDS,
    DERIVED_MODEL,
    FIELD_REGISTRY,
    TIME_FRAME_LABELS,
    AgentTableModel,
    AggregateTableModel,
    DerivedMetricsModel,
)
from .plan import (
    AMOUNT_FIELDS,
    EXPENSE_FIELDS,
    METRIC_FIELDS,
    AgentFinancialInput,
    BusinessPlan,
    DerivedAgentMetrics,
    DerivedPlanTotals,
    PlanAggregateInput,
)
from .targets import SalesTargetInput, SalesTargets

__all__ = [
    "AGENT_MODEL",
    "AGGREGATE_MODEL",
    "AMOUNT_FIELDS",
    "COMMISSION_SPLIT_FIELDS",
    "DERIVED_MODEL",
    "EXPENSE_FIELDS",
    "FIELD_REGISTRY",
    "METRIC_FIELDS",
    "TIME_FRAME_LABELS",
    "AgentFinancialInput",
    "AgentTableModel",
    "AggregateTableModel",
    "BusinessPlan",
    "DerivedAgentMetrics",
    "DerivedMetricsModel",
    "DerivedPlanTotals",
    "FieldSpec",
    "PlanAggregateInput",
    "SalesTargetInput",
    "SalesTargets",
    "TableModel",
    "optional_number",
]
