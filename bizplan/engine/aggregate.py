import pandas as pd

from ..data_model import DERIVED_MODEL, EXPENSE_FIELDS, AGGREGATE_MODEL, BusinessPlan
from .derivation import PlanProjection, scaled_amount

TOTAL_LABEL = "Total"
REPORT_COLUMNS = [col.field for col in DERIVED_MODEL.columns]


def projection_frame(projection: PlanProjection, labels: bool = False) -> pd.DataFrame:
    """One row per agent plus a trailing total row.

    Missing per-agent values stay as ``None``; the total row never has gaps.
    """
    rows = [row.to_dict() for row in projection.agents]
    totals = projection.totals.to_dict()
    rows.append({"name": TOTAL_LABEL, **{key: totals[key] for key in REPORT_COLUMNS if key != "name"}})
    df = pd.DataFrame(rows, columns=REPORT_COLUMNS, dtype=object)
    df = df.where(pd.notna(df), None)
    if labels:
        df = df.rename(columns={col.field: col.label for col in DERIVED_MODEL.columns})
    return df


def expenses_frame(plan: BusinessPlan, projection: PlanProjection) -> pd.DataFrame:
    """Pooled plan expenses, scaled to the plan's time frame."""
    records = []
    for name in EXPENSE_FIELDS:
        records.append(
            {
                "Field": AGGREGATE_MODEL.get(name).label,
                "Value": scaled_amount(getattr(plan.aggregate, name), projection.multiplier),
            }
        )
    records.append({"Field": TOTAL_LABEL, "Value": projection.totals.additional_expenses_total})
    return pd.DataFrame(records, columns=["Field", "Value"], dtype=object)
