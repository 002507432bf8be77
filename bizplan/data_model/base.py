from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, List

import pandas as pd

PERCENTAGE_RANGE = (0.0, 100.0)


def optional_number(value: Any) -> float | None:
    """Coerce a raw payload value to float, keeping blanks as None.

    Non-numeric values raise ValueError/TypeError; callers at the input
    boundary turn that into a 400.
    """
    if value is None:
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    if isinstance(value, bool):
        raise TypeError("Boolean is not a numeric plan value.")
    number = float(value)
    if not math.isfinite(number):
        raise ValueError(f"Non-finite plan value: {value!r}")
    return number


@dataclass(frozen=True)
class FieldSpec:
    """Schema descriptor for one plan input or derived metric."""

    field: str
    label: str
    kind: str = "amount"  # text | amount | percentage | select
    scope: str = "agent"  # agent | aggregate | derived
    default: Any = None
    options: List[str] | None = None
    min_value: float | None = None
    max_value: float | None = None
    step: float | None = None
    read_only: bool = False
    help: str | None = None

    @property
    def is_numeric(self) -> bool:
        return self.kind in {"amount", "percentage"}

    @property
    def is_percentage(self) -> bool:
        return self.kind == "percentage"


def amount_field(name: str, label: str, scope: str = "agent", help: str | None = None) -> FieldSpec:
    return FieldSpec(name, label, kind="amount", scope=scope, min_value=0.0, step=100.0, help=help)


def percentage_field(
    name: str,
    label: str,
    scope: str = "agent",
    default: float | None = None,
    help: str | None = None,
) -> FieldSpec:
    low, high = PERCENTAGE_RANGE
    return FieldSpec(
        name,
        label,
        kind="percentage",
        scope=scope,
        default=default,
        min_value=low,
        max_value=high,
        step=1.0,
        help=help,
    )


def derived_field(name: str, label: str) -> FieldSpec:
    return FieldSpec(name, label, kind="amount", scope="derived", read_only=True)


@dataclass
class TableModel:
    """Container for a table schema plus default rows."""

    name: str
    columns: List[FieldSpec]
    default_rows: List[dict[str, Any]] = field(default_factory=list)

    def field_names(self) -> List[str]:
        return [col.field for col in self.columns]

    def get(self, name: str) -> FieldSpec | None:
        for col in self.columns:
            if col.field == name:
                return col
        return None

    def create_default_df(self) -> pd.DataFrame:
        if self.default_rows:
            return pd.DataFrame(self.default_rows, columns=self.field_names())
        seed = {col.field: col.default for col in self.columns}
        return pd.DataFrame([seed], columns=self.field_names())
