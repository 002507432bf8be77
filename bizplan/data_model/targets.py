from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Optional

from .base import optional_number


@dataclass
class SalesTargetInput:
    """Raw inputs of an agent's sales-activity funnel."""

    gross_commission_target: Optional[float] = None
    avg_commission_price_per_property: Optional[float] = None
    franchise_fee: Optional[float] = None
    agent_percentage: Optional[float] = None
    business_percentage: Optional[float] = None
    listing_to_written_ratio: Optional[float] = None
    appraisal_to_listing_ratio: Optional[float] = None
    fall_over_rate: Optional[float] = None
    connects_for_appraisal: Optional[float] = None
    calls_for_connect: Optional[float] = None
    no_of_working_days_per_year: Optional[float] = None
    calls_per_person: Optional[float] = None
    salary_per_hour: Optional[float] = None
    marketing_expenses: Optional[float] = None
    cost_per_third_party_call: Optional[float] = None
    how_many_calls: Optional[float] = None
    how_many_appraisals: Optional[float] = None

    @classmethod
    def from_dict(cls, row: dict) -> "SalesTargetInput":
        return cls(**{f.name: optional_number(row.get(f.name)) for f in fields(cls)})

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class SalesTargets:
    commission_average: Optional[int] = None
    agent_commission: Optional[int] = None
    business_commission: Optional[int] = None
    avg_commission_per_sale: Optional[int] = None
    settled_sales_target: Optional[int] = None
    listings_target: Optional[int] = None
    appraisals_target: Optional[int] = None
    connects_for_appraisals: Optional[int] = None
    phone_calls_to_achieve_appraisals: Optional[int] = None
    calls_per_day: Optional[int] = None
    no_of_people_required: Optional[int] = None
    salary_per_day: Optional[int] = None
    persons_salary: Optional[int] = None
    total_third_party_calls: Optional[int] = None
    total_cost_appraisals: Optional[int] = None
    net_commission: Optional[int] = None

    def to_dict(self) -> dict:
        return asdict(self)
