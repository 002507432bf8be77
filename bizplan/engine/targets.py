from __future__ import annotations

import math
from typing import Optional

from ..data_model import SalesTargetInput, SalesTargets
from .rounding import round_half_up as _round

HOURS_PER_WORKING_DAY = 8


def _positive(value: Optional[float]) -> bool:
    return value is not None and value > 0


def _fall_over_factor(rate: Optional[float]) -> float:
    return 1 + rate / 100 if _positive(rate) else 1.0


def derive_sales_targets(inputs: SalesTargetInput) -> SalesTargets:
    """Work an annual commission target back to daily phone-call activity.

    commission -> settled sales -> listings -> appraisals -> connects -> calls,
    then the staffing and cost lines hanging off the call volume.
    """
    commission_average = None
    if inputs.avg_commission_price_per_property is not None and inputs.franchise_fee is not None:
        commission_average = _round(inputs.avg_commission_price_per_property * (1 - inputs.franchise_fee / 100))

    agent_commission = business_commission = None
    if (
        commission_average is not None
        and inputs.agent_percentage is not None
        and inputs.business_percentage is not None
        and inputs.agent_percentage + inputs.business_percentage == 100
    ):
        agent_commission = _round(commission_average * inputs.agent_percentage / 100)
        business_commission = _round(commission_average * inputs.business_percentage / 100)

    avg_commission_per_sale = agent_commission

    settled_sales_target = None
    if inputs.gross_commission_target is not None and _positive(avg_commission_per_sale):
        settled_sales_target = _round(inputs.gross_commission_target / avg_commission_per_sale)

    fall_over = _fall_over_factor(inputs.fall_over_rate)

    listings_target = None
    if settled_sales_target is not None and _positive(inputs.listing_to_written_ratio):
        listings_target = _round(settled_sales_target * fall_over)

    appraisals_target = None
    if listings_target is not None and _positive(inputs.appraisal_to_listing_ratio):
        appraisals_target = _round(listings_target / (inputs.appraisal_to_listing_ratio / 100) * fall_over)

    connects_for_appraisals = None
    if appraisals_target is not None and inputs.connects_for_appraisal is not None:
        connects_for_appraisals = _round(appraisals_target * inputs.connects_for_appraisal)

    phone_calls = None
    if connects_for_appraisals is not None and inputs.calls_for_connect is not None:
        phone_calls = _round(connects_for_appraisals * inputs.calls_for_connect)

    working_days = inputs.no_of_working_days_per_year
    calls_per_day = None
    if phone_calls is not None and _positive(working_days):
        calls_per_day = _round(phone_calls / working_days)

    no_of_people_required = None
    if phone_calls is not None and _positive(inputs.calls_per_person) and _positive(working_days):
        no_of_people_required = math.ceil(phone_calls / (inputs.calls_per_person * working_days))

    salary_per_day = None
    if inputs.salary_per_hour is not None:
        salary_per_day = _round(inputs.salary_per_hour * HOURS_PER_WORKING_DAY)

    persons_salary = None
    if salary_per_day is not None and no_of_people_required is not None and working_days is not None:
        persons_salary = _round(salary_per_day * no_of_people_required * working_days)

    total_third_party_calls = None
    if inputs.cost_per_third_party_call is not None and inputs.how_many_calls is not None:
        total_third_party_calls = _round(inputs.cost_per_third_party_call * inputs.how_many_calls)

    total_cost_appraisals = None
    if _positive(inputs.how_many_appraisals):
        # No per-appraisal cost input exists; the count is squared as stored plans expect.
        total_cost_appraisals = _round(inputs.how_many_appraisals * inputs.how_many_appraisals)

    net_commission = None
    if (
        inputs.gross_commission_target is not None
        and inputs.marketing_expenses is not None
        and persons_salary is not None
    ):
        net_commission = _round(inputs.gross_commission_target - inputs.marketing_expenses - persons_salary)

    return SalesTargets(
        commission_average=commission_average,
        agent_commission=agent_commission,
        business_commission=business_commission,
        avg_commission_per_sale=avg_commission_per_sale,
        settled_sales_target=settled_sales_target,
        listings_target=listings_target,
        appraisals_target=appraisals_target,
        connects_for_appraisals=connects_for_appraisals,
        phone_calls_to_achieve_appraisals=phone_calls,
        calls_per_day=calls_per_day,
        no_of_people_required=no_of_people_required,
        salary_per_day=salary_per_day,
        persons_salary=persons_salary,
        total_third_party_calls=total_third_party_calls,
        total_cost_appraisals=total_cost_appraisals,
        net_commission=net_commission,
    )
