from bizplan.data_model import SalesTargetInput, SalesTargets
from bizplan.engine.targets import derive_sales_targets


def _inputs(**overrides):
    values = {
        "gross_commission_target": 216000,
        "avg_commission_price_per_property": 20000,
        "franchise_fee": 10,
        "agent_percentage": 60,
        "business_percentage": 40,
        "listing_to_written_ratio": 50,
        "appraisal_to_listing_ratio": 50,
        "fall_over_rate": 10,
        "connects_for_appraisal": 2,
        "calls_for_connect": 10,
        "no_of_working_days_per_year": 240,
        "calls_per_person": 2,
        "salary_per_hour": 25,
        "marketing_expenses": 20000,
        "cost_per_third_party_call": 2,
        "how_many_calls": 100,
        "how_many_appraisals": 3,
    }
    values.update(overrides)
    return SalesTargetInput.from_dict(values)


def test_full_funnel_from_commission_target_to_calls():
    targets = derive_sales_targets(_inputs())

    assert targets.commission_average == 18000
    assert targets.agent_commission == 10800
    assert targets.business_commission == 7200
    assert targets.avg_commission_per_sale == 10800
    assert targets.settled_sales_target == 20
    assert targets.listings_target == 22
    assert targets.appraisals_target == 48
    assert targets.connects_for_appraisals == 96
    assert targets.phone_calls_to_achieve_appraisals == 960
    assert targets.calls_per_day == 4
    assert targets.no_of_people_required == 2
    assert targets.salary_per_day == 200
    assert targets.persons_salary == 96000
    assert targets.net_commission == 100000
    assert targets.total_third_party_calls == 200
    assert targets.total_cost_appraisals == 9


def test_split_must_total_exactly_one_hundred():
    targets = derive_sales_targets(_inputs(agent_percentage=50, business_percentage=40))

    assert targets.commission_average == 18000
    assert targets.agent_commission is None
    assert targets.settled_sales_target is None
    assert targets.phone_calls_to_achieve_appraisals is None
    assert targets.net_commission is None


def test_zero_fall_over_rate_uses_unit_factor():
    targets = derive_sales_targets(_inputs(fall_over_rate=0))

    assert targets.listings_target == 20
    assert targets.appraisals_target == 40


def test_people_required_rounds_up():
    targets = derive_sales_targets(_inputs(calls_per_person=3))

    # 960 calls over 240 days at 3 calls each needs 1.33 people.
    assert targets.no_of_people_required == 2


def test_empty_inputs_yield_empty_targets():
    assert derive_sales_targets(SalesTargetInput()) == SalesTargets()
