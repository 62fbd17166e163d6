import math

import pytest

from unit_payment_plans.core.plans import compute_plans


def _by_id(plans):
    return {plan.id: plan for plan in plans}


@pytest.mark.parametrize("price", [1, 12, 999_999, 1_000_000, 1_234_567, 3_333_333, 7_654_321.5])
def test_every_schedule_sums_to_net_price(price):
    plans = compute_plans(price)
    assert [p.id for p in plans] == [f"plan-{i}" for i in range(1, 7)]
    for plan in plans:
        assert plan.schedule
        assert math.isclose(plan.total_scheduled, plan.net_price, abs_tol=1e-6)


@pytest.mark.parametrize("price", [1, 12, 1_234_567, 9_876_543])
def test_amounts_and_percentages_non_negative(price):
    for plan in compute_plans(price):
        for item in plan.schedule:
            assert item.amount >= 0
            assert item.percentage >= 0


@pytest.mark.parametrize("price", [12, 1_000_000, 1_234_567, 2_000_000, 7_654_321.5])
def test_timings_are_non_decreasing(price):
    for plan in compute_plans(price):
        timings = [item.timing for item in plan.schedule]
        assert timings == sorted(timings)


def test_same_month_items_keep_milestones_first():
    plans = _by_id(compute_plans(1_000_000))
    names_at_zero = [i.name for i in plans["plan-1"].schedule if i.timing == 0]
    assert names_at_zero == ["Down Payment", "Quarterly Installment 1"]
    names_at_twelve = [i.name for i in plans["plan-3"].schedule if i.timing == 12]
    assert names_at_twelve == ["Annual Payment 1", "Quarterly Installment 4"]
    names_at_48 = [i.name for i in plans["plan-5"].schedule if i.timing == 48]
    assert names_at_48 == ["Annual Payment 4", "Quarterly Installment 16"]


@pytest.mark.parametrize("price", [0.3, 0.4, 0.5])
def test_tiny_price_with_zero_net_target(price):
    plans = _by_id(compute_plans(price))
    assert plans["plan-2"].net_price == 0
    for plan in plans.values():
        assert math.isclose(plan.total_scheduled, plan.net_price, abs_tol=1e-9)
        for item in plan.schedule:
            assert item.amount >= 0
            assert item.percentage >= 0


def test_invalid_prices_give_no_plans():
    assert compute_plans(0) == []
    assert compute_plans(-100) == []
    assert compute_plans(None) == []
    assert compute_plans(float("nan")) == []


def test_cash_plan():
    plan = _by_id(compute_plans(1_000_000))["plan-6"]
    assert plan.net_price == 700_000
    assert len(plan.schedule) == 1
    item = plan.schedule[0]
    assert item.name == "Cash Settlement"
    assert item.amount == 700_000
    assert item.percentage == 100
    assert item.timing == 0
    assert plan.monthly_installment == 0
    assert plan.quarterly_installment == 0
    assert plan.installments_years == 0
    assert plan.phased_installments is None
    assert math.isclose(plan.discount_amount, 300_000)


def test_plan_1_no_down_payment_quarters_from_contract():
    plan = _by_id(compute_plans(1_000_000))["plan-1"]
    assert plan.net_price == 875_000
    assert plan.schedule[0].name == "Down Payment"
    assert plan.schedule[0].amount == 0
    quarters = plan.schedule[1:]
    assert len(quarters) == 20
    assert quarters[0].timing == 0
    assert all(q.amount == 43_750 for q in quarters)
    assert math.isclose(quarters[0].percentage, 5.0)
    assert math.isclose(plan.quarterly_installment, 43_750)
    assert math.isclose(plan.monthly_installment, 875_000 / 60)


def test_plan_2_down_payment_on_net_price():
    plan = _by_id(compute_plans(1_000_000))["plan-2"]
    assert plan.net_price == 900_000
    assert plan.schedule[0].amount == 135_000
    assert plan.schedule[0].percentage == 15
    assert plan.total_installment_amount == 765_000
    assert len(plan.schedule) == 1 + 24
    assert plan.schedule[1].timing == 3


def test_plan_3_annual_payments():
    plan = _by_id(compute_plans(1_000_000))["plan-3"]
    assert plan.net_price == 1_000_000
    assert plan.discount_amount == 0
    milestones = [i for i in plan.schedule if not i.name.startswith("Quarterly")]
    assert [(i.name, i.amount, i.timing) for i in milestones] == [
        ("Down Payment", 80_000, 0),
        ("Annual Payment 1", 80_000, 12),
        ("Annual Payment 2", 80_000, 24),
    ]
    assert plan.schedule[1].name == "Quarterly Installment 1"
    assert plan.schedule[-1].name == "Quarterly Installment 32"
    assert plan.total_installment_amount == 760_000
    assert len(plan.schedule) == 3 + 32


def test_plan_4_phases():
    plan = _by_id(compute_plans(2_000_000))["plan-4"]
    assert plan.installments_years == 10
    assert len(plan.phased_installments) == 2
    first, second = plan.phased_installments
    assert first.label == "Years 1-4"
    assert first.duration_years == 4
    assert math.isclose(first.quarterly, 62_500)
    assert second.label == "Years 5-10"
    assert math.isclose(second.quarterly, 800_000 / 24)

    quarters = [i for i in plan.schedule if i.name.startswith("Quarterly")]
    assert len(quarters) == 40
    assert quarters[15].timing == 48
    assert quarters[16].name == "Quarterly Installment 17"
    assert quarters[16].timing == 51
    assert quarters[16].amount == 33_333
    assert quarters[-1].amount == 800_000 - 33_333 * 23
    assert math.isclose(plan.quarterly_installment, first.quarterly)
    assert plan.total_installment_amount == 1_800_000


def test_plan_5_four_annual_payments():
    plan = _by_id(compute_plans(1_000_000))["plan-5"]
    annual = [i for i in plan.schedule if i.name.startswith("Annual")]
    assert [i.timing for i in annual] == [12, 24, 36, 48]
    assert all(i.amount == 70_000 and i.percentage == 7 for i in annual)
    assert plan.schedule[0].amount == 120_000
    assert len(plan.schedule) == 5 + 48
    assert plan.phased_installments is None


def test_discounted_nets_round_half_up_undiscounted_keep_price():
    # 12 * 0.875 = 10.5 rounds up to 11, while plans 3-5 owe the price as is
    plans = _by_id(compute_plans(12))
    assert plans["plan-1"].net_price == 11
    assert plans["plan-3"].net_price == 12
    assert plans["plan-3"].schedule[0].amount == 0  # floor(12 * 0.08)


def test_down_payment_percentage_is_nominal():
    plans = _by_id(compute_plans(1_234_567))
    assert plans["plan-2"].schedule[0].percentage == 15
    assert plans["plan-4"].schedule[0].percentage == 10


def test_compute_plans_is_deterministic():
    assert compute_plans(1_234_567) == compute_plans(1_234_567)


def test_fractional_price_lands_on_last_installment():
    plans = _by_id(compute_plans(1_000.5))
    schedule = plans["plan-3"].schedule
    assert all(float(item.amount).is_integer() for item in schedule[:-1])
    assert schedule[-1].amount == 24.5
    assert all(isinstance(item.amount, int) for item in plans["plan-2"].schedule)
