from unit_payment_plans.core import plots
from unit_payment_plans.core.plans import compute_plans


def test_cumulative_paid_curve_one_trace_per_plan():
    plans = compute_plans(1_500_000)
    fig = plots.cumulative_paid_curve(plans)
    assert len(fig.data) == len(plans)
    assert fig.data[0].name == plans[0].name


def test_net_price_bars():
    plans = compute_plans(1_000_000)
    fig = plots.net_price_bars(plans)
    assert list(fig.data[0].y) == [plan.net_price for plan in plans]
