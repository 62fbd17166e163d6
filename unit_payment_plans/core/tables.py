from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Tuple

import pandas as pd

from .models import PaymentPlanResult, ScheduleItem
from .utils import timing_label


SCHEDULE_COLUMNS = ["name", "percentage", "amount", "timing", "timing_label"]


def select_plans(
    plans: Sequence[PaymentPlanResult], selected_ids: Iterable[str] = ()
) -> List[PaymentPlanResult]:
    """Plans picked by the user, or all of them when nothing is picked."""
    selected = set(selected_ids)
    if not selected:
        return list(plans)
    return [plan for plan in plans if plan.id in selected]


def schedule_frame(plan: PaymentPlanResult) -> pd.DataFrame:
    """Full line-by-line schedule of a plan."""
    if not plan.schedule:
        return pd.DataFrame(columns=SCHEDULE_COLUMNS, data=[])
    rows = [
        {
            "name": item.name,
            "percentage": item.percentage,
            "amount": item.amount,
            "timing": item.timing,
            "timing_label": timing_label(item.timing),
        }
        for item in plan.schedule
    ]
    return pd.DataFrame(rows, columns=SCHEDULE_COLUMNS)


def group_schedule(plan: PaymentPlanResult) -> pd.DataFrame:
    """Collapse items falling due in the same month into one row.

    Names are joined with " + ", percentages and amounts are summed. Used by
    the cards and the quote; the plan itself is left untouched.

    Returns a DataFrame with columns: timing, name, percentage, amount
    """
    df = schedule_frame(plan)
    if df.empty:
        return pd.DataFrame(columns=["timing", "name", "percentage", "amount"], data=[])
    grouped = (
        df.groupby("timing", as_index=False, sort=True)
        .agg(name=("name", lambda names: " + ".join(names)), percentage=("percentage", "sum"), amount=("amount", "sum"))
        .sort_values("timing")
        .reset_index(drop=True)
    )
    return grouped


def main_steps(plan: PaymentPlanResult) -> List[ScheduleItem]:
    """Milestone payments shown on a plan card (everything but quarterly installments)."""
    return [
        item
        for item in plan.schedule
        if "installment" not in item.name.lower() or "down" in item.name.lower()
    ]


def rates_rows(plan: PaymentPlanResult) -> List[Tuple[str, float]]:
    """Periodic installment rates for the summary block of a plan."""
    if plan.is_cash:
        return []
    if plan.phased_installments:
        rows: List[Tuple[str, float]] = []
        for phase in plan.phased_installments:
            rows.append((f"{phase.label} - Monthly", phase.monthly))
            rows.append((f"{phase.label} - Quarterly", phase.quarterly))
        return rows
    return [
        ("Monthly Reference Rate", plan.monthly_installment),
        ("Quarterly Base Installment", plan.quarterly_installment),
    ]


def comparison_frame(plans: Sequence[PaymentPlanResult]) -> pd.DataFrame:
    """Side-by-side attributes, one column per plan.

    Installment rates are None for cash plans.
    """
    data = {}
    for plan in plans:
        rate_q: Optional[float] = None if plan.is_cash else plan.quarterly_installment
        rate_m: Optional[float] = None if plan.is_cash else plan.monthly_installment
        data[plan.name] = [
            plan.net_price,
            plan.down_payment,
            plan.discount_percentage,
            rate_q,
            rate_m,
        ]
    index = ["Net Contract", "Down Payment", "Discount %", "Quarterly Rate", "Monthly Ref"]
    return pd.DataFrame(data, index=index)


def cumulative_payments(plan: PaymentPlanResult) -> pd.DataFrame:
    """Cumulative amount paid at each due month.

    Returns a DataFrame with columns: timing, amount, cumulative
    """
    grouped = group_schedule(plan)
    if grouped.empty:
        return pd.DataFrame(columns=["timing", "amount", "cumulative"], data=[])
    out = grouped[["timing", "amount"]].copy()
    out["cumulative"] = out["amount"].cumsum()
    return out
