from __future__ import annotations

import math
from dataclasses import replace
from typing import Final, List, Sequence

from .models import ScheduleItem
from .utils import round_half_up


QUARTERS_IN_YEAR: Final[int] = 4
MONTHS_IN_QUARTER: Final[int] = 3
PERCENT_DECIMALS: Final[int] = 3


def _percentage(amount: float, reference_price: float) -> float:
    # A tiny price can round a discounted net down to zero
    if reference_price == 0:
        return 0.0
    return round(amount / reference_price * 100, PERCENT_DECIMALS)


def quarterly_sequence(
    total_amount: float,
    years: float,
    reference_price: float,
    start_month: int = 3,
    start_index: int = 1,
) -> List[ScheduleItem]:
    """Split an amount into equal quarterly installments.

    Parameters
    ----------
    total_amount : float
        Amount to spread over the tenor.
    years : float
        Tenor length; the number of quarters is ``round(years * 4)``.
    reference_price : float
        Denominator of each installment's percentage. Usually the plan's
        net price so percentages line up with the rest of the schedule.
    start_month : int
        Month offset of the first installment.
    start_index : int
        Number used in the first installment's name, so a later phase can
        continue the numbering of an earlier one.

    Returns
    -------
    list of ScheduleItem
        Empty when the tenor has no quarters. Amounts are floored to whole
        units, so the items may sum to less than ``total_amount``; see
        :func:`reconcile`.
    """
    quarters = round_half_up(years * QUARTERS_IN_YEAR)
    if quarters <= 0:
        return []

    amount_per_quarter = math.floor(total_amount / quarters)
    percentage = _percentage(amount_per_quarter, reference_price)
    return [
        ScheduleItem(
            name=f"Quarterly Installment {start_index + k}",
            percentage=percentage,
            amount=amount_per_quarter,
            timing=start_month + k * MONTHS_IN_QUARTER,
        )
        for k in range(quarters)
    ]


def reconcile(
    schedule: Sequence[ScheduleItem], target: float, reference_price: float
) -> List[ScheduleItem]:
    """Make the schedule sum to ``target`` exactly.

    The whole variance (usually a few units left over by floor division, but
    possibly negative) goes to the last item, whose percentage is recomputed.
    Earlier items keep their contractual amounts. Returns a new list.
    """
    items = list(schedule)
    if not items:
        return items

    variance = target - sum(item.amount for item in items)
    last = items[-1]
    amount = last.amount + variance
    items[-1] = replace(last, amount=amount, percentage=_percentage(amount, reference_price))
    return items
