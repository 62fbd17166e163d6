from __future__ import annotations

import logging
import math
from typing import Iterable, List, Optional

from .models import PaymentPlanResult, PhasedInstallment, ScheduleItem
from .schedule import MONTHS_IN_QUARTER, QUARTERS_IN_YEAR, quarterly_sequence, reconcile
from .templates import PLAN_TEMPLATES, PlanTemplate
from .utils import round_half_up


logger = logging.getLogger(__name__)

MONTHS_IN_YEAR = 12


def _coerce_price(price: Optional[float]) -> Optional[float]:
    if price is None:
        return None
    try:
        value = float(price)
    except (TypeError, ValueError):
        return None
    if math.isnan(value) or math.isinf(value) or value <= 0:
        return None
    # Whole prices stay integers so every schedule amount is a whole unit
    return int(value) if value.is_integer() else value


def net_price(template: PlanTemplate, price: float) -> float:
    """Amount owed under a plan.

    Discounted prices are rounded to the nearest unit; an undiscounted plan
    owes the list price untouched.
    """
    if template.discount_percentage:
        return round_half_up(price * template.net_rate)
    return price


def _slice(base: float, percentage: float) -> int:
    return math.floor(base * (percentage / 100))


def _cash_plan(template: PlanTemplate, price: float) -> PaymentPlanResult:
    net = net_price(template, price)
    return PaymentPlanResult(
        id=template.id,
        name=template.name,
        description=template.description,
        original_price=price,
        discount_percentage=template.discount_percentage,
        discount_amount=price * (template.discount_percentage / 100),
        net_price=net,
        installments_years=0,
        total_installment_amount=0,
        monthly_installment=0,
        quarterly_installment=0,
        schedule=[ScheduleItem(name="Cash Settlement", percentage=100, amount=net, timing=0)],
    )


def build_plan(template: PlanTemplate, price: float) -> PaymentPlanResult:
    """Build one plan from its template for a validated positive price."""
    if template.is_cash:
        return _cash_plan(template, price)

    net = net_price(template, price)

    down_payment = _slice(net, template.down_payment_percentage)
    schedule: List[ScheduleItem] = [
        ScheduleItem(
            name="Down Payment",
            percentage=template.down_payment_percentage,
            amount=down_payment,
            timing=0,
        )
    ]
    for n, lump in enumerate(template.lump_sums, start=1):
        schedule.append(
            ScheduleItem(
                name=f"Annual Payment {n}",
                percentage=lump.percentage,
                amount=_slice(net, lump.percentage),
                timing=lump.month,
            )
        )

    # Fixed-share phases first, then the remainder phase absorbs the rest
    phase_amounts = [
        _slice(net, phase.percentage) if phase.percentage is not None else 0
        for phase in template.phases
    ]
    remainder = net - sum(item.amount for item in schedule) - sum(phase_amounts)
    for i, phase in enumerate(template.phases):
        if phase.percentage is None:
            phase_amounts[i] = remainder
            break

    start_month = template.first_installment_month
    start_index = 1
    for phase, amount in zip(template.phases, phase_amounts):
        installments = quarterly_sequence(amount, phase.years, net, start_month, start_index)
        if installments:
            start_month = installments[-1].timing + MONTHS_IN_QUARTER
            start_index += len(installments)
        schedule.extend(installments)

    # Stable: lump sums stay ahead of installments due the same month
    schedule.sort(key=lambda item: item.timing)
    schedule = reconcile(schedule, net, net)

    first = template.phases[0]
    phased: Optional[List[PhasedInstallment]] = None
    if len(template.phases) > 1:
        phased = [
            PhasedInstallment(
                label=phase.label,
                monthly=amount / (phase.years * MONTHS_IN_YEAR),
                quarterly=amount / (phase.years * QUARTERS_IN_YEAR),
                duration_years=phase.years,
            )
            for phase, amount in zip(template.phases, phase_amounts)
        ]

    return PaymentPlanResult(
        id=template.id,
        name=template.name,
        description=template.description,
        original_price=price,
        discount_percentage=template.discount_percentage,
        discount_amount=price * (template.discount_percentage / 100),
        net_price=net,
        installments_years=sum(phase.years for phase in template.phases),
        total_installment_amount=sum(phase_amounts),
        monthly_installment=phase_amounts[0] / (first.years * MONTHS_IN_YEAR),
        quarterly_installment=phase_amounts[0] / (first.years * QUARTERS_IN_YEAR),
        schedule=schedule,
        phased_installments=phased,
    )


def compute_plans(
    price: Optional[float], templates: Iterable[PlanTemplate] = PLAN_TEMPLATES
) -> List[PaymentPlanResult]:
    """Compute every payment plan for a unit price.

    A missing, NaN, zero or negative price yields an empty list: the price is
    not ready yet, callers gate plan displays and exports on a non-empty result.
    """
    value = _coerce_price(price)
    if value is None:
        logger.debug("Price %r is not ready, no plans computed", price)
        return []
    plans = [build_plan(template, value) for template in templates]
    logger.debug("Computed %d plans for price %s", len(plans), value)
    return plans
