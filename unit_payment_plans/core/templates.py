"""Declarative rule set for the six payment plans offered on a unit.

Each plan is described by data only; :func:`unit_payment_plans.core.plans.build_plan`
turns a template and a price into a full schedule. All percentages are
expressed against the plan's net price (the discounted price, or the list
price itself when there is no discount).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class LumpSum:
    percentage: float
    month: int


@dataclass(frozen=True)
class TenorPhase:
    years: int
    # None: the phase finances whatever is left after every other slice
    percentage: Optional[float] = None
    label: str = ""


@dataclass(frozen=True)
class PlanTemplate:
    id: str
    name: str
    description: str
    discount_percentage: float = 0.0
    down_payment_percentage: float = 0.0
    lump_sums: Tuple[LumpSum, ...] = ()
    phases: Tuple[TenorPhase, ...] = ()
    first_installment_month: int = 3

    @property
    def is_cash(self) -> bool:
        return not self.phases

    @property
    def net_rate(self) -> float:
        return (100 - self.discount_percentage) / 100


PLAN_TEMPLATES: Tuple[PlanTemplate, ...] = (
    PlanTemplate(
        id="plan-1",
        name="0% Downpayment - 5 Years - 12.5% Disc",
        description="No down payment, quarterly installments from contract over 5 years",
        discount_percentage=12.5,
        phases=(TenorPhase(years=5),),
        first_installment_month=0,
    ),
    PlanTemplate(
        id="plan-2",
        name="15% Downpayment - 6 Years - 10% Disc",
        description="15% at contract, balance quarterly over 6 years",
        discount_percentage=10,
        down_payment_percentage=15,
        phases=(TenorPhase(years=6),),
    ),
    PlanTemplate(
        id="plan-3",
        name="8% Downpayment - 8 Years",
        description="8% at contract plus two 8% annual payments, balance quarterly over 8 years",
        down_payment_percentage=8,
        lump_sums=(LumpSum(8, 12), LumpSum(8, 24)),
        phases=(TenorPhase(years=8),),
    ),
    PlanTemplate(
        id="plan-4",
        name="10% Downpayment - 10 Years",
        description="10% at contract, 50% over the first 4 years, balance over the next 6",
        down_payment_percentage=10,
        phases=(
            TenorPhase(years=4, percentage=50, label="Years 1-4"),
            TenorPhase(years=6, label="Years 5-10"),
        ),
    ),
    PlanTemplate(
        id="plan-5",
        name="12% Downpayment - 12 Years",
        description="12% at contract plus four 7% annual payments, balance quarterly over 12 years",
        down_payment_percentage=12,
        lump_sums=(LumpSum(7, 12), LumpSum(7, 24), LumpSum(7, 36), LumpSum(7, 48)),
        phases=(TenorPhase(years=12),),
    ),
    PlanTemplate(
        id="plan-6",
        name="CASH - 30% Disc",
        description="Full settlement at contract",
        discount_percentage=30,
    ),
)
