from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class UnitInfo:
    # Only the price drives the plans; the rest is printed on the quote
    total_price: float = 0.0
    unit_type: str = "Typical"  # "Typical" or "Ground + Garden"
    rooms: str = "1 Bedroom"
    floor: str = ""
    building: str = ""
    bua: float = 0.0  # sqm
    garden_roof_area: float = 0.0  # sqm

    @property
    def is_complete(self) -> bool:
        return self.total_price > 0


@dataclass(frozen=True)
class ScheduleItem:
    name: str
    percentage: float
    amount: float  # whole units for whole prices; a fractional price leaves its fraction on the last item
    timing: int  # months after contract signature


@dataclass(frozen=True)
class PhasedInstallment:
    label: str
    monthly: float
    quarterly: float
    duration_years: int


@dataclass(frozen=True)
class PaymentPlanResult:
    id: str
    name: str
    description: str

    # Pricing
    original_price: float
    discount_percentage: float
    discount_amount: float
    net_price: float

    # Tenor (reference rates are informational only)
    installments_years: int
    total_installment_amount: float
    monthly_installment: float
    quarterly_installment: float

    schedule: List[ScheduleItem]
    phased_installments: Optional[List[PhasedInstallment]] = None

    @property
    def is_cash(self) -> bool:
        return self.installments_years == 0

    @property
    def total_scheduled(self) -> float:
        return sum(item.amount for item in self.schedule)

    @property
    def down_payment(self) -> float:
        for item in self.schedule:
            if "down" in item.name.lower():
                return item.amount
        return 0
