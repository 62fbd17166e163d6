from .models import UnitInfo, ScheduleItem, PhasedInstallment, PaymentPlanResult
from .schedule import quarterly_sequence, reconcile
from .templates import PLAN_TEMPLATES, PlanTemplate, LumpSum, TenorPhase
from .plans import compute_plans, build_plan, net_price
from .tables import group_schedule, schedule_frame, comparison_frame, main_steps, rates_rows, select_plans
from .utils import format_currency, parse_price, timing_label, due_date, round_half_up

__all__ = [
	"UnitInfo",
	"ScheduleItem",
	"PhasedInstallment",
	"PaymentPlanResult",
	"quarterly_sequence",
	"reconcile",
	"PLAN_TEMPLATES",
	"PlanTemplate",
	"LumpSum",
	"TenorPhase",
	"compute_plans",
	"build_plan",
	"net_price",
	"group_schedule",
	"schedule_frame",
	"comparison_frame",
	"main_steps",
	"rates_rows",
	"select_plans",
	"format_currency",
	"parse_price",
	"timing_label",
	"due_date",
	"round_half_up",
]
