from __future__ import annotations

import logging
import os
import sys
from typing import List

import pandas as pd
import streamlit as st

# Ensure package import works on Streamlit Cloud when CWD != repo root
_THIS_DIR = os.path.dirname(__file__)
_REPO_ROOT = os.path.abspath(os.path.join(_THIS_DIR, "..", ".."))
if _REPO_ROOT not in sys.path:
    sys.path.insert(0, _REPO_ROOT)

from unit_payment_plans.core import plots
from unit_payment_plans.core.models import PaymentPlanResult, UnitInfo
from unit_payment_plans.core.plans import compute_plans
from unit_payment_plans.core.report import QuoteBranding, build_quote_pdf, quote_filename
from unit_payment_plans.core.tables import (
    comparison_frame,
    group_schedule,
    main_steps,
    rates_rows,
    schedule_frame,
    select_plans,
)
from unit_payment_plans.core.utils import format_currency, parse_price, timing_label
from config import CURRENCY, DEFAULT_PRICE, DEVELOPER, FILE_PREFIX, FOOTER_LINES, PROJECT, TAGLINE


logger = logging.getLogger(__name__)

st.set_page_config(page_title=f"{PROJECT} payment plans", layout="wide")

BRANDING = QuoteBranding(
    developer=DEVELOPER,
    project=PROJECT,
    tagline=TAGLINE,
    footer_lines=FOOTER_LINES,
    currency=CURRENCY,
    file_prefix=FILE_PREFIX,
)


def money(value: float) -> str:
    return format_currency(value, CURRENCY)


def sidebar_inputs() -> UnitInfo:
    st.sidebar.header("Unit details")
    default = f"{DEFAULT_PRICE:,.0f}" if DEFAULT_PRICE > 0 else ""
    raw_price = st.sidebar.text_input(f"Total unit price ({CURRENCY}) *", value=default, placeholder="Enter unit value")
    try:
        price = parse_price(raw_price)
    except ValueError as exc:
        st.sidebar.error(str(exc))
        price = 0.0

    c1, c2 = st.sidebar.columns(2)
    unit_type = c1.selectbox("Unit type", ["Typical", "Ground + Garden"])
    rooms = c2.selectbox("Rooms", ["1 Bedroom", "2 Bedrooms", "3 Bedrooms"])
    building = c1.text_input("Building", placeholder="e.g. A1")
    floor = c2.text_input("Floor level", placeholder="e.g. 2nd")
    bua = c1.number_input("BUA (sqm)", min_value=0.0, value=0.0, step=1.0)
    garden_roof_area = c2.number_input("Garden/Roof (sqm)", min_value=0.0, value=0.0, step=1.0)

    st.sidebar.caption("Quarterly collection cycle is the default standard for all plans.")

    return UnitInfo(
        total_price=price,
        unit_type=unit_type,
        rooms=rooms,
        floor=floor,
        building=building,
        bua=bua,
        garden_roof_area=garden_roof_area,
    )


def style_with_commas(df: pd.DataFrame):
    num_cols = df.select_dtypes(include=["number"]).columns
    if len(num_cols) == 0:
        return df
    return df.style.format({col: "{:,.0f}" for col in num_cols}, na_rep="N/A")


def render_card(plan: PaymentPlanResult) -> bool:
    """Draw one plan card; returns whether the plan is selected for comparison/export."""
    with st.container(border=True):
        selected = st.checkbox("Select", key=f"select-{plan.id}")
        st.caption(f"{plan.installments_years} Years" if plan.installments_years > 0 else "Cash")
        st.markdown(f"#### {plan.name}")
        if plan.description:
            st.caption(plan.description)
        st.metric("Net contract price", money(plan.net_price))
        if plan.discount_percentage > 0:
            st.markdown(f":green[-{plan.discount_percentage:g}% discount ({money(plan.discount_amount)})]")

        if not plan.is_cash:
            st.markdown("**Schedule breakdown**")
            rates = rates_rows(plan)
            cols = st.columns(2)
            for i, (label, value) in enumerate(rates):
                cols[i % 2].metric(label, money(value))

        st.markdown("**Payment steps**")
        for item in main_steps(plan):
            st.markdown(
                f"{item.name} · {item.percentage:g}% · {timing_label(item.timing)} · **{money(item.amount)}**"
            )
        if not plan.is_cash:
            st.caption(f"+ {plan.installments_years * 4} quarterly installments (full breakdown in the PDF)")
    return selected


def render_cards(plans: List[PaymentPlanResult]) -> List[str]:
    selected: List[str] = []
    cols = st.columns(2)
    for i, plan in enumerate(plans):
        with cols[i % 2]:
            if render_card(plan):
                selected.append(plan.id)
    return selected


def render_comparison(plans: List[PaymentPlanResult]):
    st.subheader("Compare rates")
    if not plans:
        st.info("Select plans to compare")
        return
    st.dataframe(style_with_commas(comparison_frame(plans)), use_container_width=True)
    st.plotly_chart(plots.net_price_bars(plans, CURRENCY), use_container_width=True)
    st.plotly_chart(plots.cumulative_paid_curve(plans, CURRENCY), use_container_width=True)


def render_schedules(plans: List[PaymentPlanResult]):
    st.subheader("Full schedules")
    grouped_view = st.toggle("Group payments due the same month", value=True)
    for plan in plans:
        with st.expander(plan.name):
            df = group_schedule(plan) if grouped_view else schedule_frame(plan)
            st.dataframe(style_with_commas(df), use_container_width=True)
            st.download_button(
                f"Export CSV {plan.id}",
                data=schedule_frame(plan).to_csv(index=False).encode("utf-8"),
                file_name=f"{plan.id}_schedule.csv",
                mime="text/csv",
                key=f"csv-{plan.id}",
            )


def render_report(unit: UnitInfo, plans: List[PaymentPlanResult], selected: List[str]):
    st.subheader("Quote")
    if st.button("Generate quote", disabled=not unit.is_complete):
        pdf = build_quote_pdf(unit, plans, selected, branding=BRANDING)
        logger.info("Quote generated for price %s", unit.total_price)
        st.download_button(
            "Download PDF",
            data=pdf,
            file_name=quote_filename(unit, BRANDING),
            mime="application/pdf",
        )


def main():
    st.title(f"{DEVELOPER} · {PROJECT}")
    st.caption(TAGLINE)
    unit = sidebar_inputs()
    plans = compute_plans(unit.total_price)

    if not plans:
        st.info("Enter the total unit price to see the payment plans.")
        return

    tabs = st.tabs(["Payment plans", "Comparison", "Schedules"])
    with tabs[0]:
        selected = render_cards(plans)
    with tabs[1]:
        render_comparison(select_plans(plans, selected))
    with tabs[2]:
        render_schedules(plans)

    st.divider()
    render_report(unit, plans, selected)


if __name__ == "__main__":
    main()
