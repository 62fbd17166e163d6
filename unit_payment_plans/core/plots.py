from __future__ import annotations

from typing import Sequence

import plotly.graph_objects as go

from .models import PaymentPlanResult
from .tables import cumulative_payments


def cumulative_paid_curve(plans: Sequence[PaymentPlanResult], currency: str = "EGP") -> go.Figure:
    """Cumulative amount paid vs months after contract, one line per plan."""
    fig = go.Figure()
    for plan in plans:
        df = cumulative_payments(plan)
        fig.add_trace(
            go.Scatter(
                x=df["timing"].tolist(),
                y=df["cumulative"].tolist(),
                mode="lines+markers",
                line_shape="hv",
                name=plan.name,
            )
        )
    fig.update_layout(title="Cumulative payments", xaxis_title="Month", yaxis_title=currency)
    return fig


def net_price_bars(plans: Sequence[PaymentPlanResult], currency: str = "EGP") -> go.Figure:
    fig = go.Figure()
    fig.add_bar(
        x=[plan.name for plan in plans],
        y=[plan.net_price for plan in plans],
        name="Net contract price",
    )
    fig.update_layout(title="Net contract price", yaxis_title=currency)
    return fig
