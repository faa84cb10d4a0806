"""Visualization utilities for the Finance Tracker."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from . import utils

EXPENSE_COLORS = ["#FF6B35", "#F7931E", "#FDC830", "#E74C3C", "#FF8C42", "#C0392B", "#D35400", "#E67E22"]
INCOME_COLORS = ["#2ECC71", "#27AE60", "#16A085", "#1ABC9C", "#3498DB", "#2980B9", "#00D9FF", "#52B788"]

EXPENSE_TREND_COLOR = "#FF6B35"
INCOME_TREND_COLOR = "#2ECC71"


def palette_for(txn_type: str) -> list[str]:
    return INCOME_COLORS if txn_type == "income" else EXPENSE_COLORS


def trend_color_for(txn_type: str) -> str:
    return INCOME_TREND_COLOR if txn_type == "income" else EXPENSE_TREND_COLOR


def legend_entries(breakdown: Sequence[Mapping[str, object]], txn_type: str, limit: int = 4) -> list[tuple[str, str]]:
    """Return ``(category, colour)`` pairs for the largest ``limit`` categories."""

    colors = palette_for(txn_type)
    return [
        (str(entry["category"]), colors[index % len(colors)])
        for index, entry in enumerate(breakdown[:limit])
    ]


def _empty_figure(message: str) -> go.Figure:
    fig = go.Figure()
    fig.add_annotation(
        text=message,
        showarrow=False,
        x=0.5,
        y=0.5,
        xref="paper",
        yref="paper",
        font=dict(size=14, color="#9CA3AF"),
    )
    fig.update_layout(margin=dict(l=0, r=0, t=20, b=20))
    return fig


def plot_category_donut(
    breakdown: Iterable[Mapping[str, object]],
    txn_type: str,
    *,
    total: float | None = None,
    currency_symbol: str = "₹",
) -> go.Figure:
    """Donut of category totals with a compact overall total in the hole."""

    data = list(breakdown)
    if not data:
        noun = "income" if txn_type == "income" else "expense"
        return _empty_figure(f"No {noun} data available")

    df = pd.DataFrame(data)
    colors = palette_for(txn_type)
    fig = px.pie(
        df,
        names="category",
        values="total",
        hole=0.62,
        color_discrete_sequence=colors,
    )
    fig.update_traces(
        sort=False,
        textinfo="none",
        hovertemplate=f"%{{label}}<br>{currency_symbol}%{{value:,.0f}}<extra></extra>",
        marker=dict(line=dict(color="#111827", width=2)),
    )

    centre_total = float(df["total"].sum()) if total is None else total
    fig.add_annotation(
        text=f"All<br><b>{utils.format_compact_amount(centre_total, currency_symbol)}</b>",
        showarrow=False,
        x=0.5,
        y=0.5,
        xref="paper",
        yref="paper",
        font=dict(size=16),
    )
    fig.update_layout(showlegend=False, margin=dict(l=0, r=0, t=10, b=10), height=300)
    return fig


def plot_trend_bar(points: Iterable[Mapping[str, object]], txn_type: str, *, currency_symbol: str = "₹") -> go.Figure:
    """Bar chart of daily totals in chronological order."""

    data = list(points)
    if not data:
        return _empty_figure("No trend data available")

    df = pd.DataFrame(data)
    df["compact"] = df["amount"].apply(lambda value: utils.format_compact_amount(float(value), currency_symbol))

    fig = go.Figure(
        go.Bar(
            x=df["label"],
            y=df["amount"],
            marker_color=trend_color_for(txn_type),
            customdata=df["compact"],
            hovertemplate="%{x}<br>%{customdata}<extra></extra>",
        )
    )
    fig.update_xaxes(type="category", showline=False, tickfont=dict(size=12, color="#9CA3AF"))
    fig.update_yaxes(visible=False)
    fig.update_layout(margin=dict(l=0, r=0, t=10, b=0), height=150, bargap=0.25)
    return fig
