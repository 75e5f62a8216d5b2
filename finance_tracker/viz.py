"""Visualization utilities for Finance Tracker."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from . import compare


def _empty_figure(message: str) -> go.Figure:
    fig = go.Figure()
    fig.add_annotation(
        text=message,
        showarrow=False,
        x=0.5,
        y=0.5,
        xref="paper",
        yref="paper",
        font=dict(size=14, color="#6c757d"),
    )
    fig.update_layout(margin=dict(l=0, r=0, t=20, b=20))
    return fig


def plot_category_pie(distribution: Iterable[Mapping[str, object]]) -> go.Figure:
    """Expense split by category, coloured with each category's colour."""

    data = list(distribution)
    if not data:
        return _empty_figure("No expense data available.")

    df = pd.DataFrame(data)
    fig = go.Figure(
        go.Pie(
            labels=df["name"],
            values=df["total"],
            marker=dict(colors=df["color"].tolist()),
            textinfo="label+percent",
            sort=False,
        )
    )
    fig.update_layout(title="Expense distribution", margin=dict(l=0, r=0, t=40, b=0))
    return fig


def plot_monthly_category_bar(monthly: Iterable[Mapping[str, object]]) -> go.Figure:
    data = list(monthly)
    if not data:
        return _empty_figure("No expense data available.")

    df = pd.DataFrame(data)
    color_map = dict(zip(df["category"], df["color"]))
    fig = px.bar(
        df,
        x="month",
        y="total",
        color="category",
        color_discrete_map=color_map,
        title="Monthly expenses by category",
        labels={"month": "Month", "total": "Amount", "category": "Category"},
    )
    fig.update_layout(barmode="stack", margin=dict(l=0, r=0, t=40, b=0))
    return fig


def plot_expense_trend(trend: Iterable[Mapping[str, object]]) -> go.Figure:
    data = list(trend)
    if not data:
        return _empty_figure("No expense history available.")

    df = pd.DataFrame(data)
    fig = px.bar(
        df,
        x="month",
        y="total",
        title="Expense trend",
        labels={"month": "Month", "total": "Amount"},
        hover_data={"label": True},
    )
    fig.update_traces(marker_color="#ef4444")
    fig.update_layout(margin=dict(l=0, r=0, t=40, b=0))
    return fig


def plot_period_comparison(summary: compare.SummaryComparison) -> go.Figure:
    """Income and expense for the selected period next to the previous one."""

    metrics = ["income", "expense"]
    if not any(summary[m]["value"] or summary[m]["previous"] for m in metrics):
        return _empty_figure("No transactions in either period.")

    labels = [m.title() for m in metrics]
    fig = go.Figure()
    fig.add_bar(
        name="Previous period",
        x=labels,
        y=[summary[m]["previous"] for m in metrics],
        marker_color="#94a3b8",
    )
    fig.add_bar(
        name="Selected period",
        x=labels,
        y=[summary[m]["value"] for m in metrics],
        marker_color="#2563eb",
    )
    fig.update_layout(
        barmode="group",
        title="Period comparison",
        yaxis_title="Amount",
        margin=dict(l=0, r=0, t=45, b=0),
        legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1),
    )
    return fig
