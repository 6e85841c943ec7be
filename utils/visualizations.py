"""
📊 Chart builders for the regression explorers.

Each function takes already-computed data (samples, fitted line, survival
curve, expected counts) and returns a Plotly figure. No estimation happens
here.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
import pandas as pd
import plotly.graph_objects as go

from config import CONFIG
from tabs._common import get_color_palette
from utils.linear_lib import FitResult, GroupMean

COLORS = get_color_palette()


def _base_layout(fig: go.Figure, title: str, x_label: str, y_label: str) -> go.Figure:
    fig.update_layout(
        title=title,
        xaxis_title=x_label,
        yaxis_title=y_label,
        template="plotly_white",
        height=CONFIG.get("ui.plot_height", 450),
        legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1),
        margin=dict(l=60, r=20, t=60, b=50),
    )
    return fig


def _padded_range(values: np.ndarray) -> tuple[float, float]:
    """Axis range from 0.9 * min to 1.1 * max, as in the printed examples."""
    return float(values.min()) * 0.9, float(values.max()) * 1.1


def create_fit_plot(
    xs: Sequence[float],
    ys: Sequence[float],
    fit: FitResult,
    x_label: str,
    y_label: str,
    title: str = "",
) -> go.Figure:
    """Scatter of the samples with the least-squares line across the x range."""
    x = np.asarray(xs, dtype=float)
    y = np.asarray(ys, dtype=float)
    x_lo, x_hi = _padded_range(x)

    fig = go.Figure()
    fig.add_trace(
        go.Scatter(
            x=x,
            y=y,
            mode="markers",
            name="Patients",
            marker=dict(color=COLORS["chart_points"], size=CONFIG.get("ui.point_size", 9)),
            hovertemplate=f"{x_label}: %{{x:.1f}}<br>{y_label}: %{{y:.1f}}<extra></extra>",
        )
    )
    line_x = np.array([x_lo, x_hi])
    fig.add_trace(
        go.Scatter(
            x=line_x,
            y=fit.predict(line_x),
            mode="lines",
            name="Best-fit line",
            line=dict(color=COLORS["chart_fit"], width=2),
            hoverinfo="skip",
        )
    )
    fig.update_xaxes(range=[x_lo, x_hi])
    fig.update_yaxes(range=list(_padded_range(y)))
    return _base_layout(fig, title, x_label, y_label)


def create_group_means_plot(
    df: pd.DataFrame,
    group_col: str,
    outcome_col: str,
    means: Sequence[GroupMean],
    x_label: str,
    y_label: str,
    level_names: dict[int, str] | None = None,
    title: str = "",
) -> go.Figure:
    """Scatter of a binary factor with one horizontal mean line per level."""
    level_names = level_names or {0: "No", 1: "Yes"}
    y = df[outcome_col].to_numpy(dtype=float)

    fig = go.Figure()
    fig.add_trace(
        go.Scatter(
            x=df[group_col],
            y=y,
            mode="markers",
            name="Patients",
            marker=dict(color=COLORS["chart_points"], size=CONFIG.get("ui.point_size", 9), opacity=0.7),
        )
    )
    for group in means:
        level = group["level"]
        fig.add_trace(
            go.Scatter(
                x=[level - 0.25, level + 0.25],
                y=[group["mean"], group["mean"]],
                mode="lines",
                name=f"Mean ({level_names.get(int(level), level)})",
                line=dict(color=COLORS["chart_fit"], width=3),
            )
        )
    fig.update_xaxes(
        range=[-0.5, 1.5],
        tickmode="array",
        tickvals=list(level_names),
        ticktext=list(level_names.values()),
    )
    fig.update_yaxes(range=list(_padded_range(y)))
    return _base_layout(fig, title, x_label, y_label)


def create_logistic_plot(
    df: pd.DataFrame,
    x_col: str,
    y_col: str,
    outcome_col: str,
    boundary: tuple[np.ndarray, np.ndarray],
    x_label: str,
    y_label: str,
    title: str = "",
) -> go.Figure:
    """
    Two-predictor scatter coloured by outcome with the p = 0.5 boundary.

    Boundary points outside the plotted y range are dropped; if none remain
    an annotation says so.
    """
    x = df[x_col].to_numpy(dtype=float)
    y = df[y_col].to_numpy(dtype=float)
    outcome = df[outcome_col].astype(int).to_numpy()
    x_lo, x_hi = _padded_range(x)
    y_lo, y_hi = _padded_range(y)

    fig = go.Figure()
    for value, name, color in (
        (0, "Negative", COLORS["chart_negative"]),
        (1, "Positive", COLORS["chart_positive"]),
    ):
        mask = outcome == value
        fig.add_trace(
            go.Scatter(
                x=x[mask],
                y=y[mask],
                mode="markers",
                name=name,
                marker=dict(color=color, size=CONFIG.get("ui.point_size", 9), opacity=0.7),
            )
        )

    bx, by = boundary
    visible = (by >= y_lo) & (by <= y_hi)
    if visible.any():
        fig.add_trace(
            go.Scatter(
                x=bx[visible],
                y=by[visible],
                mode="lines",
                name="Decision boundary (p = 0.5)",
                line=dict(color=COLORS["chart_boundary"], width=2, dash="dash"),
            )
        )
    else:
        fig.add_annotation(
            text="Decision boundary (p = 0.5) lies outside the plotted range",
            xref="paper",
            yref="paper",
            x=0.5,
            y=1.0,
            showarrow=False,
            font=dict(color=COLORS["text_secondary"]),
        )

    fig.update_xaxes(range=[x_lo, x_hi])
    fig.update_yaxes(range=[y_lo, y_hi])
    return _base_layout(fig, title, x_label, y_label)


def create_km_plot(curve: pd.DataFrame, x_label: str, y_label: str, title: str = "") -> go.Figure:
    """Kaplan-Meier step curve starting at (0, 1) with censored records marked."""
    times = np.concatenate([[0.0], curve["time"].to_numpy(dtype=float)])
    probs = np.concatenate([[1.0], curve["probability"].to_numpy(dtype=float)])

    fig = go.Figure()
    fig.add_trace(
        go.Scatter(
            x=times,
            y=probs,
            mode="lines",
            line_shape="hv",
            name="Survival curve",
            line=dict(color=COLORS["chart_survival"], width=2),
            hovertemplate="Time: %{x:.1f}<br>Surv: %{y:.3f}<extra></extra>",
        )
    )
    censored = curve[curve["censored"].astype(bool)]
    fig.add_trace(
        go.Scatter(
            x=censored["time"],
            y=censored["probability"],
            mode="markers",
            name="Censored",
            marker=dict(color=COLORS["chart_censored"], size=7),
        )
    )
    fig.update_xaxes(range=[0, max(float(times.max()), 1.0)])
    fig.update_yaxes(range=[0, 1.05])
    return _base_layout(fig, title, x_label, y_label)


def create_poisson_plot(
    xs: Sequence[float],
    counts: Sequence[float],
    expected: tuple[np.ndarray, np.ndarray],
    x_label: str,
    y_label: str,
    title: str = "",
) -> go.Figure:
    """Observed counts with the dashed expected-count line."""
    x = np.asarray(xs, dtype=float)
    y = np.asarray(counts, dtype=float)

    fig = go.Figure()
    fig.add_trace(
        go.Scatter(
            x=x,
            y=y,
            mode="markers",
            name="Observed",
            marker=dict(color=COLORS["chart_counts"], size=CONFIG.get("ui.point_size", 9), opacity=0.6),
        )
    )
    ex, ey = expected
    fig.add_trace(
        go.Scatter(
            x=ex,
            y=ey,
            mode="lines",
            name="Expected",
            line=dict(color=COLORS["chart_fit"], width=2, dash="dash"),
        )
    )
    fig.update_xaxes(range=[0, float(x.max()) * 1.1 if x.size else 1.0])
    fig.update_yaxes(range=[0, max(float(y.max()) if y.size else 0.0, 1.0) * 1.1])
    return _base_layout(fig, title, x_label, y_label)
