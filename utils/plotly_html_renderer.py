"""
📊 Plotly HTML Renderer

Turns a Plotly figure into an HTML fragment for `ui.HTML`, loading
Plotly.js from the CDN.

Usage:
    from utils.plotly_html_renderer import plotly_figure_to_html

    return ui.HTML(plotly_figure_to_html(fig, div_id="linear_plot"))
"""

from __future__ import annotations

import html
import re
import uuid

import plotly.graph_objects as go

from logger import get_logger

logger = get_logger(__name__)


def plotly_figure_to_html(
    fig: go.Figure | None = None,
    div_id: str | None = None,
    include_plotlyjs: str | bool = "cdn",
    height: int | None = None,
    responsive: bool = True,
) -> str:
    """
    Render a figure to an embeddable HTML string.

    Parameters:
        fig: Figure to render. None yields a "waiting" placeholder.
        div_id: Container id; sanitized to letters, digits, '_' and '-',
            or generated when omitted.
        include_plotlyjs: 'cdn', True (inline) or False (already loaded).
        height: Fixed height in pixels; keeps the figure's own when None.
        responsive: Enable autosize.

    Returns:
        HTML fragment, or a styled placeholder when the figure is missing,
        of the wrong type, or fails to render.
    """
    if fig is None:
        return _create_placeholder_html("⏳ Waiting for data...")

    if not isinstance(fig, go.Figure):
        logger.warning("Expected go.Figure, got %s", type(fig).__name__)
        return _create_placeholder_html("⚠️ Invalid figure type")

    div_id = f"plotly-{uuid.uuid4().hex[:12]}" if div_id is None else _sanitize_div_id(div_id)

    try:
        # copy so the caller's figure is left untouched
        fig = go.Figure(fig)
        if responsive:
            fig.update_layout(autosize=True)
        if height is not None:
            fig.update_layout(height=height)

        return fig.to_html(
            full_html=False,
            include_plotlyjs=include_plotlyjs,
            div_id=div_id,
            config={"responsive": responsive, "displayModeBar": True, "displaylogo": False},
        )
    except ValueError:
        logger.exception("Error rendering figure %s", div_id)
        return _create_placeholder_html("Error rendering plot")


def _sanitize_div_id(div_id: str) -> str:
    """Strip characters not allowed in an HTML id and make it start with a letter."""
    sanitized = re.sub(r"[^a-zA-Z0-9_-]", "", str(div_id))
    if not sanitized:
        return f"plot-{uuid.uuid4().hex[:8]}"
    if not sanitized[0].isalpha():
        sanitized = "plot-" + sanitized
    return sanitized


def _create_placeholder_html(message: str) -> str:
    return (
        '<div class="plot-placeholder" style="color: #999; text-align: center; '
        "padding: 40px 20px; border-radius: 8px; border: 1px dashed #dee2e6; "
        f'font-size: 14px;">{html.escape(str(message))}</div>'
    )
