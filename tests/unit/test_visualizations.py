"""
Unit Tests for chart builders (visualizations.py) and the HTML renderer
"""

import numpy as np
import pandas as pd
import plotly.graph_objects as go
import pytest

from tabs._common import get_color_palette
from utils.linear_lib import FitResult, group_means
from utils.logistic_lib import decision_boundary
from utils.plotly_html_renderer import plotly_figure_to_html
from utils.survival_lib import curve_to_frame, kaplan_meier
from utils.visualizations import (
    create_fit_plot,
    create_group_means_plot,
    create_km_plot,
    create_logistic_plot,
    create_poisson_plot,
)

pytestmark = pytest.mark.unit

COLORS = get_color_palette()


class TestFitPlot:
    def test_traces_and_ranges(self):
        fig = create_fit_plot([10, 20, 30], [5, 10, 15], FitResult(0.5, 0.0), "Age", "BP")
        assert isinstance(fig, go.Figure)
        assert [t.name for t in fig.data] == ["Patients", "Best-fit line"]
        line = fig.data[1]
        np.testing.assert_allclose(line.x, [9.0, 33.0])
        np.testing.assert_allclose(line.y, [4.5, 16.5])
        assert line.line.color == COLORS["chart_fit"]
        assert tuple(fig.layout.xaxis.range) == pytest.approx((9.0, 33.0))
        assert fig.layout.xaxis.title.text == "Age"


class TestGroupMeansPlot:
    def test_one_line_per_level(self):
        df = pd.DataFrame({"is_married": [0, 1, 0, 1], "bmi": [22.0, 25.0, 24.0, 29.0]})
        means = group_means(df, "is_married", "bmi")
        fig = create_group_means_plot(
            df, "is_married", "bmi", means, "Marital Status", "BMI",
            level_names={0: "Single", 1: "Married"},
        )
        names = [t.name for t in fig.data]
        assert names == ["Patients", "Mean (Single)", "Mean (Married)"]
        assert list(fig.data[2].y) == [27.0, 27.0]
        assert list(fig.layout.xaxis.ticktext) == ["Single", "Married"]


class TestLogisticPlot:
    @pytest.fixture
    def df(self):
        return pd.DataFrame(
            {
                "bmi": [20.0, 30.0, 40.0, 25.0],
                "glucose": [80.0, 150.0, 190.0, 120.0],
                "outcome": [0, 1, 1, 0],
            }
        )

    def test_boundary_drawn_when_visible(self, df):
        boundary = decision_boundary("diabetes_risk", 18.0, 44.0)
        fig = create_logistic_plot(df, "bmi", "glucose", "outcome", boundary, "BMI", "Glucose")
        names = [t.name for t in fig.data]
        assert names == ["Negative", "Positive", "Decision boundary (p = 0.5)"]
        assert len(fig.data[1].x) == 2
        y_lo, y_hi = fig.layout.yaxis.range
        assert (np.asarray(fig.data[2].y) >= y_lo).all()
        assert (np.asarray(fig.data[2].y) <= y_hi).all()

    def test_annotation_when_boundary_out_of_range(self):
        df = pd.DataFrame({"age": [40.0, 60.0], "cholesterol": [200.0, 250.0], "outcome": [0, 0]})
        boundary = decision_boundary("heart_disease", 36.0, 66.0)
        fig = create_logistic_plot(df, "age", "cholesterol", "outcome", boundary, "Age", "Chol")
        assert len(fig.data) == 2
        assert "outside the plotted range" in fig.layout.annotations[0].text


class TestKmPlot:
    def test_step_curve_starts_at_one(self):
        data = pd.DataFrame({"t": [1.0, 2.0, 3.0], "c": [False, True, False]})
        curve = curve_to_frame(kaplan_meier(zip(data["t"], data["c"])))
        fig = create_km_plot(curve, "Time", "Survival")
        survival, censored = fig.data
        assert survival.line.shape == "hv"
        assert survival.x[0] == 0.0 and survival.y[0] == 1.0
        assert list(censored.x) == [2.0]
        assert censored.marker.color == COLORS["chart_censored"]

    def test_empty_curve(self):
        curve = curve_to_frame(kaplan_meier([]))
        fig = create_km_plot(curve, "Time", "Survival")
        assert list(fig.data[0].x) == [0.0]
        assert tuple(fig.layout.xaxis.range) == (0, 1.0)


class TestPoissonPlot:
    def test_observed_and_expected(self):
        expected = (np.array([0.0, 50.0]), np.array([0.0, 1.25]))
        fig = create_poisson_plot([20, 60, 90], [1, 2, 3], expected, "Beds", "Infections")
        assert [t.name for t in fig.data] == ["Observed", "Expected"]
        assert fig.data[1].line.dash == "dash"
        assert fig.data[0].marker.color == COLORS["chart_counts"]


class TestRenderer:
    def test_none_gives_placeholder(self):
        assert "Waiting for data" in plotly_figure_to_html(None)

    def test_wrong_type_gives_placeholder(self):
        assert "Invalid figure type" in plotly_figure_to_html({"data": []})

    def test_div_id_sanitized(self):
        html = plotly_figure_to_html(go.Figure(), div_id="1 bad<id>", include_plotlyjs=False)
        assert 'id="plot-1badid"' in html

    def test_does_not_mutate_input(self):
        fig = go.Figure()
        plotly_figure_to_html(fig, height=300, include_plotlyjs=False)
        assert fig.layout.height is None
