"""
🎯 Logistic Risk Library

Known-truth risk functions behind the logistic explorer's synthetic data,
and the p = 0.5 decision boundary drawn over the scatter. The boundary is the
line where the linear predictor is zero, solved in closed form.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypedDict

import numpy as np
import pandas as pd
from scipy.special import expit

from config import CONFIG


@dataclass(frozen=True)
class LinearPredictor:
    """z = x / x_divisor + y / y_divisor - offset"""

    x_divisor: float
    y_divisor: float
    offset: float

    def __call__(self, x, y):
        return np.asarray(x, dtype=float) / self.x_divisor + np.asarray(y, dtype=float) / self.y_divisor - self.offset

    def boundary_y(self, x):
        """y at which z == 0 for the given x."""
        return self.y_divisor * (self.offset - np.asarray(x, dtype=float) / self.x_divisor)


RISK_MODELS: dict[str, LinearPredictor] = {
    "heart_disease": LinearPredictor(x_divisor=20.0, y_divisor=100.0, offset=15.0),
    "diabetes_risk": LinearPredictor(x_divisor=10.0, y_divisor=50.0, offset=8.0),
}


class ClassificationSummary(TypedDict):
    n: int
    positives: int
    positive_rate: float
    boundary_accuracy: float


def sigmoid(z):
    """Logistic function 1 / (1 + exp(-z)), overflow-safe."""
    return expit(z)


def _risk_model(scenario_key: str) -> LinearPredictor:
    try:
        return RISK_MODELS[scenario_key]
    except KeyError:
        raise KeyError(f"No risk model for scenario '{scenario_key}'") from None


def risk_probability(scenario_key: str, x, y):
    """True outcome probability for the scenario's two predictors."""
    return sigmoid(_risk_model(scenario_key)(x, y))


def decision_boundary(
    scenario_key: str, x_min: float, x_max: float, n_points: int | None = None
) -> tuple[np.ndarray, np.ndarray]:
    """
    Points on the p = 0.5 contour across [x_min, x_max].

    Returns:
        Tuple of (x_values, y_values). The y values are not clipped, so the
        boundary may lie outside the range covered by the sample.
    """
    if n_points is None:
        n_points = int(CONFIG.get("analysis.boundary_points", 200))
    xs = np.linspace(x_min, x_max, n_points)
    return xs, _risk_model(scenario_key).boundary_y(xs)


def classification_summary(
    df: pd.DataFrame, scenario_key: str, x_col: str, y_col: str, outcome_col: str = "outcome"
) -> ClassificationSummary:
    """
    Descriptive agreement between the known boundary and the drawn outcomes.

    boundary_accuracy is the share of samples whose outcome matches the
    rule "positive when p >= 0.5". It describes the sample, not a fitted model.
    """
    outcomes = df[outcome_col].astype(int).to_numpy()
    n = int(outcomes.size)
    if n == 0:
        return ClassificationSummary(n=0, positives=0, positive_rate=0.0, boundary_accuracy=0.0)

    predicted = (risk_probability(scenario_key, df[x_col], df[y_col]) >= 0.5).astype(int)
    positives = int(outcomes.sum())

    return ClassificationSummary(
        n=n,
        positives=positives,
        positive_rate=positives / n,
        boundary_accuracy=float(np.mean(predicted == outcomes)),
    )
