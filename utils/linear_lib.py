"""
📈 Simple Linear Regression Library

Closed-form least-squares line through paired samples, used by the linear
explorer, by every factor of the multiple-regression explorer, and for the
descriptive numbers printed beside each chart.

    slope     = ssxy / ssxx
    intercept = mean(y) - slope * mean(x)

A predictor with no spread (ssxx == 0) has no defined slope; this is reported
as InvalidInputError instead of letting inf/nan reach a chart.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TypedDict

import numpy as np
import pandas as pd

from logger import get_logger

logger = get_logger(__name__)


class InvalidInputError(ValueError):
    """Raised when paired samples cannot support a least-squares line."""


# ==============================================================================
# Type Definitions
# ==============================================================================


@dataclass(frozen=True)
class FitResult:
    """Slope and intercept of a fitted line."""

    slope: float
    intercept: float

    def predict(self, x):
        """Evaluate the line at a scalar or array of x values."""
        return self.slope * np.asarray(x, dtype=float) + self.intercept


class FitSummary(TypedDict):
    """Descriptive numbers computed from the data behind one fitted line."""

    n: int
    slope: float
    intercept: float
    r: float
    r_squared: float
    x_mean: float
    y_mean: float


class GroupMean(TypedDict):
    """Mean outcome of one level of a binary factor."""

    level: float
    mean: float
    n: int


# ==============================================================================
# Estimation
# ==============================================================================


def _as_pairs(xs: Sequence[float], ys: Sequence[float]) -> tuple[np.ndarray, np.ndarray]:
    x = np.asarray(xs, dtype=float)
    y = np.asarray(ys, dtype=float)

    if x.ndim != 1 or y.ndim != 1:
        raise InvalidInputError("X and Y must be one-dimensional sequences")
    if x.size != y.size:
        raise InvalidInputError(f"X and Y lengths differ ({x.size} vs {y.size})")
    if x.size < 2:
        raise InvalidInputError("At least two points are required to fit a line")
    if not (np.isfinite(x).all() and np.isfinite(y).all()):
        raise InvalidInputError("X and Y must contain only finite values")

    return x, y


def _sums_of_squares(x: np.ndarray, y: np.ndarray) -> tuple[float, float, float, float, float]:
    x_mean = float(x.mean())
    y_mean = float(y.mean())
    dx = x - x_mean
    dy = y - y_mean
    return x_mean, y_mean, float(np.sum(dx * dx)), float(np.sum(dx * dy)), float(np.sum(dy * dy))


def fit_linear(xs: Sequence[float], ys: Sequence[float]) -> FitResult:
    """
    Fit y = slope * x + intercept by ordinary least squares (sums of squares).

    Parameters:
        xs: Predictor values.
        ys: Outcome values, same length as `xs`.

    Returns:
        FitResult with finite slope and intercept.

    Raises:
        InvalidInputError: If the inputs differ in length, hold fewer than two
            points, contain non-finite values, or all x values are identical.
    """
    x, y = _as_pairs(xs, ys)
    x_mean, y_mean, ssxx, ssxy, _ = _sums_of_squares(x, y)

    # Rounding in the mean can leave a tiny non-zero ssxx for identical values
    if ssxx == 0 or np.all(x == x[0]):
        raise InvalidInputError("Not enough variation in data: all X values are identical")

    slope = ssxy / ssxx
    intercept = y_mean - slope * x_mean

    if not (np.isfinite(slope) and np.isfinite(intercept)):
        raise InvalidInputError("Least-squares line is not finite for these values")

    return FitResult(slope=slope, intercept=intercept)


def fit_factor(df: pd.DataFrame, factor_col: str, outcome_col: str) -> FitResult:
    """
    Fit the outcome on a single predictor column of a Dataset.

    The multiple-regression explorer calls this once per selected factor; no
    joint model over several predictors is ever formed.
    """
    missing = [c for c in (factor_col, outcome_col) if c not in df.columns]
    if missing:
        raise KeyError(f"Columns not found: {missing}")

    fit = fit_linear(df[factor_col].to_numpy(), df[outcome_col].to_numpy())
    logger.log_fit(
        "linear",
        len(df),
        factor=factor_col,
        slope=f"{fit.slope:.4f}",
        intercept=f"{fit.intercept:.4f}",
    )
    return fit


def describe_fit(xs: Sequence[float], ys: Sequence[float], fit: FitResult | None = None) -> FitSummary:
    """
    Descriptive companion numbers for a fitted line.

    r = ssxy / sqrt(ssxx * ssyy) and R² = r². When every y is identical the
    line is exact (slope 0) and r and R² are reported as 0.0 and 1.0.

    Parameters:
        xs, ys: The paired samples the line was fitted to.
        fit: A previously computed fit; recomputed when omitted.

    Raises:
        InvalidInputError: Under the same conditions as fit_linear.
    """
    x, y = _as_pairs(xs, ys)
    if fit is None:
        fit = fit_linear(x, y)

    x_mean, y_mean, ssxx, ssxy, ssyy = _sums_of_squares(x, y)

    if ssyy == 0:
        r, r_squared = 0.0, 1.0
    else:
        r = ssxy / np.sqrt(ssxx * ssyy)
        r = float(np.clip(r, -1.0, 1.0))
        r_squared = r * r

    return FitSummary(
        n=int(x.size),
        slope=fit.slope,
        intercept=fit.intercept,
        r=r,
        r_squared=r_squared,
        x_mean=x_mean,
        y_mean=y_mean,
    )


def group_means(df: pd.DataFrame, group_col: str, outcome_col: str) -> list[GroupMean]:
    """
    Mean outcome per level of a (typically binary) factor, ordered by level.

    Used instead of a slope when the selected factor is a yes/no indicator.
    Levels with no rows do not appear.
    """
    grouped = df.groupby(group_col, sort=True)[outcome_col].agg(["mean", "size"])
    return [
        GroupMean(level=float(level), mean=float(row["mean"]), n=int(row["size"]))
        for level, row in grouped.iterrows()
    ]
