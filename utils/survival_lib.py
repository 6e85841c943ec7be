"""
⏳ Kaplan-Meier Survival Library

Step-function survival estimate over time-ordered, possibly censored records:

    at_risk = M, S = 1.0
    for each record in time order:
        if the record is an event:  S *= (at_risk - 1) / at_risk
        emit (time, S, censored)
        at_risk -= 1

Sorting by time is the caller's job (the scenario generator sorts survival
datasets); the estimator folds over the records in the order given.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

import pandas as pd


@dataclass(frozen=True)
class SurvivalPoint:
    """One step of a Kaplan-Meier curve."""

    time: float
    probability: float
    censored: bool


def kaplan_meier(events: Iterable[tuple[float, bool]]) -> list[SurvivalPoint]:
    """
    Kaplan-Meier curve for records already sorted ascending by time.

    Parameters:
        events: (time, censored) pairs in time order. A censored record keeps
            the current probability; an event multiplies it by
            (at_risk - 1) / at_risk.

    Returns:
        One SurvivalPoint per record (empty for empty input).
    """
    records = list(events)
    at_risk = len(records)
    probability = 1.0
    curve: list[SurvivalPoint] = []

    for time, censored in records:
        censored = bool(censored)
        if not censored:
            probability *= (at_risk - 1) / at_risk
        curve.append(SurvivalPoint(time=float(time), probability=probability, censored=censored))
        at_risk -= 1

    return curve


def curve_to_frame(curve: Sequence[SurvivalPoint]) -> pd.DataFrame:
    """Curve as a DataFrame with columns 'time', 'probability', 'censored'."""
    return pd.DataFrame(
        {
            "time": [p.time for p in curve],
            "probability": [p.probability for p in curve],
            "censored": [p.censored for p in curve],
        },
        columns=["time", "probability", "censored"],
    )


def is_sorted_by_time(events: Sequence[tuple[float, bool]]) -> bool:
    """True if the records are in non-decreasing time order."""
    return all(events[i][0] <= events[i + 1][0] for i in range(len(events) - 1))


def survival_at(curve: Sequence[SurvivalPoint], t: float) -> float:
    """
    Survival probability at time t read off the step curve.

    Returns 1.0 before the first record; otherwise the probability of the
    last record with time <= t.
    """
    probability = 1.0
    for point in curve:
        if point.time > t:
            break
        probability = point.probability
    return probability


def median_survival(curve: Sequence[SurvivalPoint]) -> float | None:
    """
    Earliest time at which the curve reaches 0.5 or below.

    Returns None when the curve never falls that far (heavy censoring or
    short follow-up).
    """
    for point in curve:
        if point.probability <= 0.5:
            return point.time
    return None


def censoring_rate(df: pd.DataFrame, censored_col: str) -> float:
    """Share of censored records in a Dataset (0.0 for an empty one)."""
    if len(df) == 0:
        return 0.0
    return float(df[censored_col].astype(bool).mean())
