"""
🧭 Regression Selection Guide

Catalog of the regression families covered by the app and the decision
flowchart shown on the home page: outcome type first, then the number of
predictors, event types, or censoring.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypedDict


@dataclass(frozen=True)
class RegressionType:
    key: str
    title: str
    description: str
    example: str
    key_points: tuple[str, ...]


REGRESSION_TYPES: tuple[RegressionType, ...] = (
    RegressionType(
        key="linear",
        title="Linear Regression",
        description=(
            "Understand relationships between continuous variables, such as the "
            "correlation between blood pressure and age."
        ),
        example="Predicting patient recovery time based on initial vital signs.",
        key_points=(
            "Best for continuous outcome variables",
            "Assumes linear relationship between variables",
            "Commonly used for prediction and forecasting",
            "Example: Blood pressure vs Age relationship",
        ),
    ),
    RegressionType(
        key="multiple",
        title="Multiple Regression",
        description=(
            "Analyze how multiple independent variables affect an outcome, like how "
            "diet and exercise influence cholesterol levels."
        ),
        example="Analyzing factors affecting length of hospital stay.",
        key_points=(
            "Handles multiple predictor variables",
            "Controls for confounding factors",
            "Assesses relative importance of predictors",
            "Example: Factors affecting BMI (age, diet, exercise)",
        ),
    ),
    RegressionType(
        key="logistic",
        title="Logistic Regression",
        description=(
            "Predict binary outcomes, such as disease presence/absence based on "
            "various risk factors."
        ),
        example="Predicting the likelihood of heart disease based on patient characteristics.",
        key_points=(
            "Best for binary outcomes (yes/no)",
            "Predicts probability of outcome",
            "Common in diagnostic testing",
            "Example: Disease presence/absence prediction",
        ),
    ),
    RegressionType(
        key="cox",
        title="Cox Proportional Hazards",
        description="Analyze survival data and time-to-event outcomes in clinical trials.",
        example="Studying factors affecting patient survival rates in cancer treatment.",
        key_points=(
            "Analyzes time-to-event data",
            "Handles censored observations",
            "Used in survival analysis",
            "Example: Cancer survival analysis",
        ),
    ),
    RegressionType(
        key="poisson",
        title="Poisson Regression",
        description="Model count data, such as number of adverse events or hospital admissions.",
        example="Analyzing infection rates in different hospital wards.",
        key_points=(
            "Best for count data",
            "Models rate of occurrence",
            "Used in epidemiology",
            "Example: Hospital infection rates",
        ),
    ),
)

OUTCOME_TYPES: dict[str, str] = {
    "continuous": "Continuous (e.g., blood pressure, weight)",
    "binary": "Binary (yes/no outcome)",
    "count": "Count Data (number of events)",
    "time_to_event": "Time-to-Event (survival data)",
}


class Recommendation(TypedDict):
    method: str
    family: str | None  # tab key, None when the app has no explorer for it
    rationale: str
    example: str


def get_regression_type(key: str) -> RegressionType:
    for reg in REGRESSION_TYPES:
        if reg.key == key:
            return reg
    raise KeyError(f"Unknown regression type '{key}'")


def recommend_regression(
    outcome_type: str,
    n_predictors: int = 1,
    censored: bool = False,
    multiple_event_types: bool = False,
) -> Recommendation:
    """
    Walk the selection flowchart for an outcome.

    Parameters:
        outcome_type: One of OUTCOME_TYPES.
        n_predictors: Number of predictors (continuous and binary outcomes).
        censored: Whether time-to-event data contains censored observations.
        multiple_event_types: Whether count data tracks several event types.

    Returns:
        Recommendation naming the method and the explorer tab that shows it.

    Raises:
        ValueError: Unknown outcome type or fewer than one predictor.
    """
    if outcome_type not in OUTCOME_TYPES:
        raise ValueError(f"Unknown outcome type '{outcome_type}'. Expected one of {list(OUTCOME_TYPES)}")
    if n_predictors < 1:
        raise ValueError("At least one predictor is required")

    if outcome_type == "continuous":
        if n_predictors == 1:
            return Recommendation(
                method="Simple Linear Regression",
                family="linear",
                rationale="One predictor with a direct relationship to a continuous outcome.",
                example="Age → Blood Pressure",
            )
        return Recommendation(
            method="Multiple Linear Regression",
            family="multiple",
            rationale="Several predictors jointly explain a continuous outcome.",
            example="Age, BMI, Diet → Blood Pressure",
        )

    if outcome_type == "binary":
        if n_predictors == 1:
            return Recommendation(
                method="Simple Logistic Regression",
                family="logistic",
                rationale="One predictor of a yes/no outcome.",
                example="Age → Disease Risk (Yes/No)",
            )
        return Recommendation(
            method="Multiple Logistic Regression",
            family="logistic",
            rationale="Several risk factors for a yes/no outcome.",
            example="Age, Cholesterol → Heart Disease (Yes/No)",
        )

    if outcome_type == "count":
        if multiple_event_types:
            return Recommendation(
                method="Multiple Poisson Regression",
                family="poisson",
                rationale="Counts of several event types per subject or unit.",
                example="Different types of complications",
            )
        return Recommendation(
            method="Simple Poisson Regression",
            family="poisson",
            rationale="Counts of a single event type over time or exposure.",
            example="Monthly infections per ward",
        )

    if censored:
        return Recommendation(
            method="Cox Proportional Hazards",
            family="cox",
            rationale="Time-to-event data where some subjects were not followed to the event.",
            example="Patient survival times",
        )
    return Recommendation(
        method="Time Series Analysis",
        family=None,
        rationale="Complete temporal data with no censoring.",
        example="Disease progression",
    )
