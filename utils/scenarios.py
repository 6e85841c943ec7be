"""
🧪 Synthetic Medical Scenarios

Example datasets for each regression family. Every field is built from
independent uniform draws combined with a fixed signal so that each chart
shows the relationship it is meant to teach:

- linear:   blood pressure vs age, weight vs height
- multiple: BMI factors, hospital length of stay
- logistic: heart disease risk, diabetes risk
- cox:      cancer survival, heart failure progression (sorted by time)
- poisson:  hospital-acquired infections, medication adverse events

All randomness comes from a numpy Generator passed in (or built from a seed),
so the same seed always yields the same DataFrame.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

import numpy as np
import pandas as pd

from config import CONFIG
from logger import get_logger
from utils.logistic_lib import risk_probability
from utils.poisson_lib import poisson_sample

logger = get_logger(__name__)

FAMILIES = ("linear", "multiple", "logistic", "cox", "poisson")


@dataclass(frozen=True)
class Factor:
    column: str
    label: str
    binary: bool = False


@dataclass(frozen=True)
class Scenario:
    """Static description of one example dataset."""

    key: str
    name: str
    family: str
    default_n: int
    builder: Callable[[int, np.random.Generator], dict]
    x_col: str | None = None
    y_col: str | None = None
    x_label: str = ""
    y_label: str = ""
    outcome_col: str | None = None
    time_col: str | None = None
    censored_col: str | None = None
    factors: tuple[Factor, ...] = field(default_factory=tuple)


# ==============================================================================
# Builders (column name -> values)
# ==============================================================================


def _bp_age(n: int, rng: np.random.Generator) -> dict:
    i = np.arange(n)
    return {
        "age": 20 + rng.random(n) * 60,
        "systolic_bp": 90 + i / 2 + rng.random(n) * 30,
    }


def _height_weight(n: int, rng: np.random.Generator) -> dict:
    i = np.arange(n)
    return {
        "height": 150 + rng.random(n) * 40,
        "weight": 50 + i / 3 + rng.random(n) * 20,
    }


def _bmi_factors(n: int, rng: np.random.Generator) -> dict:
    height = 150 + rng.random(n) * 40
    weight = 50 + rng.random(n) * 50
    height_m = height / 100
    return {
        "height": height,
        "weight": weight,
        "age": 20 + rng.random(n) * 60,
        "coffee_per_day": np.floor(rng.random(n) * 8).astype(int),
        "sleep_hours": 5 + rng.random(n) * 5,
        "is_married": (rng.random(n) > 0.5).astype(int),
        "bmi": weight / (height_m * height_m),
    }


def _hospital_stay(n: int, rng: np.random.Generator) -> dict:
    age = 20 + rng.random(n) * 60
    severity = rng.random(n) * 10
    comorbidities = np.floor(rng.random(n) * 5).astype(int)
    return {
        "age": age,
        "severity": severity,
        "comorbidities": comorbidities,
        "stay_days": 2 + age / 20 + severity * 1.5 + comorbidities * 2 + rng.random(n) * 5,
    }


def _heart_disease(n: int, rng: np.random.Generator) -> dict:
    age = 30 + rng.random(n) * 50
    cholesterol = 150 + rng.random(n) * 150
    p = risk_probability("heart_disease", age, cholesterol)
    return {
        "age": age,
        "cholesterol": cholesterol,
        "outcome": (rng.random(n) < p).astype(int),
    }


def _diabetes_risk(n: int, rng: np.random.Generator) -> dict:
    bmi = 18 + rng.random(n) * 22
    glucose = 70 + rng.random(n) * 130
    p = risk_probability("diabetes_risk", bmi, glucose)
    return {
        "bmi": bmi,
        "glucose": glucose,
        "outcome": (rng.random(n) < p).astype(int),
    }


def _cancer_survival(n: int, rng: np.random.Generator) -> dict:
    age = 40 + rng.random(n) * 40
    stage = np.floor(rng.random(n) * 4).astype(int) + 1
    base_time = 60 - age / 10 - stage * 6
    return {
        "age": age,
        "stage": stage,
        "survival_time": np.maximum(1.0, base_time + rng.random(n) * 20),
        "censored": rng.random(n) < 0.3,
    }


def _heart_failure(n: int, rng: np.random.Generator) -> dict:
    ejection_fraction = 20 + rng.random(n) * 40
    nyha_class = np.floor(rng.random(n) * 4).astype(int) + 1
    base_time = 48 - (40 - ejection_fraction) / 2 - nyha_class * 4
    return {
        "ejection_fraction": ejection_fraction,
        "nyha_class": nyha_class,
        "survival_time": np.maximum(1.0, base_time + rng.random(n) * 15),
        "censored": rng.random(n) < 0.25,
    }


def _hospital_infections(n: int, rng: np.random.Generator) -> dict:
    bed_count = np.floor(10 + rng.random(n) * 90).astype(int)
    staff_ratio = 0.2 + rng.random(n) * 0.5
    rate = (bed_count / 20) * (1 - staff_ratio)
    return {
        "bed_count": bed_count,
        "staff_ratio": staff_ratio,
        "rate": rate,
        "infections": np.array([poisson_sample(lam, rng) for lam in rate], dtype=int),
    }


def _adverse_events(n: int, rng: np.random.Generator) -> dict:
    patient_count = np.floor(50 + rng.random(n) * 150).astype(int)
    medication_count = np.floor(2 + rng.random(n) * 8).astype(int)
    rate = (patient_count / 50) * (medication_count / 2)
    return {
        "patient_count": patient_count,
        "medication_count": medication_count,
        "rate": rate,
        "events": np.array([poisson_sample(lam, rng) for lam in rate], dtype=int),
    }


# ==============================================================================
# Registry
# ==============================================================================

SCENARIOS: dict[str, Scenario] = {
    s.key: s
    for s in (
        Scenario(
            key="bp_age",
            name="Blood Pressure vs Age",
            family="linear",
            default_n=50,
            builder=_bp_age,
            x_col="age",
            y_col="systolic_bp",
            x_label="Age (years)",
            y_label="Systolic Blood Pressure (mmHg)",
        ),
        Scenario(
            key="height_weight",
            name="Height vs Weight",
            family="linear",
            default_n=50,
            builder=_height_weight,
            x_col="height",
            y_col="weight",
            x_label="Height (cm)",
            y_label="Weight (kg)",
        ),
        Scenario(
            key="bmi_factors",
            name="BMI and Lifestyle Factors",
            family="multiple",
            default_n=50,
            builder=_bmi_factors,
            y_col="bmi",
            y_label="BMI",
            factors=(
                Factor("height", "Height (cm)"),
                Factor("weight", "Weight (kg)"),
                Factor("age", "Age (years)"),
                Factor("coffee_per_day", "Coffee Cups/Day"),
                Factor("sleep_hours", "Sleep Hours/Day"),
                Factor("is_married", "Marital Status (1=married)", binary=True),
            ),
        ),
        Scenario(
            key="hospital_stay",
            name="Hospital Stay Duration",
            family="multiple",
            default_n=50,
            builder=_hospital_stay,
            y_col="stay_days",
            y_label="Length of Stay (days)",
            factors=(
                Factor("age", "Age (years)"),
                Factor("severity", "Disease Severity (1-10)"),
                Factor("comorbidities", "Number of Comorbidities"),
            ),
        ),
        Scenario(
            key="heart_disease",
            name="Heart Disease Risk",
            family="logistic",
            default_n=100,
            builder=_heart_disease,
            x_col="age",
            y_col="cholesterol",
            x_label="Age (years)",
            y_label="Cholesterol (mg/dL)",
            outcome_col="outcome",
        ),
        Scenario(
            key="diabetes_risk",
            name="Diabetes Risk",
            family="logistic",
            default_n=100,
            builder=_diabetes_risk,
            x_col="bmi",
            y_col="glucose",
            x_label="BMI",
            y_label="Fasting Glucose (mg/dL)",
            outcome_col="outcome",
        ),
        Scenario(
            key="cancer_survival",
            name="Cancer Treatment Survival",
            family="cox",
            default_n=100,
            builder=_cancer_survival,
            x_label="Time (months)",
            y_label="Survival Probability",
            time_col="survival_time",
            censored_col="censored",
        ),
        Scenario(
            key="heart_failure",
            name="Heart Failure Progression",
            family="cox",
            default_n=100,
            builder=_heart_failure,
            x_label="Time (months)",
            y_label="Event-free Probability",
            time_col="survival_time",
            censored_col="censored",
        ),
        Scenario(
            key="hospital_infections",
            name="Hospital-Acquired Infections",
            family="poisson",
            default_n=50,
            builder=_hospital_infections,
            x_col="bed_count",
            y_col="infections",
            x_label="Number of Beds",
            y_label="Monthly Infections",
            outcome_col="infections",
        ),
        Scenario(
            key="adverse_events",
            name="Medication Adverse Events",
            family="poisson",
            default_n=50,
            builder=_adverse_events,
            x_col="patient_count",
            y_col="events",
            x_label="Number of Patients",
            y_label="Weekly Adverse Events",
            outcome_col="events",
        ),
    )
}


def get_scenario(key: str) -> Scenario:
    """Look up a scenario by key; raises KeyError listing the known keys."""
    try:
        return SCENARIOS[key]
    except KeyError:
        raise KeyError(f"Unknown scenario '{key}'. Known: {sorted(SCENARIOS)}") from None


def list_scenarios(family: str | None = None) -> list[Scenario]:
    """All scenarios, or those of one regression family, in registry order."""
    if family is not None and family not in FAMILIES:
        raise KeyError(f"Unknown regression family '{family}'. Known: {list(FAMILIES)}")
    return [s for s in SCENARIOS.values() if family is None or s.family == family]


def scenario_choices(family: str) -> dict[str, str]:
    """{key: display name} for a family, shaped for a Shiny select input."""
    return {s.key: s.name for s in list_scenarios(family)}


def make_rng(seed: int | None = None) -> np.random.Generator:
    """
    Build the random source for one render.

    Falls back to CONFIG 'analysis.default_seed' when `seed` is None; if that
    is also None the generator is seeded from fresh OS entropy.
    """
    if seed is None:
        seed = CONFIG.get("analysis.default_seed")
    return np.random.default_rng(seed)


def make_noise_rng(seed: int | None = None) -> np.random.Generator:
    """
    Random source for measurement noise, independent of the dataset draws.

    The same seed always gives the same noise, but the stream is a spawned
    child of the seed, so its uniforms never repeat the ones that built the
    predictor (which would make the noise a linear function of x).
    """
    if seed is None:
        seed = CONFIG.get("analysis.default_seed")
    if seed is None:
        return np.random.default_rng()
    return np.random.default_rng(np.random.SeedSequence(seed).spawn(1)[0])


def generate(
    scenario: str | Scenario,
    n: int | None = None,
    seed: int | None = None,
    rng: np.random.Generator | None = None,
) -> pd.DataFrame:
    """
    Generate a synthetic Dataset for a scenario.

    Parameters:
        scenario: Scenario key or Scenario instance.
        n: Number of samples; defaults to the scenario's default size.
        seed: Seed for a fresh generator; ignored when `rng` is given.
        rng: Random source to draw from.

    Returns:
        DataFrame with one row per sample. Survival scenarios are sorted
        ascending by their time column with a fresh 0..n-1 index.

    Raises:
        KeyError: Unknown scenario key.
        ValueError: Negative sample count.
    """
    info = get_scenario(scenario) if isinstance(scenario, str) else scenario
    n = info.default_n if n is None else int(n)
    if n < 0:
        raise ValueError(f"Sample count must be >= 0, got {n}")

    if rng is None:
        rng = make_rng(seed)

    with logger.track_time(f"generate_{info.key}"):
        df = pd.DataFrame(info.builder(n, rng))

        if info.time_col is not None:
            df = df.sort_values(info.time_col, kind="mergesort").reset_index(drop=True)

    logger.log_dataset(info.key, df.shape, seed)
    return df


def apply_measurement_noise(
    values,
    noise_level: float,
    rng: np.random.Generator,
    scale: float | None = None,
) -> np.ndarray:
    """
    Add uniform measurement jitter: value + (U(0,1) - 0.5) * noise_level * scale.

    A noise level of 0 still consumes one draw per value, so the sequence of
    later draws does not depend on the slider position.
    """
    if scale is None:
        scale = float(CONFIG.get("analysis.noise_scale", 20.0))
    arr = np.asarray(values, dtype=float)
    return arr + (rng.random(arr.shape) - 0.5) * noise_level * scale
