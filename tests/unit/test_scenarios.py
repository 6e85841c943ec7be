"""
Unit Tests for Synthetic Medical Scenarios (scenarios.py)

Checks the registry, the value ranges of every generated column, the
sorting of survival datasets and seed reproducibility.
"""

import numpy as np
import pandas as pd
import pytest

from config import CONFIG
from utils.linear_lib import fit_linear
from utils.scenarios import (
    FAMILIES,
    SCENARIOS,
    apply_measurement_noise,
    generate,
    get_scenario,
    list_scenarios,
    make_noise_rng,
    make_rng,
    scenario_choices,
)

pytestmark = pytest.mark.unit

EXPECTED_COLUMNS = {
    "bp_age": ["age", "systolic_bp"],
    "height_weight": ["height", "weight"],
    "bmi_factors": ["height", "weight", "age", "coffee_per_day", "sleep_hours", "is_married", "bmi"],
    "hospital_stay": ["age", "severity", "comorbidities", "stay_days"],
    "heart_disease": ["age", "cholesterol", "outcome"],
    "diabetes_risk": ["bmi", "glucose", "outcome"],
    "cancer_survival": ["age", "stage", "survival_time", "censored"],
    "heart_failure": ["ejection_fraction", "nyha_class", "survival_time", "censored"],
    "hospital_infections": ["bed_count", "staff_ratio", "rate", "infections"],
    "adverse_events": ["patient_count", "medication_count", "rate", "events"],
}


# =============================================================================
# Registry
# =============================================================================


class TestRegistry:
    def test_all_scenarios_registered(self):
        assert set(SCENARIOS) == set(EXPECTED_COLUMNS)

    def test_two_scenarios_per_family(self):
        for family in FAMILIES:
            assert len(list_scenarios(family)) == 2

    def test_default_sizes(self):
        for key, size in {"bp_age": 50, "bmi_factors": 50, "heart_disease": 100,
                          "cancer_survival": 100, "adverse_events": 50}.items():
            assert get_scenario(key).default_n == size

    def test_unknown_scenario(self):
        with pytest.raises(KeyError, match="Unknown scenario"):
            get_scenario("blood_sugar")

    def test_unknown_family(self):
        with pytest.raises(KeyError, match="Unknown regression family"):
            list_scenarios("ridge")

    def test_choices_shape(self):
        assert scenario_choices("cox") == {
            "cancer_survival": "Cancer Treatment Survival",
            "heart_failure": "Heart Failure Progression",
        }

    def test_binary_factor_flagged(self):
        factors = {f.column: f for f in get_scenario("bmi_factors").factors}
        assert factors["is_married"].binary
        assert not factors["age"].binary


# =============================================================================
# Generation
# =============================================================================


@pytest.mark.parametrize("key", sorted(EXPECTED_COLUMNS))
def test_generate_default_shape(key):
    df = generate(key, seed=1)
    assert isinstance(df, pd.DataFrame)
    assert list(df.columns) == EXPECTED_COLUMNS[key]
    assert len(df) == get_scenario(key).default_n


@pytest.mark.parametrize("key", sorted(EXPECTED_COLUMNS))
def test_same_seed_same_dataset(key):
    pd.testing.assert_frame_equal(generate(key, seed=42), generate(key, seed=42))


def test_different_seeds_differ():
    assert not generate("bp_age", seed=1).equals(generate("bp_age", seed=2))


def test_generate_accepts_scenario_object_and_rng():
    scenario = get_scenario("height_weight")
    a = generate(scenario, n=10, rng=np.random.default_rng(5))
    b = generate("height_weight", n=10, seed=5)
    pd.testing.assert_frame_equal(a, b)


def test_custom_size_and_empty():
    assert len(generate("bp_age", n=7, seed=0)) == 7
    empty = generate("cancer_survival", n=0, seed=0)
    assert empty.empty
    assert list(empty.columns) == EXPECTED_COLUMNS["cancer_survival"]


def test_negative_size_rejected():
    with pytest.raises(ValueError, match="Sample count"):
        generate("bp_age", n=-1)


class TestSignalShapes:
    def test_bp_age_ranges(self):
        df = generate("bp_age", n=500, seed=3)
        i = np.arange(500)
        assert df["age"].between(20, 80).all()
        residual = df["systolic_bp"] - (90 + i / 2)
        assert residual.between(0, 30).all()

    def test_height_weight_ranges(self):
        df = generate("height_weight", n=200, seed=3)
        residual = df["weight"] - (50 + np.arange(200) / 3)
        assert df["height"].between(150, 190).all()
        assert residual.between(0, 20).all()

    def test_bmi_factors(self):
        df = generate("bmi_factors", n=300, seed=4)
        assert set(df["is_married"].unique()) <= {0, 1}
        assert df["coffee_per_day"].between(0, 7).all()
        assert df["sleep_hours"].between(5, 10).all()
        np.testing.assert_allclose(df["bmi"], df["weight"] / (df["height"] / 100) ** 2)

    def test_hospital_stay_formula(self):
        df = generate("hospital_stay", n=300, seed=4)
        base = 2 + df["age"] / 20 + 1.5 * df["severity"] + 2 * df["comorbidities"]
        assert (df["stay_days"] - base).between(0, 5).all()
        assert df["comorbidities"].between(0, 4).all()

    @pytest.mark.parametrize("key", ["heart_disease", "diabetes_risk"])
    def test_logistic_outcome_binary(self, key):
        df = generate(key, seed=8)
        assert set(df["outcome"].unique()) <= {0, 1}

    def test_diabetes_has_both_outcomes(self):
        df = generate("diabetes_risk", n=500, seed=8)
        assert 0 < df["outcome"].mean() < 1

    @pytest.mark.parametrize("key", ["cancer_survival", "heart_failure"])
    def test_survival_sorted_and_positive(self, key):
        df = generate(key, seed=9)
        assert df["survival_time"].is_monotonic_increasing
        assert (df["survival_time"] >= 1.0).all()
        assert df["censored"].dtype == bool
        assert list(df.index) == list(range(len(df)))

    def test_censoring_rates(self):
        cancer = generate("cancer_survival", n=5000, seed=10)
        failure = generate("heart_failure", n=5000, seed=10)
        assert cancer["censored"].mean() == pytest.approx(0.30, abs=0.03)
        assert failure["censored"].mean() == pytest.approx(0.25, abs=0.03)

    def test_cancer_stage_range(self):
        df = generate("cancer_survival", n=400, seed=11)
        assert set(df["stage"].unique()) <= {1, 2, 3, 4}

    def test_infection_counts(self):
        df = generate("hospital_infections", n=200, seed=12)
        assert df["bed_count"].between(10, 99).all()
        np.testing.assert_allclose(df["rate"], df["bed_count"] / 20 * (1 - df["staff_ratio"]))
        assert (df["infections"] >= 0).all()
        assert df["infections"].dtype.kind == "i"

    def test_adverse_event_rate(self):
        df = generate("adverse_events", n=200, seed=12)
        np.testing.assert_allclose(
            df["rate"], (df["patient_count"] / 50) * (df["medication_count"] / 2)
        )
        assert df["medication_count"].between(2, 9).all()


# =============================================================================
# Randomness helpers
# =============================================================================


class TestMeasurementNoise:
    def test_zero_noise_is_identity(self, rng):
        values = np.array([1.0, 2.0, 3.0])
        np.testing.assert_array_equal(apply_measurement_noise(values, 0.0, rng), values)

    def test_noise_bounded(self, rng):
        values = np.zeros(1000)
        noisy = apply_measurement_noise(values, 2.0, rng, scale=20.0)
        assert (np.abs(noisy) <= 20.0).all()
        assert noisy.std() > 0

    def test_default_scale_from_config(self):
        values = np.zeros(1000)
        noisy = apply_measurement_noise(values, 1.0, np.random.default_rng(0))
        half_width = CONFIG.get("analysis.noise_scale") / 2
        assert (np.abs(noisy) <= half_width).all()

    def test_accepts_series(self, rng):
        noisy = apply_measurement_noise(pd.Series([10.0, 20.0]), 1.0, rng)
        assert noisy.shape == (2,)


def test_make_rng_uses_config_seed():
    CONFIG.update("analysis.default_seed", 77)
    try:
        a = make_rng().random(3)
    finally:
        CONFIG.update("analysis.default_seed", None)
    b = np.random.default_rng(77).random(3)
    np.testing.assert_array_equal(a, b)

class TestNoiseStream:
    """Noise drawn for a seeded dataset must not reuse the dataset's draws."""

    @pytest.mark.parametrize("seed", [0, 7, 12345])
    def test_noise_independent_of_predictor(self, seed):
        df = generate("bp_age", n=2000, seed=seed)
        noisy = apply_measurement_noise(df["systolic_bp"], 2.0, make_noise_rng(seed))
        noise = noisy - df["systolic_bp"].to_numpy()
        assert abs(np.corrcoef(df["age"], noise)[0, 1]) < 0.1

    def test_noise_does_not_create_a_slope(self):
        df = generate("bp_age", n=2000, seed=7)
        clean = fit_linear(df["age"], df["systolic_bp"])
        noisy = fit_linear(
            df["age"], apply_measurement_noise(df["systolic_bp"], 2.0, make_noise_rng(7))
        )
        assert noisy.slope == pytest.approx(clean.slope, abs=0.1)

    def test_same_seed_same_noise(self):
        np.testing.assert_array_equal(make_noise_rng(3).random(5), make_noise_rng(3).random(5))

    def test_noise_stream_differs_from_data_stream(self):
        assert not np.array_equal(make_noise_rng(3).random(5), make_rng(3).random(5))

    def test_uses_config_seed(self):
        CONFIG.update("analysis.default_seed", 77)
        try:
            a = make_noise_rng().random(3)
        finally:
            CONFIG.update("analysis.default_seed", None)
        np.testing.assert_array_equal(a, make_noise_rng(77).random(3))
