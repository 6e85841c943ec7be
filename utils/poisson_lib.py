"""
🔢 Poisson Count Library

Provides the count-data pieces of the Poisson regression explorer:
- Knuth's Poisson sampler driven by an injected random generator
- The simplified expected-count line drawn over observed counts
- A descriptive dispersion index (variance / mean)
"""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np

from config import CONFIG
from logger import get_logger

logger = get_logger(__name__)

# Expected events per unit of exposure, per scenario (x / divisor * multiplier)
EXPECTED_RATE_SHAPES: dict[str, tuple[float, float]] = {
    "hospital_infections": (20.0, 0.5),
    "adverse_events": (50.0, 2.0),
}


def poisson_sample(lam: float, rng: np.random.Generator) -> int:
    """
    Draw a non-negative integer from Poisson(lam) using Knuth's algorithm.

    L = exp(-lam); starting from k = 0 and p = 1, repeat k += 1 and
    p *= U(0, 1) while p > L; return k - 1.

    Parameters:
        lam (float): Rate parameter, must be finite and >= 0. A rate of exactly 0 returns 0 without consuming randomness.
        rng (np.random.Generator): Source of U(0, 1) draws.

    Returns:
        int: The sampled count.

    Raises:
        ValueError: If `lam` is negative or not finite.
    """
    if not math.isfinite(lam) or lam < 0:
        raise ValueError(f"Poisson rate must be a finite non-negative number, got {lam!r}")

    if lam == 0:
        return 0

    if lam > CONFIG.get("analysis.poisson_warn_lambda", 30.0):
        logger.warning(
            "poisson_sample: lambda=%.2f is large; Knuth's method is slow and exp(-lambda) may underflow",
            lam,
        )

    limit = math.exp(-lam)
    k = 0
    p = 1.0
    while True:
        k += 1
        p *= rng.random()
        if p <= limit:
            return k - 1


def expected_count_curve(
    scenario_key: str, x_max: float, n_points: int | None = None
) -> tuple[np.ndarray, np.ndarray]:
    """
    Simplified expected count along the exposure axis for a Poisson scenario.

    Parameters:
        scenario_key: 'hospital_infections' or 'adverse_events'.
        x_max: Largest exposure value to cover (the curve spans [0, x_max)).
        n_points: Number of evenly spaced points; defaults to CONFIG 'analysis.expected_curve_points'.

    Returns:
        Tuple of (x_values, expected_counts).

    Raises:
        KeyError: If the scenario has no expected-count shape.
    """
    if scenario_key not in EXPECTED_RATE_SHAPES:
        raise KeyError(f"No expected-count shape for scenario '{scenario_key}'")

    if n_points is None:
        n_points = int(CONFIG.get("analysis.expected_curve_points", 100))

    divisor, multiplier = EXPECTED_RATE_SHAPES[scenario_key]
    xs = np.arange(n_points) * (x_max / n_points) if x_max > 0 else np.zeros(0)
    return xs, xs / divisor * multiplier


def dispersion_index(counts: Sequence[float]) -> float | None:
    """
    Variance-to-mean ratio of observed counts (1.0 for an ideal Poisson sample).

    Uses the sample variance (ddof=1). Returns None when fewer than two
    counts are given or the mean is zero.
    """
    values = np.asarray(counts, dtype=float)
    if values.size < 2:
        return None

    mean = values.mean()
    if mean == 0:
        return None

    return float(values.var(ddof=1) / mean)
