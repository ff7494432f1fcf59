"""Item characteristic curves for the 1PL-4PL logistic IRT models.

All functions accept Python floats or numpy arrays and broadcast the way
numpy does, so the same call evaluates a single ability value or a whole grid.

    1PL: P(theta) = logistic(theta - b)
    2PL: P(theta) = logistic(a * (theta - b))
    3PL: P(theta) = c + (1 - c) * logistic(a * (theta - b))
    4PL: P(theta) = c + (d - c) * logistic(a * (theta - b))

where:
- theta: ability
- a: discrimination
- b: difficulty
- c: guessing floor
- d: upper asymptote
"""

from __future__ import annotations

import numpy as np

THETA_MIN, THETA_MAX = -4.0, 4.0
GRID_SIZE = 400
EPS = 1e-6


def logistic(x):
    """Logistic function 1 / (1 + exp(-x)), clipped against overflow."""
    return 1.0 / (1.0 + np.exp(-np.clip(x, -500, 500)))


def icc_1pl(theta, b):
    """1PL (Rasch) probability of a correct response."""
    return logistic(theta - b)


def icc_2pl(theta, a, b):
    """2PL probability of a correct response."""
    return logistic(a * (theta - b))


def icc_3pl(theta, a, b, c):
    """3PL probability of a correct response."""
    return c + (1.0 - c) * logistic(a * (theta - b))


def icc_4pl(theta, a, b, c, d):
    """4PL probability of a correct response.

    The caller must make sure ``d >= c``; see :func:`effective_upper`.
    """
    return c + (d - c) * logistic(a * (theta - b))


def effective_upper(c: float, d: float, eps: float = EPS) -> float:
    """Upper asymptote actually used by the 4PL curve: max(d, c + eps)."""
    return max(d, c + eps)


def make_theta_grid(
    theta_min: float = THETA_MIN,
    theta_max: float = THETA_MAX,
    size: int = GRID_SIZE,
) -> np.ndarray:
    """Build a read-only, evenly spaced ability grid (both ends included).

    Args:
        theta_min: First grid value.
        theta_max: Last grid value.
        size: Number of points.

    Returns:
        Read-only array of ``size`` ability values.
    """
    grid = np.linspace(theta_min, theta_max, size)
    grid.flags.writeable = False
    return grid


# Shared by every explorer in the process
THETA_GRID = make_theta_grid()
