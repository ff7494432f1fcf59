"""Parameter specs and curve callbacks for the four logistic model families."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Mapping, Tuple

import numpy as np

from .model import EPS, effective_upper, icc_1pl, icc_2pl, icc_3pl, icc_4pl

ABILITY_ID = "theta"
DIFFICULTY_ID = "b"

Values = Mapping[str, float]
CurveFn = Callable[[np.ndarray, Values], np.ndarray]
PointFn = Callable[[Values], Tuple[float, float]]


@dataclass(frozen=True)
class ParamSpec:
    """A named numeric parameter with its slider range."""

    id: str
    label: str
    min: float
    max: float
    step: float
    default: float

    def clamp(self, value: float) -> float:
        """Clamp a value into [min, max]."""
        return max(self.min, min(self.max, value))

    @property
    def decimals(self) -> int:
        """Number of decimals needed to display a multiple of step."""
        return max(0, int(np.ceil(-np.log10(self.step) - 1e-9)))


@dataclass(frozen=True)
class ModelFamily:
    """Everything the binding needs to drive one model family.

    Attributes:
        key: Short identifier, e.g. "3PL".
        title: Chart title.
        params: Parameter specs, in control order.
        compute_curve: Maps (grid, values) to one probability per grid point.
        compute_point: Maps values to the highlighted (theta, P(theta)) pair.
        equation: Mathtext formula shown next to the chart.
    """

    key: str
    title: str
    params: Tuple[ParamSpec, ...]
    compute_curve: CurveFn
    compute_point: PointFn
    equation: str

    def param(self, param_id: str) -> ParamSpec:
        for spec in self.params:
            if spec.id == param_id:
                return spec
        raise ValueError(f"Unknown parameter {param_id!r} for {self.key}")

    def has_param(self, param_id: str) -> bool:
        return any(spec.id == param_id for spec in self.params)


THETA = ParamSpec(ABILITY_ID, "θ (ability)", -4.0, 4.0, 0.1, 0.0)
A = ParamSpec("a", "a (discrimination)", 0.1, 3.0, 0.05, 1.0)
B = ParamSpec(DIFFICULTY_ID, "b (difficulty)", -3.0, 3.0, 0.1, 0.0)
C = ParamSpec("c", "c (guessing)", 0.0, 0.35, 0.01, 0.2)
D = ParamSpec("d", "d (upper asymptote)", 0.65, 1.0, 0.01, 0.9)


def build_families(upper_eps: float = EPS) -> Dict[str, ModelFamily]:
    """Build the 1PL, 2PL, 3PL and 4PL family records.

    Args:
        upper_eps: Minimum gap kept between c and d for the 4PL family.

    Returns:
        Dict mapping family key to its record, in nesting order.
    """

    def point(icc: Callable[..., float]) -> PointFn:
        def compute(v: Values) -> Tuple[float, float]:
            theta = v[ABILITY_ID]
            return float(theta), float(icc(theta, v))
        return compute

    def curve(icc: Callable[..., np.ndarray]) -> CurveFn:
        return lambda grid, v: np.asarray(icc(grid, v), dtype=float)

    def p1(theta, v):
        return icc_1pl(theta, v["b"])

    def p2(theta, v):
        return icc_2pl(theta, v["a"], v["b"])

    def p3(theta, v):
        return icc_3pl(theta, v["a"], v["b"], v["c"])

    def p4(theta, v):
        d = effective_upper(v["c"], v["d"], upper_eps)
        return icc_4pl(theta, v["a"], v["b"], v["c"], d)

    families = [
        ModelFamily(
            key="1PL",
            title="1PL (Rasch)",
            params=(THETA, B),
            compute_curve=curve(p1),
            compute_point=point(p1),
            equation=r"P(\theta)=\frac{1}{1+e^{-(\theta-b)}}",
        ),
        ModelFamily(
            key="2PL",
            title="2PL",
            params=(THETA, A, B),
            compute_curve=curve(p2),
            compute_point=point(p2),
            equation=r"P(\theta)=\frac{1}{1+e^{-a(\theta-b)}}",
        ),
        ModelFamily(
            key="3PL",
            title="3PL",
            params=(THETA, A, B, C),
            compute_curve=curve(p3),
            compute_point=point(p3),
            equation=r"P(\theta)=c+(1-c)\,\frac{1}{1+e^{-a(\theta-b)}}",
        ),
        ModelFamily(
            key="4PL",
            title="4PL",
            params=(THETA, A, B, C, D),
            compute_curve=curve(p4),
            compute_point=point(p4),
            equation=r"P(\theta)=c+(d-c)\,\frac{1}{1+e^{-a(\theta-b)}}",
        ),
    ]
    return {family.key: family for family in families}


FAMILIES = build_families()


def get_family(key: str, families: Mapping[str, ModelFamily] = FAMILIES) -> ModelFamily:
    """Look up a family by key ("1PL", "2PL", "3PL" or "4PL")."""
    if key not in families:
        raise ValueError(f"Unknown model family {key!r}, expected one of {list(families)}")
    return families[key]
