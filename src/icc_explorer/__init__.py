"""Interactive IRT item characteristic curve explorer."""

from .config import ExplorerConfig
from .model import (
    THETA_GRID,
    effective_upper,
    icc_1pl,
    icc_2pl,
    icc_3pl,
    icc_4pl,
    logistic,
    make_theta_grid,
)
from .families import FAMILIES, ModelFamily, ParamSpec, build_families, get_family
from .binding import CurveBinding, CurveSnapshot
from .export import curve_table, write_curve_table

__all__ = [
    "ExplorerConfig",
    "THETA_GRID",
    "logistic",
    "icc_1pl",
    "icc_2pl",
    "icc_3pl",
    "icc_4pl",
    "effective_upper",
    "make_theta_grid",
    "FAMILIES",
    "ModelFamily",
    "ParamSpec",
    "build_families",
    "get_family",
    "CurveBinding",
    "CurveSnapshot",
    "curve_table",
    "write_curve_table",
]
