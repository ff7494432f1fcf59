"""Tabulate explorer curves."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

import numpy as np
import pandas as pd

from .binding import CurveBinding


def curve_table(bindings: Sequence[CurveBinding]) -> pd.DataFrame:
    """Collect the current curves of several bindings into one table.

    All bindings must share the same ability grid.

    Args:
        bindings: Bindings to tabulate, one column each.

    Returns:
        DataFrame with a ``theta`` column and one ``P_<family>`` column per binding.
    """
    if not bindings:
        return pd.DataFrame(columns=["theta"])

    grid = bindings[0].grid
    columns = {"theta": grid}
    for binding in bindings:
        if not np.array_equal(binding.grid, grid):
            raise ValueError(f"{binding.family.key} uses a different ability grid")
        columns[f"P_{binding.family.key}"] = binding.snapshot.curve

    return pd.DataFrame(columns)


def write_curve_table(bindings: Sequence[CurveBinding], output_path: Path) -> pd.DataFrame:
    """Write :func:`curve_table` to CSV and return it."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    df = curve_table(bindings)
    df.to_csv(output_path, index=False)
    return df
