"""Configuration for the ICC explorer."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Tuple


@dataclass
class ExplorerConfig:
    """Configuration for the ICC explorer."""

    # Ability grid
    theta_min: float = -4.0
    theta_max: float = 4.0
    grid_size: int = 400

    # Lower bound on d - c for the 4PL family
    upper_eps: float = 1e-6

    # Figure styling
    figsize: Tuple[float, float] = (7.0, 7.0)
    dpi: int = 150
    palette: str = "Set2"
    marker_size: float = 10.0
    lock_label: str = "Lock θ and b"

    # Output
    output_dir: Path = field(default_factory=lambda: Path("results"))

    def __post_init__(self) -> None:
        if self.grid_size < 2:
            raise ValueError(f"grid_size must be at least 2, got {self.grid_size}")
        if self.theta_min >= self.theta_max:
            raise ValueError(
                f"theta_min must be below theta_max, got [{self.theta_min}, {self.theta_max}]"
            )
