"""Reactive binding between parameter controls and a chart.

A :class:`CurveBinding` owns the parameter state of one model family. Every
control change (and construction itself) recomputes the sampled curve and the
highlighted point and pushes them into the chart. When the family has both an
ability and a difficulty parameter, an optional lock keeps the two equal.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import partial
from typing import Callable, Dict, List, Mapping, Optional, Protocol, Sequence, Tuple

import numpy as np

from .families import ABILITY_ID, DIFFICULTY_ID, ModelFamily, ParamSpec

logger = logging.getLogger(__name__)

CURVE_TRACE = 0
POINT_TRACE = 1


@dataclass
class Trace:
    """Initial data of one chart trace."""

    name: str
    x: Sequence[float]
    y: Sequence[float]
    mode: str  # "lines" or "markers"


@dataclass
class ChartLayout:
    """Initial layout of a chart."""

    title: str
    xlabel: str
    ylabel: str
    xlim: Tuple[float, float]
    ylim: Tuple[float, float]
    reference_x: float = 0.0


@dataclass
class CurveSnapshot:
    """Result of the latest recomputation."""

    values: Dict[str, float]
    curve: np.ndarray
    point: Tuple[float, float]


class Chart(Protocol):
    def create(self, traces: List[Trace], layout: ChartLayout) -> None: ...

    def restyle(
        self,
        index: int,
        x: Optional[Sequence[float]] = None,
        y: Optional[Sequence[float]] = None,
    ) -> None: ...

    def relayout(self, updates: Mapping[str, float]) -> None: ...


class Control(Protocol):
    def set_value(self, value: float) -> None:
        """Show a new value without firing the change callback."""


class Controls(Protocol):
    def add_slider(self, spec: ParamSpec, on_change: Callable[[float], None]) -> Control: ...

    def add_toggle(self, label: str, on_change: Callable[[bool], None]) -> None: ...


class CurveBinding:
    """Drive one chart from one model family's parameter controls."""

    def __init__(
        self,
        chart: Chart,
        controls: Controls,
        family: ModelFamily,
        grid: np.ndarray,
        lock_label: str = "Lock θ and b",
    ):
        """Create the traces and controls, then draw the initial state.

        Args:
            chart: Chart surface receiving the traces.
            controls: Controls surface receiving sliders and the lock toggle.
            family: Model family record.
            grid: Shared ability grid; never modified.
            lock_label: Label of the ability/difficulty lock toggle.
        """
        self.chart = chart
        self.family = family
        self.grid = grid
        self.snapshot: Optional[CurveSnapshot] = None
        self._specs = {spec.id: spec for spec in family.params}
        self._values = {spec.id: float(spec.default) for spec in family.params}
        self._locked = False

        xmin, xmax = float(grid[0]), float(grid[-1])
        chart.create(
            [
                Trace("ICC", grid, np.zeros_like(grid), "lines"),
                Trace("θ", [0.0], [0.0], "markers"),
            ],
            ChartLayout(
                title=family.title,
                xlabel="Ability θ",
                ylabel="P(correct)",
                xlim=(xmin, xmax),
                ylim=(0.0, 1.0),
            ),
        )

        self._controls: Dict[str, Control] = {}
        for spec in family.params:
            self._controls[spec.id] = controls.add_slider(spec, partial(self.on_input, spec.id))

        self.lock_available = ABILITY_ID in self._specs and DIFFICULTY_ID in self._specs
        if self.lock_available:
            controls.add_toggle(lock_label, self.set_lock)

        self.update()

    @property
    def values(self) -> Dict[str, float]:
        """Copy of the current parameter values."""
        return dict(self._values)

    @property
    def locked(self) -> bool:
        return self._locked

    def on_input(self, param_id: str, value: float) -> None:
        """Control callback: store the value, sync the lock partner, redraw."""
        self._values[param_id] = self._specs[param_id].clamp(float(value))
        if self._locked:
            self._sync_from(param_id)
        self.update()

    def set_value(self, param_id: str, value: float) -> None:
        """Set a parameter programmatically, as if its control had moved."""
        if param_id not in self._specs:
            raise ValueError(f"Unknown parameter {param_id!r} for {self.family.key}")
        self._controls[param_id].set_value(self._specs[param_id].clamp(float(value)))
        self.on_input(param_id, value)

    def set_lock(self, enabled: bool) -> None:
        """Toggle callback. Enabling syncs difficulty to ability and redraws."""
        if not self.lock_available:
            return
        self._locked = bool(enabled)
        if self._locked:
            self._sync_from(ABILITY_ID)
            self.update()

    def _sync_from(self, source_id: str) -> None:
        partner_id = {ABILITY_ID: DIFFICULTY_ID, DIFFICULTY_ID: ABILITY_ID}.get(source_id)
        if partner_id is None:
            return
        synced = self._specs[partner_id].clamp(self._values[source_id])
        if self._values[partner_id] != synced:
            logger.debug("%s lock: %s -> %s = %s", self.family.key, source_id, partner_id, synced)
            self._values[partner_id] = synced
            self._controls[partner_id].set_value(synced)

    def update(self) -> CurveSnapshot:
        """Recompute curve and point from the current values and push them."""
        values = self.values
        curve = self.family.compute_curve(self.grid, values)
        x, y = self.family.compute_point(values)

        self.chart.restyle(CURVE_TRACE, y=curve)
        self.chart.restyle(POINT_TRACE, x=[x], y=[y])
        self.chart.relayout({"reference_x": x})

        self.snapshot = CurveSnapshot(values=values, curve=curve, point=(x, y))
        return self.snapshot
