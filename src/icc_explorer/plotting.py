"""Matplotlib surfaces for the ICC explorer."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Mapping, Optional, Sequence

import matplotlib.pyplot as plt
import numpy as np
import seaborn as sns
from matplotlib.axes import Axes
from matplotlib.figure import Figure
from matplotlib.lines import Line2D
from matplotlib.mathtext import MathTextParser
from matplotlib.text import Text
from matplotlib.widgets import CheckButtons, Slider

from .binding import ChartLayout, CurveBinding, Trace
from .config import ExplorerConfig
from .families import ModelFamily, ParamSpec
from .model import THETA_GRID

logger = logging.getLogger(__name__)


class MatplotlibChart:
    """Chart surface drawing traces on a single axes."""

    def __init__(self, ax: Axes, palette: str = "Set2", marker_size: float = 10.0):
        self.ax = ax
        self.palette = palette
        self.marker_size = marker_size
        self.lines: List[Line2D] = []
        self.reference_line: Optional[Line2D] = None

    def create(self, traces: List[Trace], layout: ChartLayout) -> None:
        colors = sns.color_palette(self.palette, n_colors=len(traces))
        for trace, color in zip(traces, colors):
            if trace.mode == "markers":
                (line,) = self.ax.plot(
                    trace.x, trace.y, "o",
                    color=color, markersize=self.marker_size, label=trace.name, zorder=3,
                )
            else:
                (line,) = self.ax.plot(trace.x, trace.y, color=color, linewidth=2, label=trace.name)
            self.lines.append(line)

        # Vertical reference line at the selected ability
        self.reference_line = self.ax.axvline(
            layout.reference_x, color="gray", linestyle=":", linewidth=1.5,
        )

        self.ax.set_title(layout.title, fontsize=14)
        self.ax.set_xlabel(layout.xlabel, fontsize=12)
        self.ax.set_ylabel(layout.ylabel, fontsize=12)
        self.ax.set_xlim(layout.xlim)
        self.ax.set_ylim(layout.ylim)
        self.ax.legend(loc="lower right", fontsize=10)

    def restyle(
        self,
        index: int,
        x: Optional[Sequence[float]] = None,
        y: Optional[Sequence[float]] = None,
    ) -> None:
        line = self.lines[index]
        if x is not None:
            line.set_xdata(x)
        if y is not None:
            line.set_ydata(y)
        self._redraw()

    def relayout(self, updates: Mapping[str, float]) -> None:
        for key, value in updates.items():
            if key != "reference_x":
                raise ValueError(f"Unsupported layout property: {key}")
            self.reference_line.set_xdata([value, value])
        self._redraw()

    def _redraw(self) -> None:
        self.ax.figure.canvas.draw_idle()


class SliderControl:
    """Handle on a slider that can be moved without firing its callbacks."""

    def __init__(self, slider: Slider):
        self.slider = slider

    def set_value(self, value: float) -> None:
        eventson = self.slider.eventson
        self.slider.eventson = False
        try:
            self.slider.set_val(value)
        finally:
            self.slider.eventson = eventson


class MatplotlibControls:
    """Controls surface stacking widgets top-down in a figure.

    Widgets are kept on the instance; matplotlib widgets stop responding once
    they are garbage collected.
    """

    def __init__(
        self,
        fig: Figure,
        left: float = 0.32,
        top: float = 0.33,
        width: float = 0.5,
        row_height: float = 0.045,
    ):
        self.fig = fig
        self.left = left
        self.top = top
        self.width = width
        self.row_height = row_height
        self.sliders: List[Slider] = []
        self.toggles: List[CheckButtons] = []
        self._rows = 0

    def _next_axes(self, left: float, width: float, fill: float) -> Axes:
        self._rows += 1
        bottom = self.top - self._rows * self.row_height
        return self.fig.add_axes([left, bottom, width, self.row_height * fill])

    def add_slider(self, spec: ParamSpec, on_change: Callable[[float], None]) -> SliderControl:
        ax = self._next_axes(self.left, self.width, fill=0.6)
        slider = Slider(
            ax,
            spec.label,
            spec.min,
            spec.max,
            valinit=spec.default,
            valstep=spec.step,
            valfmt=f"%.{spec.decimals}f",
        )
        slider.on_changed(on_change)
        self.sliders.append(slider)
        return SliderControl(slider)

    def add_toggle(self, label: str, on_change: Callable[[bool], None]) -> None:
        ax = self._next_axes(0.05, 0.3, fill=0.9)
        ax.set_frame_on(False)
        check = CheckButtons(ax, [label], [False])
        check.on_clicked(lambda _label: on_change(check.get_status()[0]))
        self.toggles.append(check)


def render_equation(ax: Axes, tex: str, fontsize: int = 13) -> Text:
    """Render a formula centred in ``ax``, falling back to the raw text.

    Args:
        ax: Axes reserved for the formula; its frame and ticks are hidden.
        tex: Mathtext source without the surrounding dollar signs.
        fontsize: Font size.

    Returns:
        The created text artist.
    """
    text = f"${tex}$"
    try:
        MathTextParser("path").parse(text)
    except ValueError:
        logger.warning("Could not render equation %r, showing raw text", tex)
        text = tex

    ax.axis("off")
    return ax.text(0.5, 0.5, text, ha="center", va="center", fontsize=fontsize, transform=ax.transAxes)


@dataclass
class Explorer:
    """One interactive figure for one model family."""

    figure: Figure
    binding: CurveBinding
    chart: MatplotlibChart
    controls: MatplotlibControls
    equation: Text


def build_explorer(
    family: ModelFamily,
    grid: np.ndarray = THETA_GRID,
    config: Optional[ExplorerConfig] = None,
) -> Explorer:
    """Build the figure, widgets and binding for one model family.

    Args:
        family: Model family record.
        grid: Shared ability grid.
        config: Explorer configuration (defaults when omitted).

    Returns:
        The assembled explorer. Keep a reference to it while the window is open.
    """
    config = config or ExplorerConfig()
    sns.set_style("whitegrid")

    fig = plt.figure(figsize=config.figsize)
    curve_ax = fig.add_axes([0.1, 0.47, 0.85, 0.46])
    equation_ax = fig.add_axes([0.1, 0.36, 0.85, 0.05])

    chart = MatplotlibChart(curve_ax, palette=config.palette, marker_size=config.marker_size)
    controls = MatplotlibControls(fig)
    binding = CurveBinding(chart, controls, family, grid, lock_label=config.lock_label)
    equation = render_equation(equation_ax, family.equation)

    return Explorer(figure=fig, binding=binding, chart=chart, controls=controls, equation=equation)


def save_explorer(explorer: Explorer, output_path: Path, dpi: int = 150) -> None:
    """Save the current state of an explorer figure.

    Args:
        explorer: Explorer to save.
        output_path: Path to save the plot.
        dpi: Output DPI.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    explorer.figure.savefig(output_path, dpi=dpi, bbox_inches="tight", facecolor="white")
