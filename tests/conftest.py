import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import pytest

from icc_explorer.families import ParamSpec


class RecordingChart:
    """Chart surface that records every call."""

    def __init__(self):
        self.traces = None
        self.layout = None
        self.calls = []

    def create(self, traces, layout):
        self.traces = traces
        self.layout = layout

    def restyle(self, index, x=None, y=None):
        self.calls.append(("restyle", index, x, y))

    def relayout(self, updates):
        self.calls.append(("relayout", dict(updates)))


class RecordingControl:
    def __init__(self, spec: ParamSpec, on_change):
        self.spec = spec
        self.value = spec.default
        self.on_change = on_change

    def set_value(self, value):
        self.value = value

    def move(self, value):
        """Simulate the user dragging the slider."""
        self.value = value
        self.on_change(value)


class RecordingControls:
    def __init__(self):
        self.sliders = {}
        self.toggles = []

    def add_slider(self, spec, on_change):
        control = RecordingControl(spec, on_change)
        self.sliders[spec.id] = control
        return control

    def add_toggle(self, label, on_change):
        self.toggles.append((label, on_change))


@pytest.fixture
def chart():
    return RecordingChart()


@pytest.fixture
def controls():
    return RecordingControls()


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close("all")
