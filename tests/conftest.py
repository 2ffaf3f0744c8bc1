import os

# pygame must never try to open a real display or audio device under test
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pytest

from sensordash.charts import ChartStore


class RecordingStore(ChartStore):
    """ChartStore that also keeps the command log."""

    def __init__(self):
        super().__init__()
        self.calls = []

    def replace_series(self, plot_id, index, data):
        self.calls.append(("replace_series", plot_id, index, data))
        super().replace_series(plot_id, index, data)

    def set_axis_range(self, plot_id, axis, rng):
        self.calls.append(("set_axis_range", plot_id, axis, tuple(rng)))
        super().set_axis_range(plot_id, axis, rng)

    def relayouts(self, plot_id=None):
        return [c for c in self.calls
                if c[0] == "set_axis_range" and plot_id in (None, c[1])]


@pytest.fixture
def store():
    return RecordingStore()
