"""
sensordash.charts
=================

`ChartStore` is the rendering surface the session talks to.  It only ever
receives three commands:

    init_plot(plot_id, series, layout)
    replace_series(plot_id, index, data)      # restyle: merge keys
    set_axis_range(plot_id, axis, (lo, hi))   # relayout

The pygame GUI reads copies of the stored series / layout every frame via
`plot()`.  The poller thread writes, the GUI thread reads, so all access is
under one lock.

The static plot definitions for the three panels live at the bottom of this
module; `init_all()` pushes them into a fresh store.
"""
from __future__ import annotations

import copy
import threading
from typing import Dict, List, Sequence, Tuple

from sensordash import constants as C

RADAR, IR, DHT = "radar-plot", "ir-plot", "dht-plot"


class ChartStore:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._series: Dict[str, List[dict]] = {}
        self._layout: Dict[str, dict] = {}

    # ───────────────────────── sink commands
    def init_plot(self, plot_id: str, series: Sequence[dict], layout: dict) -> None:
        with self._lock:
            self._series[plot_id] = [copy.deepcopy(s) for s in series]
            self._layout[plot_id] = copy.deepcopy(layout)

    def replace_series(self, plot_id: str, index: int, data: dict) -> None:
        with self._lock:
            target = self._series[plot_id][index]
            target.update({k: list(v) for k, v in data.items()})

    def set_axis_range(self, plot_id: str, axis: str,
                       rng: Tuple[float, float]) -> None:
        with self._lock:
            self._layout[plot_id].setdefault(axis, {})["range"] = [rng[0], rng[1]]

    # ───────────────────────── renderer side
    def plot(self, plot_id: str) -> Tuple[List[dict], dict]:
        """Deep copies of (series, layout) safe to use outside the lock."""
        with self._lock:
            return (copy.deepcopy(self._series[plot_id]),
                    copy.deepcopy(self._layout[plot_id]))

    def __contains__(self, plot_id: str) -> bool:
        return plot_id in self._series


# ────────────────────────────────────────────── static plot definitions
RADAR_SERIES = [
    # persistent radar points
    {"r": [], "theta": [], "mode": "markers", "color": C.LIME, "size": 4},
    # sweep line
    {"r": list(C.SWEEP_R), "theta": [0, 0], "mode": "lines",
     "color": C.LIME, "width": 2},
]
RADAR_LAYOUT = {
    "radialaxis":  {"range": [0, C.RADAR_R_MAX], "tick0": 0,
                    "dtick": C.RADAR_R_TICK, "gridcolor": C.GRID},
    "angularaxis": {"range": [0, C.RADAR_A_MAX], "tick0": 0,
                    "dtick": C.RADAR_A_TICK, "gridcolor": C.GRID,
                    "direction": "clockwise", "rotation": 0},
    "bgcolor": C.BLACK,
}

IR_SERIES = [
    {"x": [], "y": [], "mode": "lines", "name": "IR Value", "color": C.RED},
]
IR_LAYOUT = {
    "title": "IR Sensor",
    "xaxis": {"title": f"Last {C.WINDOW_LEN} Readings"},
    "yaxis": {"title": "IR Value"},
}

DHT_SERIES = [
    {"x": [], "y": [], "mode": "lines", "name": "Temp (F)",
     "color": C.GREEN, "yaxis": "yaxis"},
    {"x": [], "y": [], "mode": "lines", "name": "Humidity (%)",
     "color": C.YELLOW, "yaxis": "yaxis2"},
]
DHT_LAYOUT = {
    "title": "DHT Sensor",
    "xaxis":  {"title": f"Last {C.WINDOW_LEN} Readings"},
    "yaxis":  {"title": "Temp (F)", "side": "left"},
    "yaxis2": {"title": "Humidity (%)", "side": "right", "overlaying": "yaxis"},
}


def init_all(sink) -> None:
    sink.init_plot(RADAR, RADAR_SERIES, RADAR_LAYOUT)
    sink.init_plot(IR, IR_SERIES, IR_LAYOUT)
    sink.init_plot(DHT, DHT_SERIES, DHT_LAYOUT)
