"""
sensordash.session
==================

All mutable state of one dashboard run in a single object:

• the board endpoint typed by the user
• the radar aggregate (angle → latest distance)
• the IR sliding window
• the temperature / humidity windows (always the same length)

The session is built once at startup, handed to the poller and the GUI, and
dropped when the window closes.  Only the `update_*` routines touch sensor
state; each one validates its own sub-object and leaves the other sensors
alone when its reading is rejected.
"""
from __future__ import annotations

import logging
import threading
from typing import Optional

from sensordash import charts, readings
from sensordash import constants as C
from sensordash.radar import RadarAggregate
from sensordash.readings import Rejected
from sensordash.window import SlidingWindow

log = logging.getLogger(__name__)


class Session:
    def __init__(self, sink: Optional[charts.ChartStore] = None) -> None:
        self.sink = sink if sink is not None else charts.ChartStore()
        if charts.RADAR not in self.sink:
            charts.init_all(self.sink)

        self._lock = threading.Lock()
        self._endpoint: Optional[str] = None

        self.radar = RadarAggregate()
        self.ir = SlidingWindow(C.WINDOW_LEN)
        self.temp = SlidingWindow(C.WINDOW_LEN)
        self.hum = SlidingWindow(C.WINDOW_LEN)

    # ───────────────────────── endpoint
    @property
    def endpoint(self) -> Optional[str]:
        with self._lock:
            return self._endpoint

    @property
    def url(self) -> Optional[str]:
        ep = self.endpoint
        return f"http://{ep}/" if ep else None

    def set_endpoint(self, raw: str) -> bool:
        """Commit the trimmed *raw* address; blank input keeps the old one."""
        ep = (raw or "").strip()
        if not ep:
            return False
        with self._lock:
            self._endpoint = ep
        log.info("Endpoint set to: %s", ep)
        return True

    # ───────────────────────── dispatch
    def apply(self, payload: dict) -> None:
        """Feed one decoded JSON envelope to the three update routines."""
        self.update_radar(payload.get("radar"))
        self.update_ir(payload.get("ir"))
        self.update_dht(payload.get("dht"))

    @staticmethod
    def _skip(sensor: str, result: Rejected) -> bool:
        if result.reason != "absent":
            log.debug("%s reading skipped: %s", sensor, result.reason)
        return False

    # ───────────────────────── radar
    def update_radar(self, raw) -> bool:
        result = readings.radar(raw)
        if isinstance(result, Rejected):
            return self._skip("radar", result)

        snap = self.radar.record(result.value)
        self.sink.replace_series(charts.RADAR, 0,
                                 {"r": snap.distances, "theta": snap.angles})
        self.sink.replace_series(charts.RADAR, 1, {"theta": snap.sweep})
        return True

    # ───────────────────────── IR
    def update_ir(self, raw) -> bool:
        result = readings.ir(raw)
        if isinstance(result, Rejected):
            return self._skip("ir", result)

        self.ir.push(result.value)
        self.sink.replace_series(charts.IR, 0,
                                 {"x": self.ir.index(), "y": self.ir.values()})
        rng = self.ir.bounds(C.IR_MARGIN)
        if rng is not None:
            self.sink.set_axis_range(charts.IR, "yaxis", rng)
        return True

    # ───────────────────────── DHT
    def update_dht(self, raw) -> bool:
        result = readings.dht(raw)
        if isinstance(result, Rejected):
            return self._skip("dht", result)

        # both windows share a capacity, so they evict in lockstep
        self.temp.push(result.value.temperature)
        self.hum.push(result.value.humidity)

        xs = self.temp.index()
        self.sink.replace_series(charts.DHT, 0, {"x": xs, "y": self.temp.values()})
        self.sink.replace_series(charts.DHT, 1, {"x": xs, "y": self.hum.values()})
        t_rng = self.temp.bounds(C.TEMP_MARGIN)
        if t_rng is not None:
            self.sink.set_axis_range(charts.DHT, "yaxis", t_rng)
            self.sink.set_axis_range(charts.DHT, "yaxis2", self.hum.bounds(C.HUM_MARGIN))
        return True
