"""
sensordash.radar
================

Book-keeping for the rotating radar.

The sensor reports one (angle, distance) pair per poll.  `RadarAggregate`
keeps the most recent distance for every angle ever seen, so the plot fills
in as the head sweeps and a repeated angle simply replaces its old echo.
Nothing is ever evicted; the aggregate lives as long as the session.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple, Union

from sensordash.readings import RadarSample

Angle = Union[int, float]


@dataclass(frozen=True)
class RadarSnapshot:
    """Point cloud in ascending angle order plus the current sweep line."""
    angles: Tuple[Angle, ...]
    distances: Tuple[float, ...]
    sweep: Optional[Tuple[Angle, Angle]]   # theta of both sweep-line ends


class RadarAggregate:
    def __init__(self) -> None:
        self._echo: Dict[Angle, float] = {}      # angle → latest distance
        self._last: Optional[Angle] = None

    # ───────────────────────────────────────────────────── public API
    def record(self, sample: RadarSample) -> RadarSnapshot:
        """Store *sample* (last write wins) and return the fresh snapshot."""
        self._echo[sample.angle] = sample.distance
        self._last = sample.angle
        return self.snapshot()

    def snapshot(self) -> RadarSnapshot:
        angles = tuple(sorted(self._echo))
        sweep = None if self._last is None else (self._last, self._last)
        return RadarSnapshot(angles=angles,
                             distances=tuple(self._echo[a] for a in angles),
                             sweep=sweep)

    def __len__(self) -> int:
        return len(self._echo)

    def __contains__(self, angle) -> bool:
        return angle in self._echo
