"""
sensordash.readings
===================

One validation step per sensor.  Each helper takes the raw sub-object taken
from the JSON envelope and returns either

    Accepted(value)     – a typed reading ready for the update routine
    Rejected(reason)    – why the reading was skipped

so every update routine handles bad input the same way.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True)
class RadarSample:
    angle: Union[int, float]      # degrees
    distance: float


@dataclass(frozen=True)
class DHTReading:
    temperature: float
    humidity: float


@dataclass(frozen=True)
class Accepted:
    value: Any


@dataclass(frozen=True)
class Rejected:
    reason: str


Result = Union[Accepted, Rejected]


def _number(v) -> bool:
    # bool is an int subclass; JSON true/false is not a reading.
    # NaN / Infinity slip through json.loads but are not readings either
    return (isinstance(v, (int, float)) and not isinstance(v, bool)
            and math.isfinite(v))


def _fields(raw, *names: str) -> Union[tuple, Rejected]:
    if raw is None:
        return Rejected("absent")
    if not isinstance(raw, dict):
        return Rejected(f"expected an object, got {type(raw).__name__}")
    out = []
    for name in names:
        v = raw.get(name)
        if v is None:
            return Rejected(f"missing {name}")
        if not _number(v):
            return Rejected(f"{name} not numeric")
        out.append(v)
    return tuple(out)


def radar(raw) -> Result:
    got = _fields(raw, "angle", "distance")
    if isinstance(got, Rejected):
        return got
    angle, distance = got
    if isinstance(angle, float) and angle.is_integer():
        angle = int(angle)                 # 45.0 and 45 share one key
    return Accepted(RadarSample(angle, distance))


def ir(raw) -> Result:
    if raw is None:
        return Rejected("absent")
    if not _number(raw):
        return Rejected("ir not numeric")
    return Accepted(raw)


def dht(raw) -> Result:
    got = _fields(raw, "temperature", "humidity")
    if isinstance(got, Rejected):
        return got
    return Accepted(DHTReading(*got))
