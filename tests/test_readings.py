import pytest

from sensordash import readings
from sensordash.readings import Accepted, DHTReading, RadarSample, Rejected


def test_radar_accepts_and_normalises_integral_angle():
    assert readings.radar({"angle": 45.0, "distance": 12.5}) == \
        Accepted(RadarSample(45, 12.5))
    assert isinstance(readings.radar({"angle": 45.0, "distance": 1}).value.angle, int)


def test_radar_keeps_fractional_angle():
    assert readings.radar({"angle": 22.5, "distance": 3}).value.angle == 22.5


@pytest.mark.parametrize("raw, reason", [
    (None, "absent"),
    ({"distance": 3}, "missing angle"),
    ({"angle": 3}, "missing distance"),
    ({"angle": None, "distance": 3}, "missing angle"),
    ({"angle": "45", "distance": 3}, "angle not numeric"),
    ({"angle": True, "distance": 3}, "angle not numeric"),
])
def test_radar_rejections(raw, reason):
    assert readings.radar(raw) == Rejected(reason)


def test_radar_rejects_non_object():
    assert isinstance(readings.radar([45, 3]), Rejected)


def test_ir():
    assert readings.ir(0) == Accepted(0)
    assert readings.ir(None) == Rejected("absent")
    assert readings.ir("12") == Rejected("ir not numeric")
    assert readings.ir(False) == Rejected("ir not numeric")


def test_dht():
    assert readings.dht({"temperature": 71.6, "humidity": 40}) == \
        Accepted(DHTReading(71.6, 40))
    assert readings.dht({"temperature": 71.6}) == Rejected("missing humidity")
    assert readings.dht(None) == Rejected("absent")


@pytest.mark.parametrize("bad", [float("nan"), float("inf"), float("-inf")])
def test_non_finite_numbers_are_rejected(bad):
    assert readings.radar({"angle": bad, "distance": 5}) == Rejected("angle not numeric")
    assert readings.radar({"angle": 5, "distance": bad}) == Rejected("distance not numeric")
    assert readings.ir(bad) == Rejected("ir not numeric")
    assert readings.dht({"temperature": 70, "humidity": bad}) == \
        Rejected("humidity not numeric")
