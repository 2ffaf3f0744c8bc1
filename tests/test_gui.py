import pytest

from sensordash.gui import DashboardGUI


@pytest.mark.parametrize("angle, expected", [
    (0, (0, 100)),        # left
    (90, (100, 0)),       # top
    (180, (200, 100)),    # right
])
def test_polar_half_disc(angle, expected):
    x, y = DashboardGUI._polar(100, 100, 100, angle, 100)
    assert x == pytest.approx(expected[0], abs=1e-6)
    assert y == pytest.approx(expected[1], abs=1e-6)


def test_polar_scales_distance():
    x, y = DashboardGUI._polar(0, 0, 200, 0, 50)
    assert x == pytest.approx(-100)


def test_y_range_prefers_layout_range():
    assert DashboardGUI._y_range({"yaxis": {"range": [5, 26]}}, "yaxis", [1, 2]) == (5, 26)


def test_y_range_autoscale_and_flat():
    assert DashboardGUI._y_range({}, "yaxis", [3, 9]) == (3, 9)
    assert DashboardGUI._y_range({}, "yaxis", [4]) == (3, 5)
    assert DashboardGUI._y_range({}, "yaxis", []) == (0.0, 1.0)
