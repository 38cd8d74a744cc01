import pytest

from orbit.geometry import (
    ORIGIN,
    Point,
    PolarCoord,
    ViewTransform,
    normalize_angle,
    satellite_positions,
    to_cartesian,
    to_polar,
    zoom_in,
    zoom_out,
)


def _angle_distance(a, b):
    d = abs(a - b) % 360
    return min(d, 360 - d)


def test_origin_is_canvas_center():
    assert ORIGIN == Point(500, 400)


def test_to_cartesian_concrete_points():
    origin = Point(500, 400)
    east = to_cartesian(origin, 0, 100)
    south = to_cartesian(origin, 90, 100)
    assert east.x == pytest.approx(600)
    assert east.y == pytest.approx(400)
    # Screen y grows downward, so 90 degrees points down
    assert south.x == pytest.approx(500)
    assert south.y == pytest.approx(500)


def test_to_polar_concrete_inverse():
    polar = to_polar(Point(500, 400), Point(500, 500))
    assert polar.angle == pytest.approx(90)
    assert polar.radius == pytest.approx(100)
    assert polar.rounded() == PolarCoord(90, 100)


def test_to_polar_point_above_origin_is_270_not_negative():
    polar = to_polar(Point(500, 400), Point(500, 300))
    assert polar.angle == pytest.approx(270)
    assert polar.angle >= 0


def test_to_polar_never_negative():
    origin = Point(0, 0)
    for x in (-3, -1, 0, 1, 3):
        for y in (-3, -1, 0, 1, 3):
            angle = to_polar(origin, Point(x, y)).angle
            assert 0 <= angle < 360


def test_to_polar_at_origin_has_zero_radius():
    polar = to_polar(ORIGIN, ORIGIN)
    assert polar.radius == 0
    assert polar.angle == 0


def test_round_trip_within_one_unit():
    for angle in range(0, 360, 7):
        for radius in (1, 37.5, 200, 499.4):
            back = to_polar(ORIGIN, to_cartesian(ORIGIN, angle, radius)).rounded()
            assert abs(back.radius - radius) <= 1
            assert _angle_distance(back.angle, angle) <= 1


def test_rounded_wraps_360_to_zero():
    snapped = PolarCoord(359.6, 10.4).rounded()
    assert snapped.angle == 0
    assert snapped.radius == 10


def test_rounded_is_half_up():
    assert PolarCoord(10.5, 2.5).rounded() == PolarCoord(11, 3)


def test_normalize_angle():
    assert normalize_angle(-90) == 270
    assert normalize_angle(720) == 0
    assert normalize_angle(360) == 0
    assert normalize_angle(45.5) == 45.5
    # Tiny negatives must not come back as 360
    assert normalize_angle(-1e-20) == 0


class TestSatellites:

    def test_no_tools_no_satellites(self):
        assert satellite_positions(Point(10, 10), 0) == []

    def test_even_spacing(self):
        sats = satellite_positions(Point(100, 100), 4, orbit=45)
        assert len(sats) == 4
        assert sats[0].x == pytest.approx(145)
        assert sats[0].y == pytest.approx(100)
        assert sats[1].x == pytest.approx(100)
        assert sats[1].y == pytest.approx(145)
        assert sats[2].x == pytest.approx(55)


class TestViewTransform:

    def test_identity(self):
        t = ViewTransform()
        assert t.to_canvas(Point(12, 34)) == Point(12, 34)

    def test_zoom_is_undone(self):
        t = ViewTransform(scale=2)
        p = t.to_canvas(Point(1200, 1000))
        assert p.x == pytest.approx(600)
        assert p.y == pytest.approx(500)

    def test_screen_canvas_inverse(self):
        t = ViewTransform.zoomed(1.7, about=Point(500, 400))
        p = Point(123.0, 456.0)
        back = t.to_canvas(t.to_screen(p))
        assert back.x == pytest.approx(p.x)
        assert back.y == pytest.approx(p.y)

    def test_zoom_about_point_keeps_it_fixed(self):
        t = ViewTransform.zoomed(3, about=Point(500, 400))
        fixed = t.to_screen(Point(500, 400))
        assert fixed.x == pytest.approx(500)
        assert fixed.y == pytest.approx(400)

    def test_fit_letterboxes_wide_viewport(self):
        t = ViewTransform.fit(2000, 800)
        assert t.scale == pytest.approx(1)
        assert t.offset_x == pytest.approx(500)
        assert t.offset_y == pytest.approx(0)
        center = t.to_canvas(Point(1000, 400))
        assert center.x == pytest.approx(500)
        assert center.y == pytest.approx(400)

    def test_fit_zoom_keeps_viewport_center_on_canvas_center(self):
        t = ViewTransform.fit(2000, 800, zoom=2)
        assert t.scale == pytest.approx(2)
        center = t.to_canvas(Point(1000, 400))
        assert center.x == pytest.approx(500)
        assert center.y == pytest.approx(400)


def test_zoom_steps():
    assert zoom_in(1.0) == pytest.approx(1.1)
    assert zoom_out(1.0) == pytest.approx(0.9)
    assert zoom_out(0.6) == pytest.approx(0.5)
    assert zoom_out(0.5) == pytest.approx(0.5)
