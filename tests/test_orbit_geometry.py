from __future__ import annotations

import math

import pytest

from orbit_geometry import OrbitPoint, generate_orbit_coordinates, position_at, scale_orbit_path


class TestGenerateOrbitCoordinates:
    def test_circular_orbit(self) -> None:
        path = generate_orbit_coordinates(1.0)
        assert len(path) == 100
        assert path[0] == pytest.approx((1.0, 0.0))
        assert all(math.hypot(pt.x, pt.y) == pytest.approx(1.0) for pt in path)

    def test_eccentric_orbit_has_star_at_focus(self) -> None:
        path = generate_orbit_coordinates(2.0, 0.5, point_count=100)
        periapsis, quarter, apoapsis = path[0], path[25], path[50]
        assert periapsis.x == pytest.approx(1.0)
        assert apoapsis.x == pytest.approx(-3.0)
        assert apoapsis.y == pytest.approx(0.0, abs=1e-12)
        assert quarter.x == pytest.approx(-1.0)
        assert quarter.y == pytest.approx(2.0 * math.sqrt(0.75))

    def test_four_point_circle(self) -> None:
        path = generate_orbit_coordinates(1.0, 0, point_count=4)
        expected = [(1.0, 0.0), (0.0, 1.0), (-1.0, 0.0), (0.0, -1.0)]
        for point, (x, y) in zip(path, expected):
            assert point.x == pytest.approx(x, abs=1e-12)
            assert point.y == pytest.approx(y, abs=1e-12)

    def test_point_count(self) -> None:
        assert len(generate_orbit_coordinates(0.3, 0.1, point_count=12)) == 12

    def test_missing_eccentricity_is_circular(self) -> None:
        assert generate_orbit_coordinates(1.5, None) == generate_orbit_coordinates(1.5, 0)

    @pytest.mark.parametrize("semi_major_axis", [None, 0, float("nan")])
    def test_missing_axis_gives_empty_path(self, semi_major_axis) -> None:
        assert generate_orbit_coordinates(semi_major_axis) == ()

    def test_non_positive_point_count(self) -> None:
        assert generate_orbit_coordinates(1.0, 0, point_count=0) == ()

    def test_points_are_plain_floats(self) -> None:
        point = generate_orbit_coordinates(1.0, 0, point_count=4)[1]
        assert isinstance(point, OrbitPoint)
        assert type(point.x) is float


class TestPositionAt:
    PATH = (OrbitPoint(1, 0), OrbitPoint(0, 1), OrbitPoint(-1, 0), OrbitPoint(0, -1))

    @pytest.mark.parametrize(
        "elapsed, index",
        [(0.0, 0), (2.5, 1), (4.9, 1), (5.0, 2), (9.99, 3), (12.5, 1), (-2.5, 3)],
    )
    def test_phase_selects_point(self, elapsed: float, index: int) -> None:
        assert position_at(self.PATH, elapsed, 10.0) == self.PATH[index]

    @pytest.mark.parametrize("period", [None, 0, -3.0])
    def test_unknown_period_stays_at_start(self, period) -> None:
        assert position_at(self.PATH, 7.0, period) == self.PATH[0]

    def test_empty_path(self) -> None:
        assert position_at((), 1.0, 10.0) is None


def test_scale_orbit_path() -> None:
    scaled = scale_orbit_path([OrbitPoint(2.0, -4.0)], 0.5)
    assert scaled == (OrbitPoint(1.0, -2.0),)
