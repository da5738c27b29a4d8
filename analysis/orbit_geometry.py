"""Display geometry for planetary orbits: ellipse paths and position sampling."""

from __future__ import annotations

import math
from typing import NamedTuple, Optional, Sequence, Tuple

import numpy as np

from planet_records import is_present

DEFAULT_POINT_COUNT = 100


class OrbitPoint(NamedTuple):
    x: float
    y: float


OrbitPath = Tuple[OrbitPoint, ...]


def generate_orbit_coordinates(
    semi_major_axis: Optional[float],
    eccentricity: Optional[float] = 0,
    point_count: int = DEFAULT_POINT_COUNT,
) -> OrbitPath:
    """Sample one revolution of an orbit ellipse with the star at the origin.

    The ellipse is centred on (-a*e, 0) so the host star sits at a focus.
    Points are equally spaced in the parametric angle, starting at periapsis
    (a*(1-e), 0). A missing or zero semi-major axis yields an empty path; a
    missing eccentricity means a circular orbit.
    """

    if not is_present(semi_major_axis) or point_count <= 0:
        return ()
    ecc = eccentricity if is_present(eccentricity) else 0.0
    semi_minor_axis = semi_major_axis * math.sqrt(1 - ecc * ecc)

    angles = 2 * np.pi * np.arange(point_count) / point_count
    xs = semi_major_axis * np.cos(angles) - semi_major_axis * ecc
    ys = semi_minor_axis * np.sin(angles)
    return tuple(OrbitPoint(float(x), float(y)) for x, y in zip(xs, ys))


def position_at(path: Sequence[OrbitPoint], elapsed: float, period: Optional[float]) -> Optional[OrbitPoint]:
    """Return the path point reached after ``elapsed`` time units of an orbit lasting ``period``."""

    if not path:
        return None
    if not is_present(period) or period <= 0:
        return path[0]
    phase = (elapsed % period) / period
    index = min(int(math.floor(phase * len(path))), len(path) - 1)
    return path[index]


def scale_orbit_path(path: Sequence[OrbitPoint], factor: float) -> OrbitPath:
    return tuple(OrbitPoint(point.x * factor, point.y * factor) for point in path)
