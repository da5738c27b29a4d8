"""Habitability scoring and habitable-zone tests for individual planets and catalog tables."""

from __future__ import annotations  # Allow postponed evaluation of annotations for compatibility.

import math  # Scalar square roots and rounding for single-record scoring.
from dataclasses import dataclass  # Immutable value objects for zones and factor breakdowns.
from typing import Dict, List, Optional, Union  # Provide explicit type hints for shared helpers.

import numpy as np  # NumPy enables fast vectorised scoring transforms across many planets at once.
import pandas as pd  # Pandas provides the tabular wrangling primitives for catalog-wide scoring.

from planet_records import PlanetRecord, is_present  # Typed records and the shared missing-data rule.

# ---------------------------------------------------------------------------
# Scoring constants
# ---------------------------------------------------------------------------

SOLAR_TEFF = 5772.0  # Nominal solar effective temperature (K) used to scale stellar luminosity.
HZ_INNER_COEFFICIENT = 0.95  # Conservative inner habitable-zone edge (AU) for a solar-luminosity star.
HZ_OUTER_COEFFICIENT = 1.67  # Conservative outer habitable-zone edge (AU) for a solar-luminosity star.
TEMPERATE_BAND = (180.0, 310.0)  # Equilibrium-temperature window (K) used by the quick habitable test.
POTENTIALLY_HABITABLE_MAX_RADIUS = 2.5  # Radius ceiling (Earth radii) for the catalog habitable flag.

IDEAL_EQ_TEMP = 285.0  # Equilibrium temperature (K) that earns a full temperature score.

FACTOR_WEIGHTS: Dict[str, float] = {
    "temperature": 0.35,  # Climate suitability dominates the score.
    "size": 0.25,  # Earth-sized planets can retain atmospheres with suitable gravity.
    "mass": 0.20,  # Rocky or ocean-world masses support surface liquid water.
    "star_type": 0.20,  # Long-lived, quiet hosts favour stable climates.
}  # Weights are never renormalised; a missing factor simply adds nothing.

STAR_TYPE_SCORES: Dict[str, float] = {
    "G": 100.0,  # Sun-like hosts.
    "K": 80.0,  # Orange dwarfs with long lifetimes.
    "F": 60.0,  # Hotter, shorter-lived hosts.
    "M": 50.0,  # Flaring red dwarfs with tidally locked planets.
}
OTHER_STAR_SCORE = 30.0  # Any other spectral class that is present.

SCORE_BANDS = [
    (80, "Excellent", "#41AB5D"),
    (60, "Good", "#74C476"),
    (40, "Moderate", "#FD8D3C"),
    (20, "Poor", "#F16913"),
]  # Lower bounds for score labels and colours, highest first.
LOWEST_BAND = ("Very Poor", "#D73027")

Planet = Union[PlanetRecord, None]


@dataclass(frozen=True)
class HabitableZone:
    inner: float  # AU
    outer: float  # AU


@dataclass(frozen=True)
class HabitabilityFactor:
    name: str
    value: Optional[Union[float, str]]
    score: Optional[float]
    weight: float
    ideal: str
    description: str

    @property
    def contribution(self) -> float:
        return 0.0 if self.score is None else self.score * self.weight


# ---------------------------------------------------------------------------
# Factor scores
# ---------------------------------------------------------------------------

def temperature_score(eq_temp: float) -> float:
    """Full marks at 285 K, losing one point per 2 K of deviation."""

    return 100 - min(100.0, abs(eq_temp - IDEAL_EQ_TEMP) / 2)


def size_score(radius: float) -> float:
    """Steep penalty inside the 0.5-2.0 Earth-radius window, gentler and floored outside it."""

    if 0.5 <= radius <= 2.0:
        return 100 - abs(radius - 1) * 50
    return max(0.0, 100 - abs(radius - 1) * 30)


def mass_score(mass: float) -> float:
    """Penalise distance from one Earth mass, more gently outside 0.5-5.0 Earth masses."""

    if 0.5 <= mass <= 5.0:
        return 100 - abs(mass - 1) * 20
    return max(0.0, 100 - abs(mass - 1) * 15)


def has_spectral_type(spectral_type: Optional[str]) -> bool:
    """Any non-empty string counts as a reported spectral type, even whitespace."""

    return isinstance(spectral_type, str) and spectral_type != ""


def star_type_score(spectral_type: str) -> float:
    """Match the leading class letter as given; lower-case or padded types score as other classes."""

    return STAR_TYPE_SCORES.get(spectral_type[:1], OTHER_STAR_SCORE)


def habitability_factors(planet: Planet) -> List[HabitabilityFactor]:
    """Break the habitability score into its four weighted factors."""

    if planet is None:
        return []
    eq_temp, radius, mass, spectral = planet.pl_eqt, planet.pl_rade, planet.pl_bmasse, planet.st_spectype
    return [
        HabitabilityFactor(
            name="Temperature",
            value=eq_temp,
            score=temperature_score(eq_temp) if is_present(eq_temp) else None,
            weight=FACTOR_WEIGHTS["temperature"],
            ideal="285K",
            description="Earth-like temperatures (260K-310K) are ideal",
        ),
        HabitabilityFactor(
            name="Size",
            value=radius,
            score=size_score(radius) if is_present(radius) else None,
            weight=FACTOR_WEIGHTS["size"],
            ideal="1.0 Earth radii",
            description="Planets 0.5-2.0 Earth radii can retain atmospheres and have suitable gravity",
        ),
        HabitabilityFactor(
            name="Mass",
            value=mass,
            score=mass_score(mass) if is_present(mass) else None,
            weight=FACTOR_WEIGHTS["mass"],
            ideal="1.0 Earth masses",
            description="Planets 0.5-5.0 Earth masses support surface liquid water",
        ),
        HabitabilityFactor(
            name="Star Type",
            value=spectral,
            score=star_type_score(spectral) if has_spectral_type(spectral) else None,
            weight=FACTOR_WEIGHTS["star_type"],
            ideal="G-type",
            description="G-type stars like our Sun are most favorable for life",
        ),
    ]


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def calculate_habitability_score(planet: Planet) -> int:
    """Return the 0-100 habitability score; absent fields contribute zero to their factor."""

    total = 0.0
    for factor in habitability_factors(planet):
        total += factor.contribution  # Summed in a fixed order so vectorised scoring matches exactly.
    return _round_half_up(total)


# ---------------------------------------------------------------------------
# Habitable zone and physical diagnostics
# ---------------------------------------------------------------------------

def calculate_habitable_zone(st_teff: Optional[float], st_rad: Optional[float]) -> Optional[HabitableZone]:
    """Conservative habitable-zone edges from the Stefan-Boltzmann relative luminosity."""

    if not is_present(st_teff) or not is_present(st_rad):
        return None
    luminosity = st_rad * st_rad * (st_teff / SOLAR_TEFF) ** 4  # Luminosity relative to the Sun.
    root = math.sqrt(luminosity)
    return HabitableZone(inner=HZ_INNER_COEFFICIENT * root, outer=HZ_OUTER_COEFFICIENT * root)


def is_in_habitable_zone(planet: Planet) -> bool:
    """Strict test: the semi-major axis lies inside the star's computed habitable zone."""

    if planet is None or not is_present(planet.pl_orbsmax):
        return False
    zone = calculate_habitable_zone(planet.st_teff, planet.st_rad)
    if zone is None:
        return False
    return zone.inner <= planet.pl_orbsmax <= zone.outer


def is_temperate(planet: Planet) -> bool:
    """Quick test on equilibrium temperature alone; this is what the filter panel uses."""

    if planet is None or not is_present(planet.pl_eqt):
        return False
    low, high = TEMPERATE_BAND
    return low <= planet.pl_eqt <= high


def is_potentially_habitable(planet: Planet) -> bool:
    """Flag attached to live catalog rows: temperate and not known to exceed 2.5 Earth radii."""

    if not is_temperate(planet):
        return False
    if not is_present(planet.pl_rade):
        return True  # An unmeasured radius does not disqualify a temperate planet.
    return planet.pl_rade < POTENTIALLY_HABITABLE_MAX_RADIUS


def calculate_relative_surface_gravity(mass_earth: Optional[float], radius_earth: Optional[float]) -> Optional[float]:
    """Surface gravity relative to Earth, g = M / R^2 in Earth units."""

    if not is_present(mass_earth) or not is_present(radius_earth):
        return None
    return mass_earth / (radius_earth * radius_earth)


def score_category(score: float) -> str:
    for lower, label, _ in SCORE_BANDS:
        if score >= lower:
            return label
    return LOWEST_BAND[0]


def habitability_color(score: float) -> str:
    for lower, _, color in SCORE_BANDS:
        if score >= lower:
            return color
    return LOWEST_BAND[1]


# ---------------------------------------------------------------------------
# Catalog-wide scoring
# ---------------------------------------------------------------------------

def _numeric(df: pd.DataFrame, column: str) -> np.ndarray:
    """Return a float array where missing and zero entries are NaN."""

    array = pd.to_numeric(df[column], errors="coerce").to_numpy(dtype=float, na_value=np.nan)  # Coerce blanks to NaN.
    return np.where(array == 0, np.nan, array)  # Zero is treated as missing, like the scalar helpers.


def score_planet_frame(df: pd.DataFrame) -> pd.DataFrame:
    """Attach habitability diagnostics to every row of a catalog table."""

    data = df.copy()  # Work on a copy to preserve the caller's DataFrame.

    eq_temp = _numeric(data, "pl_eqt")
    radius = _numeric(data, "pl_rade")
    mass = _numeric(data, "pl_bmasse")

    temp_term = 100 - np.minimum(100.0, np.abs(eq_temp - IDEAL_EQ_TEMP) / 2)
    size_term = np.where(
        (radius >= 0.5) & (radius <= 2.0),
        100 - np.abs(radius - 1) * 50,
        np.maximum(0.0, 100 - np.abs(radius - 1) * 30),
    )  # Same piecewise rule as size_score.
    mass_term = np.where(
        (mass >= 0.5) & (mass <= 5.0),
        100 - np.abs(mass - 1) * 20,
        np.maximum(0.0, 100 - np.abs(mass - 1) * 15),
    )  # Same piecewise rule as mass_score.

    spectral = data["st_spectype"].where(data["st_spectype"].notna(), "").astype(str)
    star_term = spectral.str[:1].map(STAR_TYPE_SCORES).fillna(OTHER_STAR_SCORE).to_numpy(dtype=float)
    star_term = np.where(spectral.to_numpy() == "", np.nan, star_term)  # Absent spectral type skips the term.

    total = np.zeros(len(data))
    for term, weight in zip(
        (temp_term, size_term, mass_term, star_term),
        (FACTOR_WEIGHTS["temperature"], FACTOR_WEIGHTS["size"], FACTOR_WEIGHTS["mass"], FACTOR_WEIGHTS["star_type"]),
    ):
        total = total + np.nan_to_num(term * weight, nan=0.0)  # Missing factors add exactly zero.
    data["habitability_score"] = np.floor(total + 0.5).astype(int)

    teff = _numeric(data, "st_teff")
    star_radius = _numeric(data, "st_rad")
    semi_major = _numeric(data, "pl_orbsmax")
    root_luminosity = np.sqrt(star_radius * star_radius * (teff / SOLAR_TEFF) ** 4)
    inner = HZ_INNER_COEFFICIENT * root_luminosity
    outer = HZ_OUTER_COEFFICIENT * root_luminosity
    with np.errstate(invalid="ignore"):  # NaN comparisons are expected for incomplete rows.
        data["in_habitable_zone"] = (semi_major >= inner) & (semi_major <= outer)
        data["temperate"] = (eq_temp >= TEMPERATE_BAND[0]) & (eq_temp <= TEMPERATE_BAND[1])

    data["surface_gravity"] = mass / (radius * radius)  # NaN when either input is missing.

    return data
