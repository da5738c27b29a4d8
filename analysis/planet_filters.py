"""Composite filters over planet collections, as driven by the dashboard filter panel."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from habitability_model import TEMPERATE_BAND, is_temperate
from planet_classification import categorize_planet_type, classify_planet_frame
from planet_records import PlanetRecord, is_present

Range = Tuple[float, float]

# Record attribute checked by each optional range; records lacking the value skip the check.
OPTIONAL_RANGE_FIELDS: Dict[str, str] = {
    "distance_range": "st_dist",
    "temperature_range": "pl_eqt",
    "radius_range": "pl_rade",
}


@dataclass(frozen=True)
class FilterSpec:
    """Filter panel state. Empty sets and None ranges place no restriction."""

    planet_types: FrozenSet[str] = field(default_factory=frozenset)
    discovery_methods: FrozenSet[str] = field(default_factory=frozenset)
    year_range: Optional[Range] = None
    distance_range: Optional[Range] = None
    temperature_range: Optional[Range] = None
    radius_range: Optional[Range] = None
    habitable_only: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "planet_types", frozenset(self.planet_types))
        object.__setattr__(self, "discovery_methods", frozenset(self.discovery_methods))

    @classmethod
    def from_observed(cls, planets: Sequence[PlanetRecord]) -> "FilterSpec":
        """Spec whose numeric ranges span the data, leaving the year range open."""

        ranges = observed_ranges(planets)
        return cls(
            distance_range=ranges["distance_range"],
            temperature_range=ranges["temperature_range"],
            radius_range=ranges["radius_range"],
        )


def _within(value: float, bounds: Range) -> bool:
    low, high = bounds
    return low <= value <= high


def matches_filter(planet: PlanetRecord, spec: FilterSpec) -> bool:
    if spec.planet_types and categorize_planet_type(planet.pl_rade) not in spec.planet_types:
        return False

    if spec.discovery_methods and planet.discoverymethod not in spec.discovery_methods:
        return False

    if spec.year_range is not None:
        if planet.disc_year is None or not _within(planet.disc_year, spec.year_range):
            return False

    for range_name, attribute in OPTIONAL_RANGE_FIELDS.items():
        bounds = getattr(spec, range_name)
        value = getattr(planet, attribute)
        if bounds is not None and is_present(value) and not _within(value, bounds):
            return False

    if spec.habitable_only and not is_temperate(planet):
        return False

    return True


def filter_planets(planets: Iterable[PlanetRecord], spec: Optional[FilterSpec]) -> List[PlanetRecord]:
    """Return the planets matching every active predicate, in their original order."""

    if spec is None:
        return list(planets)
    return [planet for planet in planets if matches_filter(planet, spec)]


def _bounds(values: List[float]) -> Optional[Range]:
    if not values:
        return None
    return (min(values), max(values))


def observed_ranges(planets: Sequence[PlanetRecord]) -> dict:
    """Data-driven slider bounds and the discovery methods present in a collection."""

    def present(attribute: str) -> list:
        return [getattr(p, attribute) for p in planets if is_present(getattr(p, attribute))]

    return {
        "year_range": _bounds(present("disc_year")),
        "distance_range": _bounds(present("st_dist")),
        "temperature_range": _bounds(present("pl_eqt")),
        "radius_range": _bounds(present("pl_rade")),
        "discovery_methods": sorted(set(present("discoverymethod"))),
    }


def filter_planet_frame(df: pd.DataFrame, spec: Optional[FilterSpec]) -> pd.DataFrame:
    """Table version of filter_planets; selects the same rows in the same order."""

    if spec is None:
        return df.copy()

    mask = np.ones(len(df), dtype=bool)

    if spec.planet_types:
        mask &= classify_planet_frame(df).isin(spec.planet_types).to_numpy()

    if spec.discovery_methods:
        mask &= df["discoverymethod"].isin(spec.discovery_methods).to_numpy()

    if spec.year_range is not None:
        years = pd.to_numeric(df["disc_year"], errors="coerce").to_numpy(dtype=float, na_value=np.nan)
        with np.errstate(invalid="ignore"):
            mask &= (years >= spec.year_range[0]) & (years <= spec.year_range[1])

    for range_name, column in OPTIONAL_RANGE_FIELDS.items():
        bounds = getattr(spec, range_name)
        if bounds is None:
            continue
        values = pd.to_numeric(df[column], errors="coerce").to_numpy(dtype=float, na_value=np.nan)
        missing = np.isnan(values) | (values == 0)
        with np.errstate(invalid="ignore"):
            mask &= missing | ((values >= bounds[0]) & (values <= bounds[1]))

    if spec.habitable_only:
        eq_temp = pd.to_numeric(df["pl_eqt"], errors="coerce").to_numpy(dtype=float, na_value=np.nan)
        with np.errstate(invalid="ignore"):
            mask &= (eq_temp >= TEMPERATE_BAND[0]) & (eq_temp <= TEMPERATE_BAND[1])

    return df[mask].copy()
