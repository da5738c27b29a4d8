"""Tests for the filter panel predicates over records and tables."""

from __future__ import annotations

import pandas as pd
import pytest

from planet_filters import FilterSpec, filter_planet_frame, filter_planets, matches_filter, observed_ranges
from planet_records import PlanetRecord, frame_from_records


def _names(planets) -> list:
    return [p.pl_name for p in planets]


class TestFilterSpec:
    def test_sets_are_frozen(self) -> None:
        spec = FilterSpec(planet_types={"Gas Giant"}, discovery_methods=["Transit"])
        assert spec.planet_types == frozenset({"Gas Giant"})
        assert isinstance(spec.discovery_methods, frozenset)

    def test_default_spec_matches_everything(self, sample_planets) -> None:
        assert filter_planets(sample_planets, FilterSpec()) == sample_planets

    def test_from_observed_keeps_every_planet(self, sample_planets) -> None:
        spec = FilterSpec.from_observed(sample_planets)
        assert spec.year_range is None
        assert filter_planets(sample_planets, spec) == sample_planets


class TestFilterPlanets:
    def test_none_spec_returns_copy(self, sample_planets) -> None:
        result = filter_planets(sample_planets, None)
        assert result == sample_planets
        assert result is not sample_planets

    def test_planet_types(self, sample_planets) -> None:
        result = filter_planets(sample_planets, FilterSpec(planet_types={"Gas Giant"}))
        assert _names(result) == [
            "HD 209458 b",
            "WASP-12 b",
            "HD 189733 b",
            "HR 8799 b",
            "HR 8799 c",
            "HR 8799 d",
            "HR 8799 e",
        ]

    def test_discovery_methods(self, sample_planets) -> None:
        result = filter_planets(sample_planets, FilterSpec(discovery_methods={"Imaging"}))
        assert _names(result) == ["HR 8799 b", "HR 8799 c", "HR 8799 d", "HR 8799 e"]

    def test_year_range_is_inclusive(self, sample_planets) -> None:
        result = filter_planets(sample_planets, FilterSpec(year_range=(2016, 2017)))
        assert _names(result) == [
            "TRAPPIST-1 d",
            "TRAPPIST-1 e",
            "TRAPPIST-1 f",
            "TRAPPIST-1 g",
            "Proxima Cen b",
            "LHS 1140 b",
        ]

    def test_year_range_excludes_missing_year(self) -> None:
        planets = [PlanetRecord(pl_name="dated", disc_year=2015), PlanetRecord(pl_name="undated")]
        assert _names(filter_planets(planets, FilterSpec(year_range=(2000, 2020)))) == ["dated"]
        assert _names(filter_planets(planets, FilterSpec())) == ["dated", "undated"]

    def test_radius_range_keeps_missing_radius(self, sample_planets) -> None:
        result = filter_planets(sample_planets, FilterSpec(radius_range=(0.5, 1.2)))
        assert _names(result) == [
            "Kepler-186 f",
            "TRAPPIST-1 d",
            "TRAPPIST-1 e",
            "TRAPPIST-1 f",
            "TRAPPIST-1 g",
            "Proxima Cen b",
            "TOI-700 d",
            "Teegarden's Star b",
            "51 Peg b",
            "OGLE-2005-BLG-390L b",
            "PSR B1257+12 c",
        ]

    def test_habitable_only(self, sample_planets) -> None:
        result = filter_planets(sample_planets, FilterSpec(habitable_only=True))
        assert len(result) == 14
        assert all(180 <= p.pl_eqt <= 310 for p in result)

    def test_habitable_only_by_temperature(self) -> None:
        planets = [PlanetRecord(pl_name="cool", pl_eqt=200.0), PlanetRecord(pl_name="hot", pl_eqt=400.0)]
        assert _names(filter_planets(planets, FilterSpec(habitable_only=True))) == ["cool"]

    def test_predicates_combine(self, sample_planets) -> None:
        spec = FilterSpec(planet_types={"Earth-like"}, habitable_only=True)
        assert _names(filter_planets(sample_planets, spec)) == [
            "Kepler-186 f",
            "Kepler-62 f",
            "Kepler-442 b",
            "TRAPPIST-1 d",
            "TRAPPIST-1 e",
            "TRAPPIST-1 f",
            "TRAPPIST-1 g",
            "TOI-700 d",
        ]

    def test_filtering_is_idempotent(self, sample_planets) -> None:
        spec = FilterSpec(discovery_methods={"Transit"}, temperature_range=(150, 700))
        once = filter_planets(sample_planets, spec)
        assert filter_planets(once, spec) == once

    def test_inverted_range_matches_nothing_measured(self) -> None:
        planets = [PlanetRecord(pl_name="measured", pl_eqt=250.0), PlanetRecord(pl_name="unmeasured")]
        assert _names(filter_planets(planets, FilterSpec(temperature_range=(300, 200)))) == ["unmeasured"]
        assert filter_planets([PlanetRecord(pl_name="dated", disc_year=2015)], FilterSpec(year_range=(2020, 2010))) == []

    def test_missing_method_fails_method_filter(self) -> None:
        planets = [PlanetRecord(pl_name="transit", discoverymethod="Transit"), PlanetRecord(pl_name="unlabelled")]
        spec = FilterSpec(discovery_methods={"Transit"})
        assert _names(filter_planets(planets, spec)) == ["transit"]
        assert filter_planet_frame(frame_from_records(planets), spec)["pl_name"].tolist() == ["transit"]
        assert _names(filter_planets(planets, FilterSpec())) == ["transit", "unlabelled"]

    def test_matches_filter_on_single_record(self, earth_twin: PlanetRecord) -> None:
        assert matches_filter(earth_twin, FilterSpec(planet_types={"Earth-like"}, habitable_only=True))
        assert not matches_filter(earth_twin, FilterSpec(temperature_range=(300, 400)))


class TestObservedRanges:
    def test_sample_ranges(self, sample_planets) -> None:
        ranges = observed_ranges(sample_planets)
        assert ranges["year_range"] == (1992, 2020)
        assert ranges["radius_range"] == pytest.approx((0.788, 21.3))
        assert ranges["temperature_range"] == pytest.approx((188.0, 2580.0))
        assert ranges["distance_range"] == pytest.approx((1.3, 6500.0))
        assert ranges["discovery_methods"] == [
            "Imaging",
            "Microlensing",
            "Pulsar Timing",
            "Radial Velocity",
            "Transit",
            "Transit Timing Variations",
        ]

    def test_empty_collection(self) -> None:
        ranges = observed_ranges([])
        assert ranges["year_range"] is None
        assert ranges["discovery_methods"] == []


class TestFilterPlanetFrame:
    @pytest.mark.parametrize(
        "spec",
        [
            FilterSpec(),
            FilterSpec(planet_types={"Earth-like", "Sub-Earth"}),
            FilterSpec(discovery_methods={"Radial Velocity"}, year_range=(2000, 2020)),
            FilterSpec(radius_range=(1.0, 3.0), distance_range=(10.0, 200.0)),
            FilterSpec(habitable_only=True, temperature_range=(200, 260)),
            FilterSpec(temperature_range=(300, 200)),
        ],
    )
    def test_selects_same_rows_as_records(self, sample_frame: pd.DataFrame, sample_planets, spec: FilterSpec) -> None:
        selected = filter_planet_frame(sample_frame, spec)
        assert selected["pl_name"].tolist() == _names(filter_planets(sample_planets, spec))

    def test_none_spec_copies(self, sample_frame: pd.DataFrame) -> None:
        copy = filter_planet_frame(sample_frame, None)
        assert copy.equals(sample_frame)
        assert copy is not sample_frame
