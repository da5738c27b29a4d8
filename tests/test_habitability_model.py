"""Tests for the habitability score, habitable zone and related diagnostics."""

from __future__ import annotations

import math

import numpy as np
import pandas as pd
import pytest

from habitability_model import (
    HabitableZone,
    calculate_habitability_score,
    calculate_habitable_zone,
    calculate_relative_surface_gravity,
    habitability_color,
    habitability_factors,
    is_in_habitable_zone,
    is_potentially_habitable,
    is_temperate,
    score_category,
    score_planet_frame,
)
from planet_records import PlanetRecord, frame_from_records


def _planet(**values) -> PlanetRecord:
    return PlanetRecord(pl_name="test planet", **values)


class TestHabitabilityScore:
    def test_earth_twin_scores_full_marks(self, earth_twin: PlanetRecord) -> None:
        assert calculate_habitability_score(earth_twin) == 100

    def test_none_scores_zero(self) -> None:
        assert calculate_habitability_score(None) == 0
        assert calculate_habitability_score(_planet()) == 0

    @pytest.mark.parametrize(
        "values, expected",
        [
            ({"pl_eqt": 285.0}, 35),
            ({"pl_eqt": 295.0}, 33),
            ({"pl_eqt": 600.0}, 0),
            ({"st_spectype": "K5V"}, 16),
            ({"st_spectype": "A0V"}, 6),
            ({"st_spectype": "g2v"}, 6),
            ({"st_spectype": " G2V"}, 6),
            ({"st_spectype": "   "}, 6),
            ({"st_spectype": ""}, 0),
            ({"pl_rade": 2.5}, 14),
            ({"pl_bmasse": 5.0}, 4),
            ({"pl_bmasse": 10.0}, 0),
        ],
    )
    def test_single_factor_contributions(self, values: dict, expected: int) -> None:
        assert calculate_habitability_score(_planet(**values)) == expected

    def test_kepler_452b(self, sample_planets) -> None:
        kepler_452 = next(p for p in sample_planets if p.pl_name == "Kepler-452 b")
        # 31.5 + 17.125 + 0 (no mass) + 20
        assert calculate_habitability_score(kepler_452) == 69

    def test_scores_stay_in_bounds(self, sample_planets) -> None:
        assert all(0 <= calculate_habitability_score(p) <= 100 for p in sample_planets)


class TestHabitabilityFactors:
    def test_breakdown_order_and_weights(self, earth_twin: PlanetRecord) -> None:
        factors = habitability_factors(earth_twin)
        assert [f.name for f in factors] == ["Temperature", "Size", "Mass", "Star Type"]
        assert sum(f.weight for f in factors) == pytest.approx(1.0)
        assert all(f.score == pytest.approx(100.0) for f in factors)

    def test_missing_field_has_no_score(self) -> None:
        factors = habitability_factors(_planet(pl_eqt=285.0))
        assert factors[0].contribution == pytest.approx(35.0)
        assert factors[2].score is None
        assert factors[2].contribution == 0.0

    def test_none_planet(self) -> None:
        assert habitability_factors(None) == []


class TestHabitableZone:
    def test_sun(self) -> None:
        zone = calculate_habitable_zone(5772.0, 1.0)
        assert zone.inner == pytest.approx(0.95)
        assert zone.outer == pytest.approx(1.67)

    def test_scales_with_luminosity(self) -> None:
        zone = calculate_habitable_zone(5772.0, 2.0)
        assert zone == HabitableZone(inner=pytest.approx(1.9), outer=pytest.approx(3.34))

    @pytest.mark.parametrize("teff, radius", [(None, 1.0), (5772.0, None), (0, 1.0), (5772.0, float("nan"))])
    def test_missing_stellar_data(self, teff, radius) -> None:
        assert calculate_habitable_zone(teff, radius) is None

    def test_in_zone(self, earth_twin: PlanetRecord) -> None:
        assert is_in_habitable_zone(earth_twin)

    def test_outside_zone(self) -> None:
        assert not is_in_habitable_zone(_planet(st_teff=5772.0, st_rad=1.0, pl_orbsmax=0.5))
        assert not is_in_habitable_zone(_planet(st_teff=5772.0, st_rad=1.0, pl_orbsmax=2.0))

    def test_missing_orbit(self) -> None:
        assert not is_in_habitable_zone(_planet(st_teff=5772.0, st_rad=1.0))
        assert not is_in_habitable_zone(None)


class TestTemperateAndHabitableFlags:
    @pytest.mark.parametrize("eq_temp, expected", [(180.0, True), (310.0, True), (179.9, False), (311.0, False)])
    def test_temperate_band_is_inclusive(self, eq_temp: float, expected: bool) -> None:
        assert is_temperate(_planet(pl_eqt=eq_temp)) is expected

    def test_temperate_needs_temperature(self) -> None:
        assert not is_temperate(_planet())
        assert not is_temperate(None)

    def test_potentially_habitable(self, sample_planets) -> None:
        by_name = {p.pl_name: p for p in sample_planets}
        assert is_potentially_habitable(by_name["Kepler-22 b"])
        assert not is_potentially_habitable(by_name["K2-18 b"])
        assert is_potentially_habitable(by_name["Proxima Cen b"])
        assert is_potentially_habitable(by_name["Teegarden's Star b"])

    def test_missing_radius_does_not_disqualify(self) -> None:
        assert is_potentially_habitable(_planet(pl_eqt=250.0))
        assert not is_potentially_habitable(_planet(pl_eqt=250.0, pl_rade=2.5))
        assert not is_potentially_habitable(_planet(pl_rade=1.0))


class TestDiagnostics:
    def test_surface_gravity(self) -> None:
        assert calculate_relative_surface_gravity(4.0, 2.0) == pytest.approx(1.0)
        assert calculate_relative_surface_gravity(None, 2.0) is None
        assert calculate_relative_surface_gravity(1.0, 0) is None

    @pytest.mark.parametrize(
        "score, label",
        [(100, "Excellent"), (80, "Excellent"), (79, "Good"), (60, "Good"), (40, "Moderate"), (20, "Poor"), (19, "Very Poor"), (0, "Very Poor")],
    )
    def test_score_category(self, score: int, label: str) -> None:
        assert score_category(score) == label

    def test_habitability_color(self) -> None:
        assert habitability_color(85) == "#41AB5D"
        assert habitability_color(5) == "#D73027"


class TestScorePlanetFrame:
    def test_matches_scalar_helpers(self, sample_frame: pd.DataFrame, sample_planets) -> None:
        scored = score_planet_frame(sample_frame)
        assert scored["habitability_score"].tolist() == [calculate_habitability_score(p) for p in sample_planets]
        assert scored["in_habitable_zone"].tolist() == [is_in_habitable_zone(p) for p in sample_planets]
        assert scored["temperate"].tolist() == [is_temperate(p) for p in sample_planets]

    def test_does_not_mutate_input(self, sample_frame: pd.DataFrame) -> None:
        columns = list(sample_frame.columns)
        score_planet_frame(sample_frame)
        assert list(sample_frame.columns) == columns

    def test_surface_gravity_is_nan_when_missing(self, sample_frame: pd.DataFrame) -> None:
        scored = score_planet_frame(sample_frame).set_index("pl_name")
        assert np.isnan(scored.loc["Kepler-452 b", "surface_gravity"])
        assert math.isclose(scored.loc["TRAPPIST-1 f", "surface_gravity"], 1.039 / 1.045**2)

    def test_spectral_letter_is_case_sensitive(self) -> None:
        frame = frame_from_records([_planet(st_spectype=value) for value in ("g2v", "G2V", " G2V", None)])
        scored = score_planet_frame(frame)
        assert scored["habitability_score"].tolist() == [6, 20, 6, 0]
