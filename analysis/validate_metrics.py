"""Consistency checks for the derived planet metrics over a loaded catalog."""

from __future__ import annotations

import json
import math
from dataclasses import dataclass
from pathlib import Path
from typing import List, Sequence

import numpy as np
import pandas as pd

from catalog_source import load_planets
from habitability_model import calculate_habitability_score, calculate_habitable_zone, score_planet_frame
from orbit_geometry import generate_orbit_coordinates
from planet_classification import PLANET_TYPE_COLORS, categorize_planet_type, classify_planet_frame
from planet_filters import FilterSpec, filter_planet_frame, filter_planets
from planet_records import PlanetRecord, frame_from_records, records_from_frame

ROOT = Path(__file__).resolve().parents[1]
RESULTS_DIR = ROOT / "results"

PARTITION_BOUNDARIES = [0.5, 1.6, 4.0, 10.0]


@dataclass
class ValidationRecord:
    name: str
    status: str
    details: str

    def to_dict(self) -> dict:
        return {"name": self.name, "status": self.status, "details": self.details}


def _status(ok: bool) -> str:
    return "pass" if ok else "fail"


def validate_type_partition(planets: Sequence[PlanetRecord]) -> ValidationRecord:
    labels = {categorize_planet_type(p.pl_rade) for p in planets}
    # Each boundary value belongs to the class above it.
    switches = all(
        categorize_planet_type(b - 1e-9) != categorize_planet_type(b) == categorize_planet_type(b + 1e-9)
        for b in PARTITION_BOUNDARIES
    )
    ok = labels <= set(PLANET_TYPE_COLORS) and switches
    details = f"Labels observed: {sorted(labels)}; boundaries switch at {PARTITION_BOUNDARIES}"
    return ValidationRecord("Planet type partition", _status(ok), details)


def validate_score_bounds(planets: Sequence[PlanetRecord]) -> ValidationRecord:
    scores = [calculate_habitability_score(p) for p in planets]
    ok = all(0 <= s <= 100 for s in scores)
    details = f"{len(scores)} scores between {min(scores, default=0)} and {max(scores, default=0)}"
    return ValidationRecord("Habitability score bounds", _status(ok), details)


def validate_filter_idempotence(planets: Sequence[PlanetRecord], spec: FilterSpec) -> ValidationRecord:
    once = filter_planets(planets, spec)
    twice = filter_planets(once, spec)
    names = [p.pl_name for p in planets]
    positions = [names.index(p.pl_name) for p in once]
    ordered = positions == sorted(positions)
    ok = once == twice and ordered
    details = f"Selected {len(once)} of {len(planets)}; repeat selection {len(twice)}; order preserved={ordered}"
    return ValidationRecord("Filter idempotence and order", _status(ok), details)


def validate_habitable_zones(planets: Sequence[PlanetRecord]) -> ValidationRecord:
    zones = [calculate_habitable_zone(p.st_teff, p.st_rad) for p in planets]
    computed = [z for z in zones if z is not None]
    ok = all(z.inner < z.outer for z in computed)
    details = f"{len(computed)} zones computed; {len(zones) - len(computed)} skipped for missing stellar data"
    return ValidationRecord("Habitable zone ordering", _status(ok), details)


def validate_orbit_paths(planets: Sequence[PlanetRecord], point_count: int = 100) -> ValidationRecord:
    worst = 0.0
    checked = 0
    for planet in planets:
        path = generate_orbit_coordinates(planet.pl_orbsmax, 0, point_count)
        if not path:
            continue
        checked += 1
        if len(path) != point_count:
            return ValidationRecord("Orbit path geometry", "fail", f"{planet.pl_name}: {len(path)} points")
        radii = [math.hypot(pt.x, pt.y) for pt in path]
        worst = max(worst, max(abs(r - planet.pl_orbsmax) / planet.pl_orbsmax for r in radii))
    ok = worst < 1e-9
    details = f"{checked} circular paths checked; worst relative radius error {worst:.2e}"
    return ValidationRecord("Orbit path geometry", _status(ok), details)


def validate_vectorised_agreement(planets: Sequence[PlanetRecord], spec: FilterSpec) -> ValidationRecord:
    frame = frame_from_records(planets)
    scored = score_planet_frame(frame)
    scalar_scores = np.array([calculate_habitability_score(p) for p in planets], dtype=int)
    scalar_types = [categorize_planet_type(p.pl_rade) for p in planets]
    selected = filter_planet_frame(frame, spec)["pl_name"].tolist()
    expected = [p.pl_name for p in filter_planets(planets, spec)]

    mismatched_scores = int((scored["habitability_score"].to_numpy() != scalar_scores).sum())
    mismatched_types = int((classify_planet_frame(frame).to_numpy() != np.array(scalar_types, dtype=object)).sum())
    ok = mismatched_scores == 0 and mismatched_types == 0 and selected == expected
    details = (
        f"Score mismatches: {mismatched_scores}; type mismatches: {mismatched_types}; "
        f"filter selections equal={selected == expected}"
    )
    return ValidationRecord("Table and record agreement", _status(ok), details)


def run_checks(df: pd.DataFrame) -> List[ValidationRecord]:
    planets = records_from_frame(df)
    spec = FilterSpec.from_observed(planets)
    habitable = FilterSpec(habitable_only=True)
    return [
        validate_type_partition(planets),
        validate_score_bounds(planets),
        validate_filter_idempotence(planets, spec),
        validate_filter_idempotence(planets, habitable),
        validate_habitable_zones(planets),
        validate_orbit_paths(planets),
        validate_vectorised_agreement(planets, habitable),
    ]


def export_reports(records: List[ValidationRecord], results_dir: Path = RESULTS_DIR) -> None:
    results_dir.mkdir(parents=True, exist_ok=True)
    data = [rec.to_dict() for rec in records]
    with (results_dir / "validation_report.json").open("w", encoding="utf-8") as fp:
        json.dump({"checks": data}, fp, indent=2, ensure_ascii=False)

    header = ["# Validation report", ""]
    overall = "PASS" if all(rec.status == "pass" for rec in records) else "REVIEW"
    header.append(f"Overall status: **{overall}**")
    header.append("")
    header.append("| Check | Status | Details |")
    header.append("| --- | --- | --- |")
    for rec in records:
        header.append(f"| {rec.name} | {rec.status.upper()} | {rec.details} |")

    (results_dir / "validation_report.md").write_text("\n".join(header), encoding="utf-8")


def main() -> None:
    loaded = load_planets()
    records = run_checks(loaded.frame)
    export_reports(records)

    for rec in records:
        print(f"[{rec.status.upper()}] {rec.name}: {rec.details}")


if __name__ == "__main__":
    main()
