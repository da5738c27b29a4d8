"""Construct the interactive Plotly dashboard for exploring the exoplanet collection."""

from __future__ import annotations  # Ensure future-compatible typing behaviour.

import os  # Read the catalog source selection from the environment.
from pathlib import Path  # Handle filesystem paths in an OS-agnostic fashion.
from typing import Dict, List, Optional, Sequence, Tuple  # Provide explicit type hints for chart helpers.

import pandas as pd  # Primary data manipulation library for tabular analysis.
import plotly.express as px  # High-level Plotly API for interactive figures.
import plotly.graph_objects as go  # Low-level traces for tables and orbit paths.
import plotly.io as pio  # Utilities to export Plotly figures as embeddable HTML snippets.

from catalog_source import load_planets  # Sample or live catalog with automatic fallback.
from discovery_timeline import build_discovery_timeline, discovery_methods_in  # Yearly discovery aggregates.
from habitability_model import (  # Per-planet habitability diagnostics.
    LOWEST_BAND,
    SCORE_BANDS,
    calculate_habitability_score,
    calculate_habitable_zone,
    calculate_relative_surface_gravity,
    habitability_color,
    habitability_factors,
    is_in_habitable_zone,
    is_temperate,
    score_category,
)
from orbit_geometry import generate_orbit_coordinates, position_at, scale_orbit_path  # Display ellipses.
from planet_classification import PLANET_TYPE_COLORS, categorize_planet_type, star_type_color  # Size classes.
from planet_filters import FilterSpec, filter_planets  # Filter panel semantics.
from planet_records import PlanetRecord, frame_from_records, is_present, records_from_frame  # Typed rows.
from planet_units import (  # Human-readable labels for the gallery table.
    calculate_orbital_velocity,
    discovery_method_info,
    format_distance,
    format_mass,
    format_number,
    format_orbital_period,
    format_radius,
    format_temperature,
    parsecs_to_light_years,
)

# Resolve important project directories relative to this file for reproducibility.
ROOT = Path(__file__).resolve().parents[1]  # Repository root directory.
WEBAPP_DIR = ROOT / "webapp"  # Location where the generated dashboard will live.

SOLAR_SYSTEM_PLANETS: List[Dict[str, object]] = [
    {"name": "Mercury", "distance": 0.39, "radius": 0.383, "temperature": 340},
    {"name": "Venus", "distance": 0.72, "radius": 0.949, "temperature": 737},
    {"name": "Earth", "distance": 1.0, "radius": 1.0, "temperature": 288},
    {"name": "Mars", "distance": 1.52, "radius": 0.532, "temperature": 210},
    {"name": "Jupiter", "distance": 5.2, "radius": 11.21, "temperature": 165},
    {"name": "Saturn", "distance": 9.58, "radius": 9.45, "temperature": 134},
    {"name": "Uranus", "distance": 19.22, "radius": 4.01, "temperature": 76},
    {"name": "Neptune", "distance": 30.05, "radius": 3.88, "temperature": 72},
]  # Reference bodies for the system comparison view.

SIZE_REFERENCES: List[Dict[str, object]] = [
    {"pl_name": "Earth", "pl_rade": 1.0},
    {"pl_name": "Jupiter", "pl_rade": 11.2},
    {"pl_name": "Neptune", "pl_rade": 3.9},
    {"pl_name": "Mars", "pl_rade": 0.53},
]  # Familiar planets appended to the size comparison.

SIZE_SORT_KEYS = ("size", "temperature", "distance", "type")  # Orderings offered by the size chart.
ORBIT_TIME_SCALE = 100  # Orbits are replayed this many times faster than real time.
SCORE_COLORS: Dict[str, str] = dict(
    [(label, color) for _, label, color in SCORE_BANDS] + [LOWEST_BAND]
)  # Rating colours shared with the habitability model.


# ---------------------------------------------------------------------------
# Data preparation
# ---------------------------------------------------------------------------

def build_planet_frame(records: Sequence[PlanetRecord]) -> pd.DataFrame:
    """Tabulate records with the derived fields every view needs."""

    frame = frame_from_records(records)  # One column per catalog field, in record order.
    frame["planet_type"] = [categorize_planet_type(r.pl_rade) for r in records]
    scores = [calculate_habitability_score(r) for r in records]  # Recomputed on every build, never cached.
    frame["habitability_score"] = pd.Series(scores, index=frame.index, dtype="int64")
    frame["score_category"] = [score_category(score) for score in scores]
    frame["in_habitable_zone"] = pd.Series([is_in_habitable_zone(r) for r in records], index=frame.index, dtype=bool)
    frame["temperate"] = pd.Series([is_temperate(r) for r in records], index=frame.index, dtype=bool)
    frame["surface_gravity"] = pd.Series(
        [calculate_relative_surface_gravity(r.pl_bmasse, r.pl_rade) for r in records], index=frame.index, dtype=float
    )  # NaN when mass or radius is missing.
    frame["distance_ly"] = pd.Series([parsecs_to_light_years(r.st_dist) for r in records], index=frame.index, dtype=float)
    return frame


def select_system(records: Sequence[PlanetRecord], hostname: str) -> List[PlanetRecord]:
    """Return the planets orbiting one host, innermost first (unknown orbits last)."""

    system = [r for r in records if r.hostname == hostname]
    return sorted(system, key=lambda r: (not is_present(r.pl_orbsmax), r.pl_orbsmax or 0.0))


def most_populous_system(records: Sequence[PlanetRecord]) -> Optional[str]:
    """Host with the most planets in the collection, first seen wins ties."""

    counts: Dict[str, int] = {}
    for record in records:
        if record.hostname:
            counts[record.hostname] = counts.get(record.hostname, 0) + 1
    if not counts:
        return None
    return max(counts, key=counts.get)  # max keeps the first key among equal counts.


def featured_planet(records: Sequence[PlanetRecord]) -> Optional[PlanetRecord]:
    """Highest-scoring planet, shown in the detail panel; the earlier record wins ties."""

    if not records:
        return None
    return max(records, key=calculate_habitability_score)


def planet_detail_rows(planet: PlanetRecord) -> List[Tuple[str, str]]:
    """Label/value pairs for the planet detail panel."""

    zone = calculate_habitable_zone(planet.st_teff, planet.st_rad)
    velocity = calculate_orbital_velocity(planet.pl_orbsmax, planet.pl_orbper)
    gravity = calculate_relative_surface_gravity(planet.pl_bmasse, planet.pl_rade)
    method = discovery_method_info(planet.discoverymethod)
    if zone is None:
        zone_text = "Unknown"
    else:
        zone_text = f"{format_number(zone.inner)} - {format_number(zone.outer)} AU"
    return [
        ("Host star", planet.hostname or "Unknown"),
        ("Spectral type", planet.st_spectype or "Unknown"),
        ("Planet type", categorize_planet_type(planet.pl_rade)),
        ("Radius", format_radius(planet.pl_rade)),
        ("Mass", format_mass(planet.pl_bmasse)),
        ("Equilibrium temperature", format_temperature(planet.pl_eqt)),
        ("Orbital period", format_orbital_period(planet.pl_orbper)),
        ("Semi-major axis", format_distance(planet.pl_orbsmax, "au")),
        ("Habitable zone", zone_text),
        ("Habitable zone status", "Within" if is_in_habitable_zone(planet) else "Outside or unknown"),
        ("Orbital velocity", "Unknown" if velocity is None else f"{format_number(velocity)} km/s"),
        ("Surface gravity", "Unknown" if gravity is None else f"{format_number(gravity)}g"),
        ("Distance", format_distance(planet.st_dist)),
        ("Discovery", _year_label(planet.disc_year, planet.discoverymethod)),
        (method["display_name"], method["description"]),
    ]  # Same facts as the planet detail panel.


def sort_for_size_comparison(frame: pd.DataFrame, sort_by: str = "size") -> pd.DataFrame:
    """Order planets with a known radius the way the size comparison view does."""

    if sort_by not in SIZE_SORT_KEYS:
        raise ValueError(f"Unknown size sort {sort_by!r}; expected one of {SIZE_SORT_KEYS}.")
    sized = frame[frame["pl_rade"].fillna(0) != 0].copy()  # Only planets with radius data.
    if sort_by == "size":
        return sized.sort_values("pl_rade", ascending=False, kind="stable")
    if sort_by == "temperature":
        return sized.assign(_key=sized["pl_eqt"].fillna(0)).sort_values("_key", kind="stable").drop(columns="_key")
    if sort_by == "distance":
        return sized.assign(_key=sized["st_dist"].fillna(0)).sort_values("_key", kind="stable").drop(columns="_key")
    return sized.sort_values("planet_type", kind="stable")


def validate_planet_frame(frame: pd.DataFrame) -> None:
    """Ensure the derived table is internally consistent before plotting."""

    if frame["pl_name"].duplicated().any():  # Planet names key every view.
        raise ValueError("Duplicate planet entries detected in the planet table.")

    if ((frame["habitability_score"] < 0) | (frame["habitability_score"] > 100)).any():
        raise ValueError("Habitability scores fall outside the 0-100 window, indicating scaling issues.")

    unknown_labels = set(frame["planet_type"]) - set(PLANET_TYPE_COLORS)
    if unknown_labels:  # Guard against classification drift.
        raise ValueError(f"Unexpected planet type labels: {sorted(unknown_labels)}.")


# ---------------------------------------------------------------------------
# Chart builders
# ---------------------------------------------------------------------------

def make_gallery_table(frame: pd.DataFrame) -> str:
    """Render the planet gallery as an interactive table."""

    rows = frame.sort_values("habitability_score", ascending=False, kind="stable")  # Most promising first.
    columns = {
        "Planet": rows["pl_name"],
        "Host star": rows["hostname"].fillna("Unknown"),
        "Type": rows["planet_type"],
        "Habitability": [f"{score} ({label})" for score, label in zip(rows["habitability_score"], rows["score_category"])],
        "Temperature": [format_temperature(_optional(v)) for v in rows["pl_eqt"]],
        "Radius": [format_radius(_optional(v)) for v in rows["pl_rade"]],
        "Mass": [format_mass(_optional(v)) for v in rows["pl_bmasse"]],
        "Orbit": [format_orbital_period(_optional(v)) for v in rows["pl_orbper"]],
        "Distance": [format_distance(_optional(v)) for v in rows["st_dist"]],
        "Discovered": [_year_label(year, method) for year, method in zip(rows["disc_year"], rows["discoverymethod"])],
    }  # Formatted strings mirror the planet cards.
    fig = go.Figure(
        data=[
            go.Table(
                header=dict(values=list(columns), fill_color="#1c2340", font=dict(color="#f5f7ff")),
                cells=dict(
                    values=[list(values) for values in columns.values()],
                    fill_color=[[PLANET_TYPE_COLORS[t] for t in rows["planet_type"]]] + [["#12182d"] * len(rows)] * (len(columns) - 1),
                    font=dict(color="#f5f7ff"),
                    align="left",
                ),
            )
        ]
    )  # Colour the name column by planet type like the gallery cards.
    fig.update_layout(title="Planet gallery", margin=dict(l=10, r=10, t=50, b=10))
    return pio.to_html(fig, include_plotlyjs="cdn", full_html=False, div_id="planet-gallery")  # First snippet loads Plotly.


def make_size_comparison_chart(frame: pd.DataFrame, sort_by: str = "size") -> str:
    """Bar chart of planet radii alongside familiar Solar System references."""

    ordered = sort_for_size_comparison(frame, sort_by)[["pl_name", "pl_rade", "planet_type"]]
    references = pd.DataFrame(SIZE_REFERENCES).assign(planet_type=lambda d: d["pl_rade"].map(categorize_planet_type))
    combined = pd.concat([ordered.assign(source="Catalog"), references.assign(source="Solar System")], ignore_index=True)
    fig = px.bar(
        combined,
        x="pl_name",
        y="pl_rade",
        color="planet_type",
        pattern_shape="source",
        color_discrete_map=PLANET_TYPE_COLORS,
        labels={"pl_name": "Planet", "pl_rade": "Radius (Earth radii)", "planet_type": "Planet type"},
        title=f"Planet size comparison (sorted by {sort_by})",
    )  # Hatched bars mark the Solar System references.
    fig.update_layout(xaxis={"categoryorder": "array", "categoryarray": combined["pl_name"].tolist()})
    return pio.to_html(fig, include_plotlyjs=False, full_html=False, div_id="size-comparison")


def make_habitability_chart(frame: pd.DataFrame, top_n: int = 15) -> str:
    """Horizontal ranking of the most habitable planets."""

    top = frame.sort_values("habitability_score", ascending=False, kind="stable").head(top_n)
    fig = px.bar(
        top,
        x="habitability_score",
        y="pl_name",
        color="score_category",
        orientation="h",
        hover_data={"pl_eqt": True, "pl_rade": True, "pl_bmasse": True, "st_spectype": True, "in_habitable_zone": True},
        color_discrete_map=SCORE_COLORS,
        labels={"habitability_score": "Habitability score", "pl_name": "Planet", "score_category": "Rating"},
        title="Habitability ranking",
    )  # Colours follow the score bands used on the planet cards.
    fig.update_layout(xaxis_range=[0, 100], yaxis=dict(categoryorder="total ascending"))
    return pio.to_html(fig, include_plotlyjs=False, full_html=False, div_id="habitability-ranking")


def make_orbit_chart(system: Sequence[PlanetRecord], elapsed_days: float = 0.0) -> str:
    """Top-down view of a planetary system with each planet placed along its orbit."""

    orbiting = [p for p in system if is_present(p.pl_orbsmax)]
    max_orbit = max((p.pl_orbsmax for p in orbiting), default=1.0)  # Scale the widest orbit to unit radius.
    fig = go.Figure()
    host = system[0] if system else None
    fig.add_trace(
        go.Scatter(
            x=[0],
            y=[0],
            mode="markers",
            marker=dict(size=18, color=star_type_color(host.st_spectype if host else None)),
            name=host.hostname if host and host.hostname else "Host star",
        )
    )  # The star sits at the focus shared by every orbit.
    for planet in orbiting:
        path = scale_orbit_path(generate_orbit_coordinates(planet.pl_orbsmax, planet.pl_orbeccen), 1 / max_orbit)
        color = PLANET_TYPE_COLORS[categorize_planet_type(planet.pl_rade)]
        fig.add_trace(
            go.Scatter(
                x=[pt.x for pt in path] + [path[0].x],
                y=[pt.y for pt in path] + [path[0].y],
                mode="lines",
                line=dict(color=color, width=1),
                name=f"{planet.pl_name} orbit",
                showlegend=False,
            )
        )  # Close the loop by repeating the first point.
        period = planet.pl_orbper / ORBIT_TIME_SCALE if is_present(planet.pl_orbper) else None
        here = position_at(path, elapsed_days, period)
        fig.add_trace(
            go.Scatter(
                x=[here.x],
                y=[here.y],
                mode="markers",
                marker=dict(size=10, color=color),
                name=planet.pl_name,
            )
        )
    fig.update_layout(
        title="Orbit visualizer",
        xaxis=dict(scaleanchor="y", visible=False),
        yaxis=dict(visible=False),
        plot_bgcolor="#0c1220",
    )
    return pio.to_html(fig, include_plotlyjs=False, full_html=False, div_id="orbit-visualizer")


def system_comparison_frame(system: Sequence[PlanetRecord]) -> pd.DataFrame:
    """Planets of one system with orbit and radius data next to the Solar System."""

    host = system[0].hostname if system and system[0].hostname else "Unknown Star"
    exo = [
        {
            "name": p.pl_name,
            "distance": p.pl_orbsmax,
            "radius": p.pl_rade,
            "temperature": p.pl_eqt,
            "system": host,
        }
        for p in system
        if is_present(p.pl_orbsmax) and is_present(p.pl_rade)
    ]
    exo = sorted(exo, key=lambda row: row["distance"])  # Innermost planet first.
    solar = [dict(row, system="Solar System") for row in SOLAR_SYSTEM_PLANETS]
    combined = pd.DataFrame(solar + exo, columns=["name", "distance", "radius", "temperature", "system"])
    combined["planet_type"] = combined["radius"].map(categorize_planet_type)
    return combined


def make_system_comparison_chart(system: Sequence[PlanetRecord]) -> str:
    """Compare orbital distances and sizes of a system against the Solar System."""

    combined = system_comparison_frame(system)
    fig = px.scatter(
        combined,
        x="distance",
        y="system",
        size="radius",
        color="planet_type",
        color_discrete_map=PLANET_TYPE_COLORS,
        hover_name="name",
        hover_data={"temperature": True, "radius": ":.2f"},
        log_x=True,
        labels={"distance": "Orbital distance (AU)", "system": "System", "planet_type": "Planet type"},
        title="System comparison",
    )  # Marker area encodes planet radius.
    return pio.to_html(fig, include_plotlyjs=False, full_html=False, div_id="system-comparison")


def make_timeline_chart(frame: pd.DataFrame) -> str:
    """Stacked yearly discoveries by method with the cumulative total overlaid."""

    timeline = build_discovery_timeline(frame, by_method=True)
    methods = [m for m in discovery_methods_in(frame) if m in timeline.columns]  # Undated-only methods have no bars.
    fig = go.Figure()
    for method in methods:
        fig.add_trace(go.Bar(x=timeline["year"], y=timeline[method], name=method))
    if not timeline.empty:
        fig.add_trace(
            go.Scatter(x=timeline["year"], y=timeline["cumulative"], name="Cumulative", mode="lines", yaxis="y2")
        )  # Running total on a secondary axis.
    fig.update_layout(
        barmode="stack",
        title="Discovery timeline",
        xaxis_title="Discovery year",
        yaxis=dict(title="Discoveries"),
        yaxis2=dict(title="Cumulative", overlaying="y", side="right"),
    )
    return pio.to_html(fig, include_plotlyjs=False, full_html=False, div_id="discovery-timeline")


def make_habitability_breakdown_chart(planet: PlanetRecord) -> str:
    """Weighted factor contributions behind one planet's habitability score."""

    factors = habitability_factors(planet)
    score = calculate_habitability_score(planet)
    fig = go.Figure(
        go.Bar(
            x=[factor.name for factor in factors],
            y=[factor.contribution for factor in factors],
            marker_color=[habitability_color(factor.score or 0) for factor in factors],
            text=[f"ideal {factor.ideal}" for factor in factors],
            hovertext=[factor.description for factor in factors],
            customdata=[[factor.weight * 100] for factor in factors],
            hovertemplate="%{x}: %{y:.1f} of %{customdata[0]:.0f} points<br>%{hovertext}<extra></extra>",
        )
    )  # Missing factors show as empty bars; weights are not renormalised.
    fig.update_layout(
        title=f"{planet.pl_name}: {score} ({score_category(score)})",
        yaxis=dict(title="Points contributed", range=[0, 40]),
    )
    return pio.to_html(fig, include_plotlyjs=False, full_html=False, div_id="habitability-breakdown")


def make_planet_detail_table(planet: PlanetRecord) -> str:
    """Two-column fact sheet for one planet."""

    rows = planet_detail_rows(planet)
    fig = go.Figure(
        data=[
            go.Table(
                header=dict(values=[planet.pl_name, ""], fill_color="#1c2340", font=dict(color="#f5f7ff")),
                cells=dict(
                    values=[[label for label, _ in rows], [value for _, value in rows]],
                    fill_color="#12182d",
                    font=dict(color="#f5f7ff"),
                    align="left",
                ),
            )
        ]
    )
    fig.update_layout(margin=dict(l=10, r=10, t=30, b=10))
    return pio.to_html(fig, include_plotlyjs=False, full_html=False, div_id="planet-details")


def _optional(value: object) -> Optional[float]:
    return None if pd.isna(value) else float(value)


def _year_label(year: object, method: object) -> str:
    year_text = "Unknown year" if pd.isna(year) else str(int(year))
    method_text = "Unknown method" if pd.isna(method) else str(method)
    return f"{year_text} · {method_text}"


# ---------------------------------------------------------------------------
# HTML assembly
# ---------------------------------------------------------------------------

def assemble_html(sections: Dict[str, str], notice: Optional[str] = None, output_dir: Optional[Path] = None) -> Path:
    """Embed the Plotly snippets into the dashboard HTML scaffold."""

    output_dir = output_dir or WEBAPP_DIR  # Default to the project web directory.
    output_dir.mkdir(parents=True, exist_ok=True)  # Ensure the web directory exists before writing files.
    banner = f'<p class="notice">{notice}</p>' if notice else ""  # Surface catalog fallbacks to the reader.
    cards = "\n".join(
        f'    <section class="card">\n      <h2>{title}</h2>\n      <div class="figure">{snippet}</div>\n    </section>'
        for title, snippet in sections.items()
    )
    template = f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8" />
  <title>Exoplanet Explorer</title>
  <meta name="viewport" content="width=device-width, initial-scale=1" />
  <style>
    body {{ font-family: 'Helvetica Neue', Arial, sans-serif; margin: 0; padding: 0; background: #0c1220; color: #f5f7ff; }}
    header {{ padding: 2rem 1.5rem; background: linear-gradient(135deg, #1c2340, #101525); }}
    main {{ padding: 1rem 1.5rem 3rem; max-width: 1100px; margin: 0 auto; }}
    h1 {{ margin: 0; font-size: 2.2rem; }}
    h2 {{ margin-top: 1rem; color: #9ad0ff; }}
    .card {{ background: rgba(18, 24, 45, 0.92); border-radius: 12px; padding: 1.2rem; margin-top: 1.2rem; box-shadow: 0 12px 28px rgba(0, 0, 0, 0.35); }}
    .notice {{ background: #5a3b0c; border-radius: 8px; padding: 0.8rem 1rem; }}
    a {{ color: #69c0ff; }}
    footer {{ text-align: center; padding: 1.5rem; font-size: 0.85rem; color: #9aa4c3; }}
  </style>
</head>
<body>
  <header>
    <h1>Exoplanet Explorer</h1>
    <p>Browse confirmed exoplanets, compare their sizes and orbits with the Solar System, and see which worlds score best for habitability.</p>
    {banner}
  </header>
  <main>
{cards}
  </main>
  <footer>
    Exoplanet Explorer · Data sourced from the <a href="https://exoplanetarchive.ipac.caltech.edu/">NASA Exoplanet Archive</a>
  </footer>
</body>
</html>
"""  # Inline HTML template; one card per view.
    output = output_dir / "index.html"
    output.write_text(template, encoding="utf-8")  # Persist the dashboard to disk.
    return output


def build_sections(records: Sequence[PlanetRecord], spec: Optional[FilterSpec] = None) -> Dict[str, str]:
    """Filter the collection and render every dashboard view."""

    visible = filter_planets(records, spec)  # The filter panel selection drives every view.
    frame = build_planet_frame(visible)
    validate_planet_frame(frame)  # Guard against scoring inconsistencies prior to plotting.

    hostname = most_populous_system(visible)
    system = select_system(visible, hostname) if hostname else []
    featured = featured_planet(visible)

    sections = {
        "Planet gallery": make_gallery_table(frame),
        "Size comparison": make_size_comparison_chart(frame),
        "Habitability ranking": make_habitability_chart(frame),
        f"Orbits of {hostname or 'the selected system'}": make_orbit_chart(system),
        "Compared with the Solar System": make_system_comparison_chart(system),
        "Discovery timeline": make_timeline_chart(frame),
    }
    if featured is not None:
        sections[f"Habitability breakdown of {featured.pl_name}"] = make_habitability_breakdown_chart(featured)
        sections[f"Details of {featured.pl_name}"] = make_planet_detail_table(featured)
    return sections


def main() -> None:
    """Orchestrate data loading, filtering, and dashboard creation."""

    loaded = load_planets(os.environ.get("EXOPLANET_SOURCE", "sample"))  # 'sample' or 'api'.
    records = records_from_frame(loaded.frame)
    spec = FilterSpec.from_observed(records)  # Start from the data-driven slider bounds.
    output = assemble_html(build_sections(records, spec), notice=loaded.notice)
    if loaded.notice:
        print(loaded.notice)
    print(f"Dashboard written to {output} ({len(records)} planets from the {loaded.source} catalog)")


if __name__ == "__main__":  # Support CLI execution.
    main()  # Trigger the dashboard pipeline when run as a script.
