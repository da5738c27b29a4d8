"""Collection-level summary statistics and static figures for a planet catalog."""

from __future__ import annotations

from pathlib import Path

import matplotlib.pyplot as plt
import pandas as pd
import seaborn as sns

from catalog_source import load_planets
from habitability_model import score_planet_frame
from planet_classification import PLANET_TYPE_COLORS, classify_planet_frame

sns.set_theme(style="whitegrid")

ROOT = Path(__file__).resolve().parents[1]
FIG_DIR = ROOT / "figures"
RESULTS_DIR = ROOT / "results"

TOP_TABLE_COLUMNS = [
    "pl_name",
    "hostname",
    "planet_type",
    "habitability_score",
    "in_habitable_zone",
    "temperate",
    "pl_eqt",
    "pl_rade",
    "pl_bmasse",
    "st_spectype",
    "st_dist",
]


def scored_frame(df: pd.DataFrame) -> pd.DataFrame:
    """Catalog table with planet type and habitability diagnostics attached."""

    scored = score_planet_frame(df)
    scored["planet_type"] = classify_planet_frame(scored)
    return scored


def summarize_collection(df: pd.DataFrame) -> pd.Series:
    """Return the headline statistics shown above the gallery."""

    scored = scored_frame(df)
    summary = {}
    summary["total_planets"] = len(scored)
    summary["planetary_systems"] = scored["hostname"].nunique()
    summary["temperate_planets"] = int(scored["temperate"].sum())
    summary["in_habitable_zone"] = int(scored["in_habitable_zone"].sum())
    summary["mean_habitability_score"] = scored["habitability_score"].mean() if len(scored) else 0.0
    summary["median_disc_year"] = pd.to_numeric(scored["disc_year"], errors="coerce").median()

    type_counts = scored["planet_type"].value_counts()
    for planet_type in PLANET_TYPE_COLORS:
        summary[f"count_{planet_type}"] = int(type_counts.get(planet_type, 0))

    return pd.Series(summary)


def plot_radius_vs_teff(df: pd.DataFrame, fig_dir: Path) -> Path:
    """Plot planet radius against stellar effective temperature, coloured by planet type."""

    fig_dir.mkdir(parents=True, exist_ok=True)
    scored = scored_frame(df).dropna(subset=["pl_rade", "st_teff"])

    plt.figure(figsize=(9, 6))
    scatter = sns.scatterplot(
        data=scored,
        x="st_teff",
        y="pl_rade",
        hue="planet_type",
        palette=PLANET_TYPE_COLORS,
        alpha=0.8,
        edgecolor="none",
    )
    scatter.set(
        title="Planet radius vs. host star temperature",
        xlabel="Stellar effective temperature (K)",
        ylabel="Planet radius (Earth radii)",
        yscale="log",
    )
    plt.tight_layout()
    output = fig_dir / "radius_vs_teff.png"
    plt.savefig(output, dpi=150)
    plt.close()
    return output


def plot_habitability_distribution(df: pd.DataFrame, fig_dir: Path) -> Path:
    """Histogram of habitability scores split by planet type."""

    fig_dir.mkdir(parents=True, exist_ok=True)
    scored = scored_frame(df)

    plt.figure(figsize=(9, 6))
    sns.histplot(
        data=scored,
        x="habitability_score",
        hue="planet_type",
        palette=PLANET_TYPE_COLORS,
        multiple="stack",
        binwidth=10,
        binrange=(0, 100),
    )
    plt.title("Habitability score distribution")
    plt.xlabel("Habitability score")
    plt.ylabel("Number of planets")
    plt.tight_layout()
    output = fig_dir / "habitability_distribution.png"
    plt.savefig(output, dpi=150)
    plt.close()
    return output


def export_habitability_table(df: pd.DataFrame, results_dir: Path, top_n: int = 20) -> pd.DataFrame:
    """Write the scored table as CSV and the top candidates as a Markdown list."""

    results_dir.mkdir(parents=True, exist_ok=True)
    scored = scored_frame(df).sort_values("habitability_score", ascending=False, kind="stable")
    scored.to_csv(results_dir / "habitability_scores.csv", index=False)

    top = scored.head(top_n)[TOP_TABLE_COLUMNS]
    top.to_markdown(results_dir / "habitability_top.md", index=False)
    return scored


if __name__ == "__main__":
    planets = load_planets().frame
    plot_radius_vs_teff(planets, FIG_DIR)
    plot_habitability_distribution(planets, FIG_DIR)
    export_habitability_table(planets, RESULTS_DIR)

    stats = summarize_collection(planets)
    print(stats.to_string())
