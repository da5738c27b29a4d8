"""Discovery timeline aggregates for the exoplanet collection: yearly, cumulative and per-method counts."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import seaborn as sns

from catalog_source import load_planets

sns.set_theme(style="whitegrid")

ROOT = Path(__file__).resolve().parents[1]
FIG_DIR = ROOT / "figures" / "discovery_timeline"
RESULTS_DIR = ROOT / "results"


# ---------------------------------------------------------------------------
# Data preparation helpers
# ---------------------------------------------------------------------------

def _discovery_years(df: pd.DataFrame) -> pd.Series:
    years = pd.to_numeric(df["disc_year"], errors="coerce")
    return years[years.notna() & (years != 0)].astype("int64")


def discovery_methods_in(df: pd.DataFrame) -> List[str]:
    """Distinct discovery methods in order of first appearance."""

    methods = df["discoverymethod"].dropna().astype(str).str.strip()
    return [method for method in methods.unique().tolist() if method]


# ---------------------------------------------------------------------------
# Aggregations
# ---------------------------------------------------------------------------

def build_discovery_timeline(
    df: pd.DataFrame,
    start_year: Optional[int] = None,
    end_year: Optional[int] = None,
    by_method: bool = True,
) -> pd.DataFrame:
    """Return one row per year with total, cumulative and optional per-method discovery counts.

    Years without discoveries inside the window are kept with zero counts. The
    cumulative column counts every discovery up to and including the year,
    including those made before ``start_year``.
    """

    years = _discovery_years(df)
    if years.empty:
        return pd.DataFrame(columns=["year", "total", "cumulative"])

    first = int(years.min()) if start_year is None else int(start_year)
    last = int(years.max()) if end_year is None else int(end_year)
    window = pd.RangeIndex(first, last + 1, name="year")

    timeline = pd.DataFrame(index=window)
    timeline["total"] = years.value_counts().reindex(window, fill_value=0).astype("int64")
    sorted_years = np.sort(years.to_numpy())
    timeline["cumulative"] = np.searchsorted(sorted_years, window.to_numpy(), side="right").astype("int64")

    if by_method:
        dated = df.loc[years.index]
        methods = discovery_methods_in(dated)
        counts = pd.crosstab(years, dated["discoverymethod"].astype(str).str.strip())
        counts = counts.reindex(index=window, columns=methods, fill_value=0).astype("int64")
        timeline = timeline.join(counts)

    return timeline.reset_index()


def discovery_method_counts(df: pd.DataFrame) -> pd.DataFrame:
    """Planet counts per discovery method, most productive first."""

    counts = df["discoverymethod"].dropna().value_counts()
    return counts.rename_axis("discoverymethod").reset_index(name="count")


# ---------------------------------------------------------------------------
# Visualisation helpers
# ---------------------------------------------------------------------------

def plot_discovery_stack(timeline: pd.DataFrame, fig_dir: Path) -> Path:
    """Produce a stacked area chart of annual discoveries by method from a per-method timeline."""

    fig_dir.mkdir(parents=True, exist_ok=True)
    methods = [c for c in timeline.columns if c not in ("year", "total", "cumulative")]

    plt.figure(figsize=(11, 6))
    plt.stackplot(timeline["year"], timeline[methods].T, labels=methods)
    plt.title("Exoplanet discoveries by detection method")
    plt.xlabel("Discovery year")
    plt.ylabel("Number of confirmed planets")
    plt.legend(loc="upper left", ncol=2)
    plt.tight_layout()
    output = fig_dir / "discoveries_by_method.png"
    plt.savefig(output, dpi=150)
    plt.close()
    return output


def main() -> None:
    df = load_planets().frame
    RESULTS_DIR.mkdir(parents=True, exist_ok=True)

    timeline = build_discovery_timeline(df)
    timeline.to_csv(RESULTS_DIR / "discovery_timeline.csv", index=False)
    plot_discovery_stack(timeline, FIG_DIR)

    print(discovery_method_counts(df).to_string(index=False))


if __name__ == "__main__":
    main()
