from __future__ import annotations

from pathlib import Path

import pandas as pd

from planet_overview import (
    TOP_TABLE_COLUMNS,
    export_habitability_table,
    plot_habitability_distribution,
    plot_radius_vs_teff,
    scored_frame,
    summarize_collection,
)


class TestSummaries:
    def test_scored_frame_columns(self, sample_frame: pd.DataFrame) -> None:
        scored = scored_frame(sample_frame)
        assert set(TOP_TABLE_COLUMNS) <= set(scored.columns)
        assert len(scored) == len(sample_frame)

    def test_summarize_collection(self, sample_frame: pd.DataFrame) -> None:
        summary = summarize_collection(sample_frame)
        assert summary["total_planets"] == 30
        assert summary["planetary_systems"] == 24
        assert summary["temperate_planets"] == 14
        assert summary["count_Gas Giant"] == 7
        assert summary["count_Unknown"] == 5
        assert 0 <= summary["mean_habitability_score"] <= 100


class TestExports:
    def test_export_habitability_table(self, sample_frame: pd.DataFrame, tmp_path: Path) -> None:
        scored = export_habitability_table(sample_frame, tmp_path, top_n=5)
        assert (tmp_path / "habitability_scores.csv").exists()
        top_markdown = (tmp_path / "habitability_top.md").read_text(encoding="utf-8")
        assert scored["pl_name"].iloc[0] in top_markdown
        assert scored["habitability_score"].is_monotonic_decreasing

    def test_figures_are_written(self, sample_frame: pd.DataFrame, tmp_path: Path) -> None:
        assert plot_radius_vs_teff(sample_frame, tmp_path).exists()
        assert plot_habitability_distribution(sample_frame, tmp_path).exists()
