from __future__ import annotations

from typing import List

import matplotlib
import pandas as pd
import pytest

matplotlib.use("Agg")

from catalog_source import load_sample_planets  # noqa: E402
from planet_records import PlanetRecord, records_from_frame  # noqa: E402


@pytest.fixture
def sample_frame() -> pd.DataFrame:
    return load_sample_planets()


@pytest.fixture
def sample_planets(sample_frame: pd.DataFrame) -> List[PlanetRecord]:
    return records_from_frame(sample_frame)


@pytest.fixture
def earth_twin() -> PlanetRecord:
    return PlanetRecord(
        pl_name="Earth twin",
        hostname="Sun twin",
        pl_eqt=285.0,
        pl_rade=1.0,
        pl_bmasse=1.0,
        st_spectype="G2V",
        st_teff=5772.0,
        st_rad=1.0,
        pl_orbsmax=1.0,
    )
