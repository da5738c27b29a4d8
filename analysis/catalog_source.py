"""Planet catalog access: the bundled sample table and the NASA Exoplanet Archive TAP service."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from io import BytesIO
from pathlib import Path
from typing import List, Optional
from urllib.parse import urlencode
from urllib.request import Request, urlopen

import pandas as pd

from habitability_model import is_potentially_habitable
from planet_records import records_from_frame

logger = logging.getLogger(__name__)

ROOT = Path(__file__).resolve().parents[1]
SAMPLE_DATA_PATH = ROOT / "data" / "sample_planets.csv"

TAP_SYNC_URL = "https://exoplanetarchive.ipac.caltech.edu/TAP/sync"
USER_AGENT = "Exoplanet-Explorer/1.0"
REQUEST_TIMEOUT = 30
DEFAULT_MAX_ROWS = 2000

SAMPLE_SOURCE = "sample"
API_SOURCE = "api"
FALLBACK_NOTICE = "Failed to fetch data from the NASA Exoplanet Archive. Using sample data instead."

CATALOG_COLUMNS: List[str] = [
    "pl_name",
    "hostname",
    "discoverymethod",
    "disc_year",
    "pl_orbper",
    "pl_orbsmax",
    "pl_rade",
    "pl_bmasse",
    "pl_eqt",
    "st_spectype",
    "st_rad",
    "st_mass",
    "st_teff",
    "st_dist",
    "sy_pnum",
    "pl_orbeccen",
]


class CatalogUnavailableError(RuntimeError):
    """The remote catalog could not be reached or returned an unusable payload."""


@dataclass
class CatalogLoad:
    frame: pd.DataFrame
    source: str
    notice: Optional[str] = None

    @property
    def used_fallback(self) -> bool:
        return self.notice is not None


# ---------------------------------------------------------------------------
# ADQL query builders
# ---------------------------------------------------------------------------

def quote_literal(value: str) -> str:
    return "'" + str(value).replace("'", "''") + "'"


def _select(where: str = "", order_by: str = "") -> str:
    query = f"SELECT {', '.join(CATALOG_COLUMNS)} FROM ps WHERE default_flag = 1"
    if where:
        query += f" AND {where}"
    if order_by:
        query += f" ORDER BY {order_by}"
    return query


def confirmed_planets_query() -> str:
    return _select(order_by="disc_year DESC")


def year_range_query(start_year: int, end_year: int) -> str:
    return _select(f"disc_year BETWEEN {int(start_year)} AND {int(end_year)}", "disc_year ASC")


def discovery_method_query(method: str) -> str:
    return _select(f"discoverymethod LIKE {quote_literal(f'%{method}%')}", "disc_year DESC")


def potentially_habitable_query() -> str:
    where = "pl_eqt BETWEEN 180 AND 310 AND pl_rade < 2.5 AND pl_rade IS NOT NULL AND pl_eqt IS NOT NULL"
    return _select(where, "pl_eqt ASC")


def system_query(hostname: str) -> str:
    return _select(f"hostname = {quote_literal(hostname)}", "pl_orbsmax ASC")


def planet_details_query(pl_name: str) -> str:
    return f"SELECT * FROM ps WHERE default_flag = 1 AND pl_name = {quote_literal(pl_name)}"


def discovery_method_stats_query() -> str:
    return (
        "SELECT discoverymethod, COUNT(*) AS count FROM ps WHERE default_flag = 1 "
        "GROUP BY discoverymethod ORDER BY count DESC"
    )


def discovery_timeline_query() -> str:
    return (
        "SELECT disc_year, COUNT(*) AS count FROM ps WHERE default_flag = 1 AND disc_year IS NOT NULL "
        "GROUP BY disc_year ORDER BY disc_year ASC"
    )


# ---------------------------------------------------------------------------
# Transport
# ---------------------------------------------------------------------------

def build_tap_params(query: str, fmt: str = "csv", max_rows: int = DEFAULT_MAX_ROWS) -> dict:
    return {"query": query, "format": fmt, "maxrec": max_rows}


def fetch_catalog(query: str, max_rows: int = DEFAULT_MAX_ROWS, timeout: float = REQUEST_TIMEOUT) -> pd.DataFrame:
    """Run a synchronous TAP query and parse the CSV response."""

    url = f"{TAP_SYNC_URL}?{urlencode(build_tap_params(query, max_rows=max_rows))}"
    try:
        req = Request(url, headers={"User-Agent": USER_AGENT})
        with urlopen(req, timeout=timeout) as response:
            payload = response.read()
        return pd.read_csv(BytesIO(payload))
    except (OSError, ValueError) as exc:  # URLError and timeouts are OSErrors; parse failures are ValueErrors.
        raise CatalogUnavailableError(f"Catalog query failed: {exc}") from exc


def fetch_confirmed_planets(max_rows: int = DEFAULT_MAX_ROWS) -> pd.DataFrame:
    df = fetch_catalog(confirmed_planets_query(), max_rows=max_rows)
    if "pl_name" not in df.columns:
        raise CatalogUnavailableError("Catalog response is missing the pl_name column.")
    return df


def fetch_planet_details(pl_name: str) -> Optional[pd.Series]:
    df = fetch_catalog(planet_details_query(pl_name), max_rows=1)
    if df.empty:
        return None
    return df.iloc[0]


def fetch_planets_in_system(hostname: str) -> pd.DataFrame:
    return fetch_catalog(system_query(hostname))


# ---------------------------------------------------------------------------
# Loading with fallback
# ---------------------------------------------------------------------------

def load_sample_planets(path: Path = SAMPLE_DATA_PATH) -> pd.DataFrame:
    """Load the bundled sample catalog shipped with the project."""

    if not path.exists():
        raise FileNotFoundError(f"Bundled sample catalog not found at {path}.")
    df = pd.read_csv(path, comment="#")
    return df.reindex(columns=CATALOG_COLUMNS + [c for c in df.columns if c not in CATALOG_COLUMNS])


def annotate_habitable_flag(df: pd.DataFrame) -> pd.DataFrame:
    """Attach the potentially-habitable flag computed for live catalog rows."""

    data = df.copy()
    data["habitable"] = [is_potentially_habitable(record) for record in records_from_frame(data)]
    return data


def load_planets(source: str = SAMPLE_SOURCE) -> CatalogLoad:
    """Load planets from the requested source, falling back to the sample when the archive fails."""

    if source == SAMPLE_SOURCE:
        return CatalogLoad(frame=load_sample_planets(), source=SAMPLE_SOURCE)
    if source != API_SOURCE:
        raise ValueError(f"Unknown catalog source {source!r}; expected 'sample' or 'api'.")

    try:
        remote = fetch_confirmed_planets()
    except CatalogUnavailableError as exc:
        logger.warning("Falling back to sample catalog: %s", exc)
        return CatalogLoad(frame=load_sample_planets(), source=SAMPLE_SOURCE, notice=FALLBACK_NOTICE)
    return CatalogLoad(frame=annotate_habitable_flag(remote), source=API_SOURCE)
