"""Typed planet records keyed by the NASA Exoplanet Archive column names."""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass, fields
from typing import Any, Iterable, List, Mapping, Optional

import pandas as pd

INTEGER_FIELDS = ("disc_year", "sy_pnum")
TEXT_FIELDS = ("pl_name", "hostname", "discoverymethod", "st_spectype")


@dataclass(frozen=True)
class PlanetRecord:
    pl_name: str
    hostname: Optional[str] = None
    discoverymethod: Optional[str] = None
    disc_year: Optional[int] = None
    pl_orbper: Optional[float] = None
    pl_orbsmax: Optional[float] = None
    pl_rade: Optional[float] = None
    pl_bmasse: Optional[float] = None
    pl_eqt: Optional[float] = None
    st_spectype: Optional[str] = None
    st_rad: Optional[float] = None
    st_mass: Optional[float] = None
    st_teff: Optional[float] = None
    st_dist: Optional[float] = None
    sy_pnum: Optional[int] = None
    pl_orbeccen: Optional[float] = None

    @classmethod
    def from_mapping(cls, row: Mapping[str, Any]) -> "PlanetRecord":
        """Build a record from a dict or DataFrame row, mapping blanks and NaN to None."""

        values = {}
        for field in fields(cls):
            value = _clean(row.get(field.name))
            if value is not None and field.name in INTEGER_FIELDS:
                value = int(value)
            elif value is not None and field.name in TEXT_FIELDS:
                value = str(value).strip()
            elif value is not None:
                value = float(value)
            values[field.name] = value
        if values["pl_name"] is None:
            raise ValueError("Planet records require a pl_name.")
        return cls(**values)

    def to_dict(self) -> dict:
        return asdict(self)


def _clean(value: Any) -> Any:
    if value is None or value is pd.NA:
        return None
    if isinstance(value, str):
        return value.strip() or None
    if isinstance(value, float) and math.isnan(value):
        return None
    return value


def is_present(value: Any) -> bool:
    """Return True for usable measurements; None, NaN and zero all mean missing data."""

    if value is None or value is pd.NA:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, float) and math.isnan(value):
        return False
    return bool(value)


def records_from_frame(df: pd.DataFrame) -> List[PlanetRecord]:
    """Convert a catalog table into records, preserving row order."""

    rows = df.astype(object).where(df.notna(), None).to_dict(orient="records")
    return [PlanetRecord.from_mapping(row) for row in rows]


def frame_from_records(records: Iterable[PlanetRecord]) -> pd.DataFrame:
    """Convert records back into a table with one column per catalog field."""

    columns = [field.name for field in fields(PlanetRecord)]
    df = pd.DataFrame([record.to_dict() for record in records], columns=columns)
    return df.astype({"disc_year": "Int64", "sy_pnum": "Int64"})
