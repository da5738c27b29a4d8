"""Size classification of exoplanets and the colour lookups used to display it."""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

import numpy as np
import pandas as pd

from planet_records import is_present

UNKNOWN_TYPE = "Unknown"

# Upper radius bound (Earth radii, exclusive) for each class, evaluated in order.
RADIUS_BANDS: List[Tuple[float, str]] = [
    (0.5, "Sub-Earth"),
    (1.6, "Earth-like"),
    (4.0, "Super-Earth/Mini-Neptune"),
    (10.0, "Neptune-like"),
]
GAS_GIANT = "Gas Giant"

PLANET_TYPES: List[str] = [
    "Earth-like",
    "Super-Earth/Mini-Neptune",
    "Neptune-like",
    "Gas Giant",
    "Sub-Earth",
]  # Order shown in the filter panel.

PLANET_TYPE_COLORS: Dict[str, str] = {
    "Sub-Earth": "#6BAED6",
    "Earth-like": "#41AB5D",
    "Super-Earth/Mini-Neptune": "#4292C6",
    "Neptune-like": "#2171B5",
    "Gas Giant": "#F16913",
    UNKNOWN_TYPE: "#969696",
}

STAR_TYPE_COLORS: Dict[str, str] = {
    "O": "#9BB0FF",
    "B": "#AAC4FF",
    "A": "#CAD7FF",
    "F": "#F8F7FF",
    "G": "#FFF4EA",
    "K": "#FFD2A1",
    "M": "#FFCC6F",
}
DEFAULT_STAR_COLOR = "#FFFFFF"


def categorize_planet_type(radius_earth: Optional[float]) -> str:
    """Classify a planet by radius; missing or zero radii are Unknown."""

    if not is_present(radius_earth):
        return UNKNOWN_TYPE
    for upper, label in RADIUS_BANDS:
        if radius_earth < upper:
            return label
    return GAS_GIANT


def planet_type_color(planet_type: Optional[str]) -> str:
    return PLANET_TYPE_COLORS.get(planet_type or UNKNOWN_TYPE, PLANET_TYPE_COLORS[UNKNOWN_TYPE])


def star_type_color(spectral_type: Optional[str]) -> str:
    if not isinstance(spectral_type, str) or not spectral_type:
        return DEFAULT_STAR_COLOR
    return STAR_TYPE_COLORS.get(spectral_type[0], DEFAULT_STAR_COLOR)  # Case-sensitive class letter.


def classify_planet_frame(df: pd.DataFrame) -> pd.Series:
    """Vectorised categorize_planet_type over the pl_rade column."""

    radius = pd.to_numeric(df["pl_rade"], errors="coerce").to_numpy(dtype=float, na_value=np.nan)
    known = ~np.isnan(radius) & (radius != 0)
    conditions = [known & (radius < upper) for upper, _ in RADIUS_BANDS]
    conditions.append(known)
    choices = [label for _, label in RADIUS_BANDS] + [GAS_GIANT]
    labels = np.select(conditions, choices, default=UNKNOWN_TYPE)
    return pd.Series(labels, index=df.index, name="planet_type")
