"""Unit conversions and display formatting for planetary and stellar quantities."""

from __future__ import annotations

import math
from typing import Dict, Optional

import pandas as pd

from planet_records import is_present

EARTH_RADIUS_KM = 6371.0
EARTH_MASS_KG = 5.972e24
AU_TO_KM = 149_597_870.7
PARSEC_TO_LIGHT_YEARS = 3.26156
JUPITER_RADIUS_IN_EARTH = 11.2
JUPITER_MASS_IN_EARTH = 317.8
DAYS_PER_YEAR = 365.25
KELVIN_OFFSET = 273.15

DISCOVERY_METHODS: Dict[str, Dict[str, str]] = {
    "Transit": {
        "display_name": "Transit",
        "description": "Detects planets by measuring the dimming of starlight as a planet passes in front of its star.",
    },
    "Radial Velocity": {
        "display_name": "Radial Velocity",
        "description": "Detects planets by measuring the wobble of a star caused by the gravitational pull of an orbiting planet.",
    },
    "Imaging": {
        "display_name": "Direct Imaging",
        "description": "Directly observes planets by blocking the light from their host star.",
    },
    "Microlensing": {
        "display_name": "Microlensing",
        "description": "Detects planets when their gravitational field temporarily magnifies light from a background star.",
    },
    "Transit Timing Variations": {
        "display_name": "Transit Timing Variations",
        "description": "Detects planets by measuring variations in the timing of known transiting planets.",
    },
    "Astrometry": {
        "display_name": "Astrometry",
        "description": "Measures the precise positions of stars to detect the presence of planets.",
    },
}
DEFAULT_METHOD_INFO = {
    "display_name": "Other Method",
    "description": "Detected using specialized techniques.",
}


# ---------------------------------------------------------------------------
# Conversions
# ---------------------------------------------------------------------------

def _missing(value: Optional[float]) -> bool:
    return value is None or bool(pd.isna(value))


def _scaled(value: Optional[float], factor: float) -> Optional[float]:
    if not is_present(value):
        return None
    return value * factor


def parsecs_to_light_years(parsecs: Optional[float]) -> Optional[float]:
    return _scaled(parsecs, PARSEC_TO_LIGHT_YEARS)


def light_years_to_parsecs(light_years: Optional[float]) -> Optional[float]:
    return _scaled(light_years, 1 / PARSEC_TO_LIGHT_YEARS)


def earth_radii_to_jupiter(radius: Optional[float]) -> Optional[float]:
    return _scaled(radius, 1 / JUPITER_RADIUS_IN_EARTH)


def jupiter_radii_to_earth(radius: Optional[float]) -> Optional[float]:
    return _scaled(radius, JUPITER_RADIUS_IN_EARTH)


def earth_masses_to_jupiter(mass: Optional[float]) -> Optional[float]:
    return _scaled(mass, 1 / JUPITER_MASS_IN_EARTH)


def jupiter_masses_to_earth(mass: Optional[float]) -> Optional[float]:
    return _scaled(mass, JUPITER_MASS_IN_EARTH)


def earth_radii_to_km(radius: Optional[float]) -> Optional[float]:
    return _scaled(radius, EARTH_RADIUS_KM)


def earth_masses_to_kg(mass: Optional[float]) -> Optional[float]:
    return _scaled(mass, EARTH_MASS_KG)


def au_to_km(distance: Optional[float]) -> Optional[float]:
    return _scaled(distance, AU_TO_KM)


def days_to_years(days: Optional[float]) -> Optional[float]:
    return _scaled(days, 1 / DAYS_PER_YEAR)


def years_to_days(years: Optional[float]) -> Optional[float]:
    return _scaled(years, DAYS_PER_YEAR)


def kelvin_to_celsius(kelvin: Optional[float]) -> Optional[float]:
    # 0 K is a valid reading here, only None/NaN/NA count as missing.
    if _missing(kelvin):
        return None
    return kelvin - KELVIN_OFFSET


def celsius_to_kelvin(celsius: Optional[float]) -> Optional[float]:
    if _missing(celsius):
        return None
    return celsius + KELVIN_OFFSET


def calculate_orbital_velocity(semi_major_axis_au: Optional[float], period_days: Optional[float]) -> Optional[float]:
    """Mean orbital speed in km/s assuming a circular orbit."""

    if not is_present(semi_major_axis_au) or not is_present(period_days):
        return None
    circumference = 2 * math.pi * au_to_km(semi_major_axis_au)
    return circumference / (period_days * 24 * 60 * 60)


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------

def format_number(value: Optional[float], decimals: int = 2) -> str:
    if _missing(value):
        return "Unknown"
    return f"{value:,.{decimals}f}"


def format_distance(distance: Optional[float], unit: str = "pc") -> str:
    if _missing(distance):
        return "Unknown"
    if unit == "pc":
        light_years = format_number(distance * PARSEC_TO_LIGHT_YEARS)
        if distance < 1:
            return f"{light_years} light years"
        return f"{format_number(distance)} parsecs ({light_years} light years)"
    if unit == "au":
        if distance < 0.01:
            return f"{format_number(distance * AU_TO_KM)} kilometers"
        return f"{format_number(distance)} AU"
    return f"{format_number(distance)} {unit}"


def format_temperature(temperature: Optional[float], unit: str = "K") -> str:
    if _missing(temperature):
        return "Unknown"
    if unit == "K":
        return f"{format_number(temperature)} K ({format_number(temperature - KELVIN_OFFSET)}°C)"
    if unit == "C":
        return f"{format_number(temperature)}°C ({format_number(temperature + KELVIN_OFFSET)} K)"
    return f"{format_number(temperature)} {unit}"


def format_mass(mass: Optional[float], unit: str = "earth") -> str:
    if _missing(mass):
        return "Unknown"
    if unit == "earth":
        if mass > 50:
            return f"{format_number(mass / JUPITER_MASS_IN_EARTH)} Jupiter masses ({format_number(mass)} Earth masses)"
        return f"{format_number(mass)} Earth masses"
    if unit == "jupiter":
        if mass < 0.1:
            return f"{format_number(mass * JUPITER_MASS_IN_EARTH)} Earth masses ({format_number(mass)} Jupiter masses)"
        return f"{format_number(mass)} Jupiter masses"
    return f"{format_number(mass)} {unit}"


def format_radius(radius: Optional[float], unit: str = "earth") -> str:
    if _missing(radius):
        return "Unknown"
    if unit == "earth":
        if radius > 10:
            return f"{format_number(radius / JUPITER_RADIUS_IN_EARTH)} Jupiter radii ({format_number(radius)} Earth radii)"
        return f"{format_number(radius)} Earth radii"
    if unit == "jupiter":
        if radius < 0.2:
            return f"{format_number(radius * JUPITER_RADIUS_IN_EARTH)} Earth radii ({format_number(radius)} Jupiter radii)"
        return f"{format_number(radius)} Jupiter radii"
    return f"{format_number(radius)} {unit}"


def format_orbital_period(days: Optional[float]) -> str:
    if _missing(days):
        return "Unknown"
    if days < 1:
        return f"{format_number(days * 24)} hours"
    if days > 365:
        return f"{format_number(days / DAYS_PER_YEAR)} years ({format_number(days)} days)"
    return f"{format_number(days)} days"


def discovery_method_info(method: Optional[str]) -> Dict[str, str]:
    """Return the display name and description used for a discovery method."""

    return DISCOVERY_METHODS.get(method or "", DEFAULT_METHOD_INFO)
