"""Data model definitions: phase table entries and intermediate sky coordinates."""

from dataclasses import dataclass


@dataclass(frozen=True)
class MoonMoji:
    """A single entry of the lunar phase table."""

    emoji: str  # Phase glyph ("🌑", "🌒", ...)
    name: str  # Human-readable phase name ("New Moon", ...)
    weight: float  # Share of the synodic cycle; 0.0 = reachable only as a variant


@dataclass(frozen=True)
class SunCoords:
    """Geocentric equatorial coordinates of the Sun."""

    dec: float  # Declination (radians)
    ra: float  # Right ascension (radians)


@dataclass(frozen=True)
class MoonCoords:
    """Geocentric equatorial coordinates of the Moon."""

    dec: float  # Declination (radians)
    ra: float  # Right ascension (radians)
    dist: float  # Distance from Earth (km)
