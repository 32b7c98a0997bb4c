"""Moon phase engine: low-order solar/lunar series mapped onto phase glyphs.

The coordinate formulas are the compact series popularised by SunCalc. They are
good to a few percent, which is plenty for picking one of eight phase glyphs.
"""

import logging
import math
import random
from datetime import datetime, timedelta

from pytz import utc

from moonmoji.models import MoonCoords, MoonMoji, SunCoords

logger = logging.getLogger(__name__)

DAY_MILLIS = 1000 * 60 * 60 * 24
J1970 = 2_440_588
J2000 = 2_451_545

RADS = math.pi / 180
SDIST = 149_598_000  # Earth–Sun distance (km)
EARTH = RADS * 23.4397  # Obliquity of the ecliptic

DEFAULT_VARIANT_PROBABILITY = 0.1

PHASES: tuple[MoonMoji, ...] = (
    MoonMoji(emoji="🌑", name="New Moon", weight=1.0),
    MoonMoji(emoji="🌒", name="Waxing Crescent", weight=6.3825),
    MoonMoji(emoji="🌓", name="First Quarter", weight=1.0),
    MoonMoji(emoji="🌔", name="Waxing Gibbous", weight=6.3825),
    MoonMoji(emoji="🌕", name="Full Moon", weight=1.0),
    MoonMoji(emoji="🌖", name="Waning Gibbous", weight=6.3825),
    MoonMoji(emoji="🌗", name="Last Quarter", weight=1.0),
    MoonMoji(emoji="🌘", name="Waning Crescent", weight=6.3825),
    MoonMoji(emoji="🌚", name="New Moon *", weight=0.0),
    MoonMoji(emoji="🌝", name="Full Moon *", weight=0.0),
)
PHASE_WEIGHT = 29.53  # Sum of PHASES weights, ~one synodic month in days

NEW_MOON = 0
FULL_MOON = 4
NEW_MOON_VARIANT = 8
FULL_MOON_VARIANT = 9

_EPOCH = datetime(1970, 1, 1, tzinfo=utc)


def utc_now() -> datetime:
    """Current instant as an aware UTC datetime."""
    return datetime.now(utc)


def _to_millis(when: datetime) -> int:
    """Unix timestamp in whole milliseconds. Naive datetimes are taken as UTC."""
    if when.tzinfo is None:
        when = utc.localize(when)
    delta = when - _EPOCH
    return (delta.days * 86_400 + delta.seconds) * 1000 + delta.microseconds // 1000


def days_from_millis(millis: float) -> float:
    """Convert Unix milliseconds to days since J2000.0 (noon-referenced)."""
    return millis / DAY_MILLIS - 0.5 + J1970 - J2000


def to_days(when: datetime) -> float:
    """Convert a datetime to days since J2000.0.

    Args:
        when: The instant. Naive values are interpreted as UTC.

    Returns:
        Fractional days since Julian Date 2451545.0.
    """
    return days_from_millis(_to_millis(when))


def sun_coords(d: float) -> SunCoords:
    """Solar declination and right ascension for day count ``d``."""
    m = RADS * (357.5291 + 0.98560028 * d)  # Mean anomaly
    c = RADS * (
        1.9148 * math.sin(m) + 0.02 * math.sin(2 * m) + 0.0003 * math.sin(3 * m)
    )  # Equation of centre
    p = RADS * 102.9372  # Perihelion of the Earth
    lng = m + c + p + math.pi

    return SunCoords(
        dec=math.asin(math.sin(EARTH) * math.sin(lng)),
        ra=math.atan2(math.sin(lng) * math.cos(EARTH), math.cos(lng)),
    )


def moon_coords(d: float) -> MoonCoords:
    """Lunar declination, right ascension and distance for day count ``d``."""
    mean_lng = RADS * (218.316 + 13.176396 * d)  # Ecliptic longitude
    m = RADS * (134.963 + 13.064993 * d)  # Mean anomaly
    f = RADS * (93.272 + 13.229350 * d)  # Mean distance

    lng = mean_lng + RADS * 6.289 * math.sin(m)
    lat = RADS * 5.128 * math.sin(f)

    return MoonCoords(
        dec=math.asin(
            math.sin(lat) * math.cos(EARTH)
            + math.cos(lat) * math.sin(EARTH) * math.sin(lng)
        ),
        ra=math.atan2(
            math.sin(lng) * math.cos(EARTH) - math.tan(lat) * math.sin(EARTH),
            math.cos(lng),
        ),
        dist=385_001 - 20_905 * math.cos(m),
    )


def get_phase(when: datetime) -> float:
    """Fractional position of the Moon in its synodic cycle.

    Args:
        when: The instant. Naive values are interpreted as UTC.

    Returns:
        Phase in [0, 1]: 0 and 1 are new moon, 0.5 is full moon,
        (0, 0.5) is waxing and (0.5, 1) is waning.
    """
    d = to_days(when)
    s = sun_coords(d)
    m = moon_coords(d)

    cos_phi = math.sin(s.dec) * math.sin(m.dec) + math.cos(s.dec) * math.cos(
        m.dec
    ) * math.cos(s.ra - m.ra)
    # Rounding can push the cosine a hair past ±1 near conjunction
    phi = math.acos(max(-1.0, min(1.0, cos_phi)))
    inc = math.atan2(SDIST * math.sin(phi), m.dist - SDIST * math.cos(phi))
    angle = math.atan2(
        math.cos(s.dec) * math.sin(s.ra - m.ra),
        math.sin(s.dec) * math.cos(m.dec)
        - math.cos(s.dec) * math.sin(m.dec) * math.cos(s.ra - m.ra),
    )
    phase = 0.5 + 0.5 * inc * math.copysign(1.0, angle) / math.pi
    logger.debug("d=%s phase=%s", d, phase)
    return phase


def step_phase(
    phase: float,
    variant_probability: float | None = None,
    rng: random.Random | None = None,
) -> int:
    """Pick the PHASES index for a phase fraction.

    The cycle is split into weighted bins: the four sharp phases (new, quarters,
    full) get weight 1.0 and the four broad phases get 6.3825. With probability
    ``variant_probability`` a new or full moon is swapped for its variant glyph.

    Args:
        phase: Phase fraction in [0, 1].
        variant_probability: Chance of a variant glyph. Defaults to 0.1.
            Zero disables the variant rule entirely.
        rng: Source of uniform [0, 1) draws. Defaults to the ``random`` module.

    Returns:
        Index into PHASES.
    """
    if variant_probability is None:
        variant_probability = DEFAULT_VARIANT_PROBABILITY
    source = rng if rng is not None else random
    variant = variant_probability > 0 and source.random() <= variant_probability

    remaining = phase * PHASE_WEIGHT
    for i, moon in enumerate(PHASES):
        remaining -= moon.weight
        if remaining < 0:
            if variant and i == NEW_MOON:
                logger.debug("variant glyph for new moon")
                return NEW_MOON_VARIANT
            if variant and i == FULL_MOON:
                logger.debug("variant glyph for full moon")
                return FULL_MOON_VARIANT
            return i
    return NEW_MOON


def moon_phase(
    when: datetime,
    variant_probability: float | None = None,
    rng: random.Random | None = None,
) -> MoonMoji:
    """Phase table entry for the given instant."""
    index = step_phase(get_phase(when), variant_probability, rng)
    logger.debug("when=%s index=%d", when.isoformat(), index)
    return PHASES[index]


def moon_emoji_at(
    when: datetime,
    variant_probability: float | None = None,
    rng: random.Random | None = None,
) -> str:
    """Moon phase glyph for an explicit instant."""
    return moon_phase(when, variant_probability, rng).emoji


def moon_emoji(
    when: datetime | None = None,
    variant_probability: float | None = None,
    rng: random.Random | None = None,
) -> str:
    """Moon phase glyph for ``when``, or for the current UTC instant if None."""
    if when is None:
        when = utc_now()
    return moon_emoji_at(when, variant_probability, rng)


def demo_lines(
    start: datetime | None = None,
    days: int = 30,
    variant_probability: float | None = None,
    rng: random.Random | None = None,
) -> list[str]:
    """One ``"<date> – <name> <glyph>"`` line per consecutive day.

    Args:
        start: First instant. Defaults to now (UTC).
        days: Number of consecutive days to list.
        variant_probability: Passed through to step_phase.
        rng: Passed through to step_phase.

    Returns:
        ``days`` formatted lines, oldest first.
    """
    if start is None:
        start = utc_now()
    lines: list[str] = []
    for offset in range(days):
        curr = start + timedelta(days=offset)
        moji = moon_phase(curr, variant_probability, rng)
        lines.append(f"{curr.date().isoformat()} – {moji.name} {moji.emoji}")
    return lines


def moon_demo(
    start: datetime | None = None,
    days: int = 30,
    variant_probability: float | None = None,
    rng: random.Random | None = None,
) -> None:
    """Print the phase glyph for each of the next ``days`` days (diagnostic)."""
    for line in demo_lines(start, days, variant_probability, rng):
        print(line)
