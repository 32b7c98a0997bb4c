"""Clock-face glyph for a wall-clock time, rounded to the nearest half-hour."""

from datetime import datetime, timedelta

from pytz.tzinfo import BaseTzInfo

CLOCKS: tuple[str, ...] = (
    "🕛", "🕧", "🕐", "🕜", "🕑", "🕝", "🕒", "🕞", "🕓", "🕟", "🕔", "🕠",
    "🕕", "🕡", "🕖", "🕢", "🕗", "🕣", "🕘", "🕤", "🕙", "🕥", "🕚", "🕦",
)  # fmt: skip
HALF_HOUR = 60 * 30
_ROUNDING = timedelta(minutes=15)


def local_now(tz: BaseTzInfo | None = None) -> datetime:
    """Current wall-clock time in ``tz``, or in the host's local time if None."""
    if tz is None:
        return datetime.now()
    return datetime.now(tz)


def clock_emoji_at(when: datetime) -> str:
    """Map a wall-clock time to one of the 24 clock faces.

    The 15 minute shift makes the index round to the nearest half-hour instead
    of truncating, so 00:14:59 is still 🕛 and 00:15:00 is already 🕧.

    Args:
        when: Local time. For aware datetimes the wall-clock fields are used.

    Returns:
        Clock glyph.
    """
    shifted = when + _ROUNDING
    seconds = shifted.hour * 3600 + shifted.minute * 60 + shifted.second
    return CLOCKS[seconds // HALF_HOUR % len(CLOCKS)]


def clock_emoji(when: datetime | None = None, tz: BaseTzInfo | None = None) -> str:
    """Clock glyph for ``when``, or for the current time in ``tz`` if None."""
    if when is None:
        when = local_now(tz)
    return clock_emoji_at(when)
