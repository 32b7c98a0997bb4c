"""Runtime settings read from the environment (and ``.env`` via python-dotenv)."""

import logging
import os
from dataclasses import dataclass

from pytz import UnknownTimeZoneError, timezone
from pytz.tzinfo import BaseTzInfo

from moonmoji.moon import DEFAULT_VARIANT_PROBABILITY

logger = logging.getLogger(__name__)

VARIANT_PROBABILITY_ENV = "MOONMOJI_VARIANT_PROBABILITY"
TIMEZONE_ENV = "MOONMOJI_TIMEZONE"


class ConfigError(Exception):
    """Invalid configuration value."""


@dataclass(frozen=True)
class Settings:
    """Resolved configuration. Input to the CLI commands."""

    variant_probability: float  # Chance of 🌚/🌝 in place of 🌑/🌕
    tz: BaseTzInfo | None  # Zone for the clock's "now"; None = host local time


def parse_variant_probability(raw: str) -> float:
    """Parse a variant probability string.

    Raises:
        ConfigError: If the value is not a number in [0, 1].
    """
    try:
        value = float(raw)
    except ValueError as exc:
        raise ConfigError(f"variant probability is not a number: {raw!r}") from exc
    if not 0.0 <= value <= 1.0:
        raise ConfigError(f"variant probability must be within [0, 1]: {value}")
    return value


def parse_timezone(name: str) -> BaseTzInfo:
    """Look up a pytz timezone by name.

    Raises:
        ConfigError: If the zone is unknown.
    """
    try:
        return timezone(name)
    except UnknownTimeZoneError as exc:
        raise ConfigError(f"unknown timezone: {name!r}") from exc


def load_settings() -> Settings:
    """Build Settings from ``MOONMOJI_*`` environment variables.

    Empty or unset variables fall back to the defaults.

    Returns:
        Settings with the parsed values.

    Raises:
        ConfigError: On an unparseable value.
    """
    raw_p = os.environ.get(VARIANT_PROBABILITY_ENV, "").strip()
    raw_tz = os.environ.get(TIMEZONE_ENV, "").strip()

    settings = Settings(
        variant_probability=(
            parse_variant_probability(raw_p) if raw_p else DEFAULT_VARIANT_PROBABILITY
        ),
        tz=parse_timezone(raw_tz) if raw_tz else None,
    )
    logger.debug("settings: %s", settings)
    return settings
