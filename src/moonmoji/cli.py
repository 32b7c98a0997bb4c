"""Console entry points: ``clockmoji`` and ``moonmoji``.

Each prints a single glyph, suitable for a shell prompt or status bar:
    clockmoji --tz Europe/Berlin
    moonmoji --at "2013-03-05 00:00"
    moonmoji --demo
"""

import logging
import sys
from datetime import datetime

import click
from dotenv import load_dotenv
from pytz import utc

from moonmoji.clock import clock_emoji
from moonmoji.config import ConfigError, Settings, load_settings, parse_timezone
from moonmoji.moon import demo_lines, moon_phase, utc_now

logger = logging.getLogger(__name__)

_DATETIME = click.DateTime(formats=["%Y-%m-%d %H:%M", "%Y-%m-%d %H:%M:%S", "%Y-%m-%d"])


def set_debug_logging(debug: bool) -> None:
    """Send DEBUG logs to stderr when ``debug`` is set. stdout stays glyph-only."""
    if not debug:
        return
    logging.basicConfig(
        stream=sys.stderr,
        format="%(name)s - %(levelname)s - %(message)s",
        level=logging.DEBUG,
        force=True,
    )
    logger.debug("Debug mode enabled - logging=DEBUG")


def _settings() -> Settings:
    load_dotenv()
    try:
        return load_settings()
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc


@click.command()
@click.option("--at", "at", type=_DATETIME, help="Local wall-clock time instead of now.")
@click.option("--tz", "tz_name", help="Timezone for 'now', e.g. Asia/Seoul.")
@click.option("--debug", is_flag=True, help="Log to stderr.")
def clockmoji(at: datetime | None, tz_name: str | None, debug: bool) -> None:
    """Print the clock face nearest to the current time."""
    set_debug_logging(debug)
    settings = _settings()
    tz = settings.tz
    if tz_name:
        try:
            tz = parse_timezone(tz_name)
        except ConfigError as exc:
            raise click.BadParameter(str(exc), param_hint="'--tz'") from exc
    click.echo(clock_emoji(at, tz))


@click.command()
@click.option("--at", "at", type=_DATETIME, help="UTC time instead of now.")
@click.option(
    "--variant-probability",
    "-p",
    type=click.FloatRange(0.0, 1.0),
    help="Chance of 🌚/🌝 in place of 🌑/🌕.",
)
@click.option("--demo", is_flag=True, help="List one phase per day.")
@click.option(
    "--days",
    type=click.IntRange(min=1),
    default=30,
    show_default=True,
    help="Number of days listed by --demo.",
)
@click.option("--name", "with_name", is_flag=True, help="Print the phase name too.")
@click.option("--debug", is_flag=True, help="Log to stderr.")
def moonmoji(
    at: datetime | None,
    variant_probability: float | None,
    demo: bool,
    days: int,
    with_name: bool,
    debug: bool,
) -> None:
    """Print the current phase of the Moon."""
    set_debug_logging(debug)
    settings = _settings()
    if variant_probability is None:
        variant_probability = settings.variant_probability
    when = utc.localize(at) if at is not None else utc_now()

    if demo:
        for line in demo_lines(when, days, variant_probability):
            click.echo(line)
        return

    moji = moon_phase(when, variant_probability)
    click.echo(f"{moji.name} {moji.emoji}" if with_name else moji.emoji)
