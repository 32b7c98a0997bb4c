"""Tests for environment-driven settings."""

import pytest

from moonmoji.config import (
    TIMEZONE_ENV,
    VARIANT_PROBABILITY_ENV,
    ConfigError,
    load_settings,
    parse_timezone,
    parse_variant_probability,
)
from moonmoji.moon import DEFAULT_VARIANT_PROBABILITY


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv(VARIANT_PROBABILITY_ENV, raising=False)
    monkeypatch.delenv(TIMEZONE_ENV, raising=False)


def test_defaults():
    settings = load_settings()
    assert settings.variant_probability == DEFAULT_VARIANT_PROBABILITY
    assert settings.tz is None


def test_reads_environment(monkeypatch):
    monkeypatch.setenv(VARIANT_PROBABILITY_ENV, "0.25")
    monkeypatch.setenv(TIMEZONE_ENV, "Asia/Seoul")
    settings = load_settings()
    assert settings.variant_probability == 0.25
    assert settings.tz.zone == "Asia/Seoul"


def test_blank_values_fall_back(monkeypatch):
    monkeypatch.setenv(VARIANT_PROBABILITY_ENV, "  ")
    monkeypatch.setenv(TIMEZONE_ENV, "")
    settings = load_settings()
    assert settings.variant_probability == DEFAULT_VARIANT_PROBABILITY
    assert settings.tz is None


@pytest.mark.parametrize("raw", ["often", "-0.1", "1.5", "nan"])
def test_bad_probability(raw):
    with pytest.raises(ConfigError):
        parse_variant_probability(raw)


@pytest.mark.parametrize("raw, expected", [("0", 0.0), ("1", 1.0), ("0.1", 0.1)])
def test_good_probability(raw, expected):
    assert parse_variant_probability(raw) == expected


def test_unknown_timezone():
    with pytest.raises(ConfigError, match="unknown timezone"):
        parse_timezone("Mars/Olympus_Mons")


def test_load_settings_propagates_errors(monkeypatch):
    monkeypatch.setenv(VARIANT_PROBABILITY_ENV, "2")
    with pytest.raises(ConfigError, match="within"):
        load_settings()
