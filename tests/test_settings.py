"""
Tests for settings resolution.
"""

import pytest
from gs1_scanner.settings import (
    DEFAULT_SETTINGS,
    configure_logging,
    load_settings,
    scan_options_from_settings,
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in DEFAULT_SETTINGS:
        monkeypatch.delenv("GS1_SCANNER_" + key.upper(), raising=False)


def test_defaults():
    settings = load_settings()
    assert settings == {
        "soon_threshold_days": 30,
        "exports_dir": "exports",
        "log_level": "WARNING",
        "min_gtin_digits": 8,
    }


def test_environment_overrides_defaults(monkeypatch):
    monkeypatch.setenv("GS1_SCANNER_SOON_THRESHOLD_DAYS", "14")
    monkeypatch.setenv("GS1_SCANNER_EXPORTS_DIR", "/tmp/scans")

    settings = load_settings()
    assert settings["soon_threshold_days"] == 14
    assert settings["exports_dir"] == "/tmp/scans"


def test_empty_environment_value_ignored(monkeypatch):
    monkeypatch.setenv("GS1_SCANNER_LOG_LEVEL", "")
    assert load_settings()["log_level"] == "WARNING"


def test_explicit_overrides_win(monkeypatch):
    monkeypatch.setenv("GS1_SCANNER_SOON_THRESHOLD_DAYS", "14")
    settings = load_settings({"soon_threshold_days": 7, "log_level": None})

    assert settings["soon_threshold_days"] == 7
    assert settings["log_level"] == "WARNING"


def test_non_integer_environment_value(monkeypatch):
    monkeypatch.setenv("GS1_SCANNER_MIN_GTIN_DIGITS", "eight")
    with pytest.raises(ValueError, match="GS1_SCANNER_MIN_GTIN_DIGITS"):
        load_settings()


def test_unknown_override():
    with pytest.raises(KeyError):
        load_settings({"colour": "blue"})


def test_scan_options():
    options = scan_options_from_settings(load_settings({"soon_threshold_days": 10}))
    assert options.soon_threshold_days == 10
    assert options.strip_symbology


def test_configure_logging_rejects_unknown_level():
    with pytest.raises(ValueError, match="LOUD"):
        configure_logging("LOUD")
