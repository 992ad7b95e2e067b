"""
Scanner settings and logging setup.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional

from .core.extractor import ScanOptions


ENV_PREFIX = "GS1_SCANNER_"

DEFAULT_SETTINGS: Dict[str, Any] = {
    "soon_threshold_days": 30,
    "exports_dir": "exports",
    "log_level": "WARNING",
    "min_gtin_digits": 8,  # catalog rows with fewer digits are dropped
}

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _coerce(key: str, raw: str) -> Any:
    default = DEFAULT_SETTINGS[key]
    if isinstance(default, int):
        try:
            return int(raw)
        except ValueError:
            raise ValueError(f"Setting {ENV_PREFIX}{key.upper()} must be an integer, got {raw!r}") from None
    return raw


def load_settings(overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Resolve settings: defaults, then environment, then explicit overrides.

    Environment variables are named ``GS1_SCANNER_<KEY>``, e.g.
    ``GS1_SCANNER_SOON_THRESHOLD_DAYS=14``.
    """
    settings = dict(DEFAULT_SETTINGS)
    for key in DEFAULT_SETTINGS:
        env_value = os.getenv(ENV_PREFIX + key.upper())
        if env_value is not None and env_value != "":
            settings[key] = _coerce(key, env_value)
    for key, value in (overrides or {}).items():
        if value is None:
            continue
        if key not in DEFAULT_SETTINGS:
            raise KeyError(f"Unknown setting: {key}")
        settings[key] = value
    return settings


def scan_options_from_settings(settings: Dict[str, Any]) -> ScanOptions:
    return ScanOptions(soon_threshold_days=int(settings["soon_threshold_days"]))


def configure_logging(level: Any = None) -> None:
    """Configure root logging for command line use."""
    if level is None:
        level = load_settings()["log_level"]
    if isinstance(level, str):
        # getLevelName maps registered names to ints and anything else to a string
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level: {level!r}")
        level = resolved
    logging.basicConfig(level=level, format=LOG_FORMAT)
