"""
TOML-based configuration for ZelUnit.

Loads settings from a TOML file and/or environment variables.
Environment variables take precedence over file values.

Usage:
    from zelunit_core.config import load_config
    cfg = load_config("zelunit.toml")
    # or configure("zelunit.toml") to also set up logging
    unit.at_rate(350, decimals=cfg.display.fiat_decimals)
"""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from dataclasses import field
from pathlib import Path
from typing import Any

from zelunit_core.logging_config import setup_logging_from_config
from zelunit_core.unit import Denomination

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import,no-redef]

logger = logging.getLogger("zelunit_config")


@dataclass
class DisplayConfig:
    """How amounts are rendered for people."""
    default_code: str = "ZEL"   # denomination used by Unit.to_string(cfg.display.default_code)
    fiat_decimals: int = 2      # decimal places for fiat conversions


@dataclass
class LoggingConfig:
    """Logging settings."""
    level: str = "INFO"
    format: str = "human"   # "human" or "json"
    file: str | None = None
    library_level: str | None = None   # level for the zelunit_* loggers only


@dataclass
class ZelUnitConfig:
    """Top-level configuration container."""
    display: DisplayConfig = field(default_factory=DisplayConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def _merge(dc: Any, raw: dict[str, Any]) -> None:
    """Merge a raw dict into a dataclass instance (in-place)."""
    for key, value in raw.items():
        key_under = key.replace("-", "_")
        if hasattr(dc, key_under):
            setattr(dc, key_under, value)


def _validate(cfg: ZelUnitConfig) -> None:
    # Raises UnknownCode for anything but ZEL / mZEL / bits / satoshis.
    cfg.display.default_code = Denomination.parse(cfg.display.default_code).value
    raw = cfg.display.fiat_decimals
    # Env vars and quoted TOML values arrive as strings.
    if isinstance(raw, bool) or not isinstance(raw, (int, str)):
        raise ValueError(f"fiat_decimals must be an integer, got {raw!r}")
    try:
        decimals = int(raw)
    except ValueError as exc:
        raise ValueError(f"fiat_decimals must be an integer, got {raw!r}") from exc
    if decimals < 0:
        raise ValueError(f"fiat_decimals must be >= 0, got {decimals}")
    cfg.display.fiat_decimals = decimals


def load_config(path: str | None = None) -> ZelUnitConfig:
    """
    Load configuration from a TOML file, then overlay environment variables.

    Env-var mapping:
        ZELUNIT_DEFAULT_CODE   -> display.default_code
        ZELUNIT_FIAT_DECIMALS  -> display.fiat_decimals
        ZELUNIT_LOG_LEVEL      -> logging.level
        ZELUNIT_LOG_FMT        -> logging.format
        ZELUNIT_LOG_FILE       -> logging.file
        ZELUNIT_LIB_LOG_LEVEL  -> logging.library_level
    """
    cfg = ZelUnitConfig()

    # ── TOML file ────────────────────────────────────────────────
    if path is not None:
        p = Path(path)
        if p.exists():
            with open(p, "rb") as f:
                data = tomllib.load(f)
            for section_name, section_dc in [
                ("display", cfg.display),
                ("logging", cfg.logging),
            ]:
                if section_name in data:
                    _merge(section_dc, data[section_name])
        else:
            logger.debug(f"Config file {p} not found, using defaults")

    # ── Environment variable overrides ───────────────────────────
    if v := os.environ.get("ZELUNIT_DEFAULT_CODE"):
        cfg.display.default_code = v
    if v := os.environ.get("ZELUNIT_FIAT_DECIMALS"):
        cfg.display.fiat_decimals = v
    if v := os.environ.get("ZELUNIT_LOG_LEVEL"):
        cfg.logging.level = v.upper()
    if v := os.environ.get("ZELUNIT_LOG_FMT"):
        cfg.logging.format = v
    if v := os.environ.get("ZELUNIT_LOG_FILE"):
        cfg.logging.file = v
    if v := os.environ.get("ZELUNIT_LIB_LOG_LEVEL"):
        cfg.logging.library_level = v.upper()

    _validate(cfg)
    return cfg


def configure(path: str | None = None) -> ZelUnitConfig:
    """Load the configuration and apply its ``[logging]`` section."""
    cfg = load_config(path)
    setup_logging_from_config(cfg.logging)
    logger.debug(
        f"Configured: default_code={cfg.display.default_code} "
        f"fiat_decimals={cfg.display.fiat_decimals}"
    )
    return cfg
