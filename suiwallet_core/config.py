"""
TOML-based configuration for the suiwallet key tool.

Loads settings from a TOML file and/or environment variables.
Environment variables take precedence over file values.

Usage:
    from suiwallet_core.config import load_config
    cfg = load_config("suiwallet.toml")
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib


@dataclass
class DerivationConfig:
    """Which accounts to derive, and where the passphrase comes from."""
    account_index: int = 0
    count: int = 1
    # Name of the environment variable holding the BIP-39 passphrase.
    passphrase_env: str = "SUIWALLET_PASSPHRASE"


@dataclass
class OutputConfig:
    """Rendering of derived accounts."""
    format: str = "text"    # "text" or "json"
    show_private: bool = False


@dataclass
class LoggingConfig:
    """Logging settings."""
    level: str = "WARNING"
    format: str = "human"   # "human" or "json"
    file: str | None = None


@dataclass
class SuiWalletConfig:
    """Top-level configuration container."""
    derivation: DerivationConfig = field(default_factory=DerivationConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def _merge(dc: Any, raw: dict[str, Any]) -> None:
    """Merge a raw dict into a dataclass instance (in-place)."""
    for key, value in raw.items():
        key_under = key.replace("-", "_")
        if hasattr(dc, key_under):
            setattr(dc, key_under, value)


def load_config(path: str | None = None) -> SuiWalletConfig:
    """
    Load configuration from a TOML file, then overlay environment variables.

    Env-var mapping:
        SUIWALLET_ACCOUNT_INDEX -> derivation.account_index
        SUIWALLET_ACCOUNT_COUNT -> derivation.count
        SUIWALLET_OUTPUT        -> output.format
        SUIWALLET_LOG_LEVEL     -> logging.level
        SUIWALLET_LOG_FMT       -> logging.format
        SUIWALLET_LOG_FILE      -> logging.file
    """
    cfg = SuiWalletConfig()

    # ── TOML file ────────────────────────────────────────────────
    if path is not None:
        p = Path(path)
        if p.exists():
            with open(p, "rb") as f:
                data = tomllib.load(f)
            for section_name, section_dc in [
                ("derivation", cfg.derivation),
                ("output", cfg.output),
                ("logging", cfg.logging),
            ]:
                if section_name in data:
                    _merge(section_dc, data[section_name])

    # ── Environment variable overrides ───────────────────────────
    if v := os.environ.get("SUIWALLET_ACCOUNT_INDEX"):
        cfg.derivation.account_index = int(v)
    if v := os.environ.get("SUIWALLET_ACCOUNT_COUNT"):
        cfg.derivation.count = int(v)
    if v := os.environ.get("SUIWALLET_OUTPUT"):
        cfg.output.format = v.lower()
    if v := os.environ.get("SUIWALLET_LOG_LEVEL"):
        cfg.logging.level = v.upper()
    if v := os.environ.get("SUIWALLET_LOG_FMT"):
        cfg.logging.format = v
    if v := os.environ.get("SUIWALLET_LOG_FILE"):
        cfg.logging.file = v

    return cfg
