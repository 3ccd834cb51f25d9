"""Configuration management.

Loads from YAML config file with environment variable overrides.
Pattern: CONFIG__{SECTION}__{KEY} overrides nested YAML keys.
Example: CONFIG__SETTINGS__TARGET_SALARY=3500
"""

import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel

from .models import SettingsSnapshot


# --- Data ---


class DataConfig(BaseModel):
    path: str = "data/finance.yml"  # YAML document read by YamlStore


# --- Report rendering ---


class ReportConfig(BaseModel):
    typst_binary: str = "typst"
    fonts_dir: Optional[str] = None
    templates_dir: Optional[str] = None
    # Use the canonical symbol for settings.currency instead of settings.currency_symbol
    normalize_currency_symbol: bool = False


class LoggingConfig(BaseModel):
    level: str = "INFO"


# --- Service Config ---


class AppConfig(BaseModel):
    settings: SettingsSnapshot = SettingsSnapshot()
    data: DataConfig = DataConfig()
    report: ReportConfig = ReportConfig()
    logging: LoggingConfig = LoggingConfig()


def _apply_env_overrides(config_dict: dict, prefix: str = "CONFIG") -> dict:
    """Apply environment variable overrides to config dict.

    Pattern: CONFIG__SECTION__KEY=value maps to config[section][key] = value
    """
    for key, value in os.environ.items():
        if not key.startswith(f"{prefix}__"):
            continue
        parts = key[len(prefix) + 2 :].lower().split("__")
        target = config_dict
        for part in parts[:-1]:
            target = target.setdefault(part, {})
        # Type coercion for common cases; pydantic handles numeric strings
        if value.lower() in ("true", "false"):
            value = value.lower() == "true"
        elif value.isdigit():
            value = int(value)
        target[parts[-1]] = value
    return config_dict


def load_config(
    config_path: Optional[str] = None,
) -> AppConfig:
    """Load configuration from YAML file with env overrides.

    Priority: env vars > YAML file > defaults
    """
    config_dict = {}

    # 1. Load YAML if exists
    if config_path is None:
        config_path = os.getenv("CONFIG_PATH", "config/backoffice.yml")
    path = Path(config_path)
    if path.exists():
        with open(path, encoding="utf-8") as f:
            config_dict = yaml.safe_load(f) or {}

    # 2. Apply env overrides
    config_dict = _apply_env_overrides(config_dict)

    # 3. Data file from dedicated env var (common pattern)
    if os.getenv("FINANCE_DATA_PATH"):
        config_dict.setdefault("data", {})["path"] = os.environ["FINANCE_DATA_PATH"]

    return AppConfig(**config_dict)


# Singleton for the process
_config: Optional[AppConfig] = None


def get_config() -> AppConfig:
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reload_config(config_path: Optional[str] = None) -> AppConfig:
    global _config
    _config = load_config(config_path)
    return _config
