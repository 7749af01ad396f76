"""
Model Translations Configuration — Load and validate translatable.yaml.

Two options are consumed by the translation core (``translatable.auto_load``
and ``translatable.fallback``) plus the application's locale settings, which
are owned by the host but read here so the resolver has one place to look.

Usage:
    from model_translations.engine.config import load_settings, get_settings, configure
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal, Optional

import yaml
from pydantic import BaseModel, field_validator

CONFIG_FILENAME = "translatable.yaml"


# ---------------------------------------------------------------------------
# Pydantic models for translatable.yaml
# ---------------------------------------------------------------------------

class TranslatableConfig(BaseModel):
    auto_load: bool = True
    fallback: Optional[Literal["app", "first"]] = "app"

    @field_validator("fallback", mode="before")
    @classmethod
    def normalize_fallback(cls, v: Any) -> Any:
        # YAML "null"/"none"/"" all mean no fallback
        if isinstance(v, str) and v.strip().lower() in ("", "null", "none"):
            return None
        return v


class AppLocaleConfig(BaseModel):
    locale: str = "en"
    fallback_locale: str = "en"


class LoggingConfig(BaseModel):
    level: str = "INFO"
    directory: Optional[str] = None

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        v = v.upper()
        if v not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"logging.level must be DEBUG/INFO/WARNING/ERROR/CRITICAL, got '{v}'")
        return v


class Settings(BaseModel):
    """Root model for translatable.yaml."""
    translatable: TranslatableConfig = TranslatableConfig()
    app: AppLocaleConfig = AppLocaleConfig()
    logging: LoggingConfig = LoggingConfig()


# ---------------------------------------------------------------------------
# Config Loading Functions
# ---------------------------------------------------------------------------

_settings: Optional[Settings] = None


def _find_config_file() -> Optional[Path]:
    """Walk up from CWD looking for translatable.yaml."""
    current = Path.cwd()
    for parent in [current, *current.parents]:
        candidate = parent / CONFIG_FILENAME
        if candidate.exists():
            return candidate
    return None


def load_settings(config_path: Optional[str] = None) -> Settings:
    """
    Load and validate translatable.yaml.

    Args:
        config_path: Explicit path to the config file. If None, auto-discovers.

    Returns:
        Validated Settings instance (defaults if no file exists).
    """
    global _settings

    path = Path(config_path) if config_path else _find_config_file()
    if path is None or not path.exists():
        _settings = Settings()
        return _settings

    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    _settings = Settings(
        translatable=raw.get("translatable") or {},
        app=raw.get("app") or {},
        logging=raw.get("logging") or {},
    )
    return _settings


def get_settings() -> Settings:
    """Get the currently loaded settings, loading if necessary."""
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings


def configure(**sections: Any) -> Settings:
    """
    Override settings programmatically, section by section.

    Usage:
        configure(translatable={"fallback": "first"}, app={"locale": "fr"})
    """
    global _settings
    current = get_settings().model_dump()
    for section, values in sections.items():
        if section not in current:
            raise KeyError(f"Unknown settings section '{section}'. Available: {list(current.keys())}")
        current[section].update(values or {})
    _settings = Settings(**current)
    return _settings


def reset_settings() -> None:
    """Forget loaded settings; the next get_settings() reloads from disk."""
    global _settings
    _settings = None
