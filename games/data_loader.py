"""
CLI Games — games/data_loader.py
Settings loader for TOML config powered by Pydantic.
=====================================================================
Stack:       Python 3.11+ | Pydantic v2 | tomllib
Status:      Core settings validation and loading layer.

A missing config file is not an error: every field has a default that
matches the shipped data/config.toml. A malformed file is.
"""

import tomllib
from pathlib import Path
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError

# ================================================================================
# SCHEMAS
# ================================================================================

RGB = Tuple[int, int, int]


class SettingsError(Exception):
    """Raised when data/config.toml cannot be parsed or fails validation."""


class TimingDef(BaseModel):
    model_config = ConfigDict(frozen=True)
    tick_delay: float = Field(default=0.1, gt=0)      # seconds between animation frames
    poll_delay: float = Field(default=0.5, gt=0)      # seconds between auto-replay checks
    hold_duration: float = Field(default=6.0, gt=0)   # seconds a result stays on screen


class ThemeDef(BaseModel):
    """Read-only rendering configuration handed to every render function."""
    model_config = ConfigDict(frozen=True)
    content_width: int = Field(default=40, ge=16)
    title_fg: RGB = (250, 250, 250)
    title_bg: RGB = (125, 86, 244)
    accent: RGB = (125, 86, 244)
    text: RGB = (220, 220, 220)
    coin: RGB = (255, 215, 0)
    countdown: RGB = (136, 136, 136)
    notice: RGB = (255, 140, 0)
    help: RGB = (98, 98, 98)


class AppDef(BaseModel):
    model_config = ConfigDict(frozen=True)
    title: str = "CLI Games"
    width: int = Field(default=60, ge=40)
    height: int = Field(default=30, ge=20)
    trace: bool = False
    seed: Optional[int] = None
    auto_replay: bool = True


class SettingsDef(BaseModel):
    model_config = ConfigDict(frozen=True)
    app: AppDef = Field(default_factory=AppDef)
    timing: TimingDef = Field(default_factory=TimingDef)
    theme: ThemeDef = Field(default_factory=ThemeDef)

# ================================================================================
# LOADERS & CACHE
# ================================================================================

_SETTINGS_CACHE: Optional[SettingsDef] = None

DATA_DIR = Path(__file__).parent.parent / "data"


def load_settings(path: Path) -> SettingsDef:
    """Parses and validates a settings file. Missing file -> defaults."""
    if not path.exists():
        return SettingsDef()

    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
        return SettingsDef(**data)
    except (tomllib.TOMLDecodeError, ValidationError) as exc:
        raise SettingsError(f"Invalid settings file {path}: {exc}") from exc


def get_settings() -> SettingsDef:
    """Loads data/config.toml. Cached globally."""
    global _SETTINGS_CACHE
    if _SETTINGS_CACHE is not None:
        return _SETTINGS_CACHE

    _SETTINGS_CACHE = load_settings(DATA_DIR / "config.toml")
    return _SETTINGS_CACHE
