"""
SPRINGCURVE - CONFIGURATION
===========================

Settings loaded from config.yaml and validated with pydantic.

Sections:
- server:  HTTP bind address
- logging: Level and optional log file
- physics: Spring tuning and control-point seed offsets
- curve:   Sampling resolution, tangent markers, line length sliders
- layout:  Canvas sizing rules and initial window size
- input:   Hit radii, pointer mirror offset, tilt mapping
- loop:    Frame rate of the asyncio frame source

Lookup order for the file:
1. Explicit path argument
2. SPRINGCURVE_CONFIG environment variable
3. config.yaml next to the project root (springcurve/config.yaml)

A missing file yields the defaults below.
"""
from __future__ import annotations

import os
import logging
from pathlib import Path
from typing import Optional, Union

import yaml
from pydantic import BaseModel, Field, ConfigDict, model_validator

from springcurve.core.physics import SpringConfig


logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent.parent / "config.yaml"
CONFIG_ENV_VAR = "SPRINGCURVE_CONFIG"


# ============================================================================
# SECTION MODELS
# ============================================================================

class ServerSettings(BaseModel):
    host: str = "127.0.0.1"
    port: int = Field(8000, ge=1, le=65535)

    model_config = ConfigDict(frozen=True)


class LoggingSettings(BaseModel):
    level: str = Field("INFO", description="DEBUG, INFO, WARNING, ERROR")
    file: Optional[str] = Field(None, description="Optional log file path")

    model_config = ConfigDict(frozen=True)


class PhysicsSettings(BaseModel):
    """
    Spring tuning for auto mode.

    Defaults (80, 10) give a slightly underdamped, lively follow.
    """
    stiffness: float = Field(80.0, gt=0)
    damping: float = Field(10.0, ge=0)
    max_dt: float = Field(0.1, gt=0, description="Per-frame stability ceiling (s)")
    auto_seed_height: float = Field(100.0, description="Auto seeds sit this far above the anchors")
    manual_offset: float = Field(50.0, description="Manual seeds offset from the anchors")

    model_config = ConfigDict(frozen=True)

    def spring_config(self) -> SpringConfig:
        return SpringConfig(stiffness=self.stiffness, damping=self.damping, max_dt=self.max_dt)


class CurveSettings(BaseModel):
    """
    Curve sampling and line-length slider ranges.

    line_length is in pixels (regular layout), line_length_percent a
    fraction of the canvas width (compact layout).
    """
    steps: int = Field(100, ge=1)
    tangent_interval: int = Field(10, ge=1)
    tangent_length: float = Field(100.0, ge=0)
    line_length: float = Field(200.0, gt=0)
    line_length_min: float = Field(100.0, gt=0)
    line_length_max: float = Field(1000.0, gt=0)
    line_length_percent: float = Field(0.6, gt=0, lt=1)
    percent_min: float = Field(10.0, gt=0, lt=100)
    percent_max: float = Field(90.0, gt=0, lt=100)

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def _check_ranges(self) -> "CurveSettings":
        if self.line_length_min > self.line_length_max:
            raise ValueError("line_length_min must not exceed line_length_max")
        if self.percent_min > self.percent_max:
            raise ValueError("percent_min must not exceed percent_max")
        return self


class LayoutSettings(BaseModel):
    compact_breakpoint: float = Field(768.0, gt=0, description="Window widths <= this are compact")
    sidebar_width: float = Field(350.0, ge=0)
    window_width: float = Field(1280.0, gt=0, description="Initial window width")
    window_height: float = Field(720.0, gt=0, description="Initial window height")

    model_config = ConfigDict(frozen=True)


class InputSettings(BaseModel):
    mouse_hit_radius: float = Field(20.0, gt=0)
    touch_hit_radius: float = Field(40.0, gt=0)
    pointer_mirror_offset: float = Field(200.0, description="P2 target x offset from the pointer")
    tilt_limit: float = Field(90.0, gt=0, description="Angles are clamped to ±limit degrees")
    tilt_sensitivity: float = Field(45.0, gt=0, description="Degrees of tilt for full deflection")
    tilt_scale_x: float = Field(0.45, ge=0, description="Fraction of canvas width")
    tilt_scale_y: float = Field(0.4, ge=0, description="Fraction of canvas height")

    model_config = ConfigDict(frozen=True)


class LoopSettings(BaseModel):
    fps: float = Field(60.0, gt=0, le=1000)

    model_config = ConfigDict(frozen=True)


class Settings(BaseModel):
    """
    Complete application settings.

    Example:
        settings = load_settings("config.yaml")
        settings.physics.stiffness  # 80.0
    """
    server: ServerSettings = Field(default_factory=ServerSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    physics: PhysicsSettings = Field(default_factory=PhysicsSettings)
    curve: CurveSettings = Field(default_factory=CurveSettings)
    layout: LayoutSettings = Field(default_factory=LayoutSettings)
    input: InputSettings = Field(default_factory=InputSettings)
    loop: LoopSettings = Field(default_factory=LoopSettings)

    model_config = ConfigDict(frozen=True)


# ============================================================================
# LOADING
# ============================================================================

def resolve_config_path(path: Union[str, Path, None] = None) -> Path:
    """Pick the config file path (argument, environment, default)."""
    if path is not None:
        return Path(path)

    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)

    return DEFAULT_CONFIG_PATH


def load_settings(path: Union[str, Path, None] = None) -> Settings:
    """
    Load and validate settings.

    Args:
        path: YAML file (optional, see module docstring for lookup)

    Returns:
        Validated Settings

    Raises:
        pydantic.ValidationError: If the file contains invalid values
        yaml.YAMLError: If the file is not valid YAML
    """
    config_path = resolve_config_path(path)

    if not config_path.exists():
        logger.warning("Config file %s not found, using defaults", config_path)
        return Settings()

    with open(config_path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    settings = Settings.model_validate(data)
    logger.debug("Loaded settings from %s", config_path)

    return settings
