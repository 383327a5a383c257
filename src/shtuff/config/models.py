"""
Pydantic models for shtuff configuration validation.
"""

from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ..ui.styles import DEFAULT_STYLE, STYLES
from ..ui.terminal import color_names


class LogLevel(str, Enum):
    """Supported log levels."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class ColorMode(str, Enum):
    """When to emit ANSI colors."""
    AUTO = "auto"
    ALWAYS = "always"
    NEVER = "never"


class AppConfig(BaseModel):
    """Application-level configuration settings."""

    log_level: LogLevel = Field(default=LogLevel.WARNING, description="Logging level")
    verbose_logging: bool = Field(default=False, description="Enable verbose debug logging")
    log_file: Optional[str] = Field(default=None, description="JSON log file location")
    max_log_size_mb: int = Field(default=10, ge=1, le=1000, description="Maximum log file size")
    backup_count: int = Field(default=5, ge=1, le=100, description="Number of backup log files")

    @field_validator('log_file')
    @classmethod
    def expand_path(cls, v):
        """Expand user home directory in paths."""
        return str(Path(v).expanduser()) if v else None


class MonitorConfig(BaseModel):
    """Defaults for watching a task."""

    default_style: str = Field(default=DEFAULT_STYLE, description="Indicator style used when none is given")
    frame_interval: float = Field(default=0.1, ge=0.01, le=1.0, description="Seconds between frames")
    label: str = Field(default="Processing", description="Label drawn next to the indicator")
    indicator_color: str = Field(default="cyan", description="Color of the indicator line")

    @field_validator('default_style')
    @classmethod
    def validate_style(cls, v):
        if v not in STYLES:
            raise ValueError(f"unknown style '{v}', expected one of: {', '.join(STYLES)}")
        return v

    @field_validator('indicator_color')
    @classmethod
    def validate_color(cls, v):
        if v.lower() not in color_names():
            raise ValueError(f"unknown color '{v}', expected one of: {', '.join(color_names())}")
        return v.lower()


class ProgressConfig(BaseModel):
    """Defaults for the progress bar."""

    width: int = Field(default=40, ge=1, le=500, description="Number of glyphs in the bar")
    label: str = Field(default="Progress", description="Label drawn before the bar")


class UIConfig(BaseModel):
    """Terminal output settings."""

    color: ColorMode = Field(default=ColorMode.AUTO, description="Color output mode")


class ShtuffConfig(BaseModel):
    """Complete shtuff configuration."""

    app: AppConfig = Field(default_factory=AppConfig)
    monitor: MonitorConfig = Field(default_factory=MonitorConfig)
    progress: ProgressConfig = Field(default_factory=ProgressConfig)
    ui: UIConfig = Field(default_factory=UIConfig)
