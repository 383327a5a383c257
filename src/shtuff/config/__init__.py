"""
shtuff configuration system.

    from shtuff.config import get_config

    config = get_config()
    print(config.monitor.default_style)   # "spinner"
    print(config.progress.width)          # 40
"""

from .loader import (
    load_config,
    get_config,
    reload_config,
    validate_config_file,
    ConfigLoader,
    ConfigurationError,
)

from .models import (
    ShtuffConfig,
    AppConfig,
    MonitorConfig,
    ProgressConfig,
    UIConfig,
    LogLevel,
    ColorMode,
)

__all__ = [
    "get_config",
    "load_config",
    "reload_config",
    "validate_config_file",
    "ConfigLoader",
    "ConfigurationError",
    "ShtuffConfig",
    "AppConfig",
    "MonitorConfig",
    "ProgressConfig",
    "UIConfig",
    "LogLevel",
    "ColorMode",
]
