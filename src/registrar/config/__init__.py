"""Configuration package for the records system."""

from registrar.config.app_config import (
    AppConfig,
    ExportConfig,
    IdConfig,
    LimitsConfig,
    clear_config_cache,
    load_app_config,
)

__all__ = [
    "AppConfig",
    "ExportConfig",
    "IdConfig",
    "LimitsConfig",
    "clear_config_cache",
    "load_app_config",
]
