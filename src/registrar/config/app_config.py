"""Application configuration loader.

Loads centralized configuration from data/config/registrar_config_v1.yaml
(or the file named by $REGISTRAR_CONFIG) with fallback to built-in
defaults.

Usage:
    from registrar.config.app_config import load_app_config

    config = load_app_config()
    config.limits.max_students
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import structlog
import yaml

logger = structlog.get_logger(__name__)

# Config file path (relative to project root)
CONFIG_FILE = Path("data/config/registrar_config_v1.yaml")
CONFIG_ENV_VAR = "REGISTRAR_CONFIG"


@dataclass
class LimitsConfig:
    """Soft limits on collection sizes; exceeding one is a capacity error."""

    max_students: int = 500
    max_courses: int = 100
    max_enrollments: int = 5000
    max_log_entries: int = 10000


@dataclass
class IdConfig:
    """Starting value of each ID sequence."""

    student_offset: int = 1001
    course_offset: int = 5001
    enrollment_offset: int = 7001

    def as_offsets(self) -> dict[str, int]:
        return {
            "student": self.student_offset,
            "course": self.course_offset,
            "enrollment": self.enrollment_offset,
        }


@dataclass
class ExportConfig:
    """Plain-text export settings."""

    default_path: str = "system_export.txt"


@dataclass
class AppConfig:
    """Application-wide configuration."""

    limits: LimitsConfig = field(default_factory=LimitsConfig)
    ids: IdConfig = field(default_factory=IdConfig)
    export: ExportConfig = field(default_factory=ExportConfig)


# Module-level cache
_cached_config: AppConfig | None = None


def _get_defaults() -> dict[str, Any]:
    """Get default configuration values."""
    return {
        "limits": {
            "max_students": 500,
            "max_courses": 100,
            "max_enrollments": 5000,
            "max_log_entries": 10000,
        },
        "ids": {
            "student_offset": 1001,
            "course_offset": 5001,
            "enrollment_offset": 7001,
        },
        "export": {
            "default_path": "system_export.txt",
        },
    }


def _parse_config(data: dict[str, Any]) -> AppConfig:
    """Parse configuration dictionary into AppConfig object.

    Missing sections or keys fall back to defaults.
    """
    defaults = _get_defaults()

    limits_data = {**defaults["limits"], **(data.get("limits") or {})}
    ids_data = {**defaults["ids"], **(data.get("ids") or {})}
    export_data = {**defaults["export"], **(data.get("export") or {})}

    return AppConfig(
        limits=LimitsConfig(
            max_students=int(limits_data["max_students"]),
            max_courses=int(limits_data["max_courses"]),
            max_enrollments=int(limits_data["max_enrollments"]),
            max_log_entries=int(limits_data["max_log_entries"]),
        ),
        ids=IdConfig(
            student_offset=int(ids_data["student_offset"]),
            course_offset=int(ids_data["course_offset"]),
            enrollment_offset=int(ids_data["enrollment_offset"]),
        ),
        export=ExportConfig(default_path=str(export_data["default_path"])),
    )


def _config_path() -> Path:
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override)
    return CONFIG_FILE


def load_app_config(force_reload: bool = False) -> AppConfig:
    """Load application config, falling back to defaults.

    Args:
        force_reload: If True, ignore cached config and reload from file.

    Returns:
        AppConfig object with all settings.
    """
    global _cached_config

    if _cached_config is not None and not force_reload:
        return _cached_config

    config_path = _config_path()

    if config_path.exists():
        logger.debug("loading_app_config", source=str(config_path))
        data = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    else:
        logger.info("using_default_config")
        data = _get_defaults()

    _cached_config = _parse_config(data)
    return _cached_config


def clear_config_cache() -> None:
    """Clear the configuration cache.

    Useful for testing or when config is modified at runtime.
    """
    global _cached_config
    _cached_config = None
