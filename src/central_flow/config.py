"""Launcher configuration: icon search paths, application directories, providers.

Every filesystem location the core reads from is lifted into
:class:`LauncherConfig` so icon lookup and the application scanner can
be pointed at fixture directories.  Defaults follow the freedesktop
layout of a typical Linux desktop.

Example YAML::

    icon_themes: [Papirus, hicolor]
    icon_sizes: [64, 48, 32]
    builtin_providers: [app-launcher]
    external_provider_directory: ~/.config/central-flow/plugins
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, field_validator

from central_flow.models import _normalize_string_list, _StrictModel

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "CENTRAL_FLOW_CONFIG"

DEFAULT_ICON_THEMES: tuple[str, ...] = (
    "hicolor",
    "Adwaita",
    "ubuntu-mono-light",
    "Humanity",
    "breeze",
    "Papirus",
)
DEFAULT_ICON_SIZES: tuple[int, ...] = (48, 32, 24, 16)
DEFAULT_BUILTIN_PROVIDERS: tuple[str, ...] = ("app-launcher", "window-list")


def default_icon_base_directories() -> list[Path]:
    home = Path.home()
    return [
        Path("/usr/share/icons"),
        Path("/usr/share/pixmaps"),
        home / ".local" / "share" / "icons",
        home / ".icons",
    ]


def default_application_directories() -> list[Path]:
    return [
        Path("/usr/share/applications"),
        Path("/usr/local/share/applications"),
        Path.home() / ".local" / "share" / "applications",
    ]


def default_external_provider_directory() -> Path:
    return Path.home() / ".config" / "central-flow" / "plugins"


def _expand_paths(values: list[Path]) -> list[Path]:
    return [Path(value).expanduser() for value in values]


class LauncherConfig(_StrictModel):
    """Everything the core needs from its environment.

    Attributes:
        icon_base_directories: Roots searched for icon themes, in order.
        icon_themes: Theme directory names tried under each root, in order.
        icon_sizes: Pixel sizes tried largest first (``48`` means ``48x48``).
        application_directories: Directories scanned for ``.desktop`` files.
        external_provider_directory: One subdirectory per third-party
            provider.  ``None`` disables external loading.
        builtin_providers: Bundled provider names loaded at startup.
        max_app_results: Cap on the application provider's candidates.
    """

    icon_base_directories: list[Path] = Field(
        default_factory=default_icon_base_directories
    )
    icon_themes: list[str] = Field(default_factory=lambda: list(DEFAULT_ICON_THEMES))
    icon_sizes: list[int] = Field(default_factory=lambda: list(DEFAULT_ICON_SIZES))
    application_directories: list[Path] = Field(
        default_factory=default_application_directories
    )
    external_provider_directory: Path | None = Field(
        default_factory=default_external_provider_directory
    )
    builtin_providers: list[str] = Field(
        default_factory=lambda: list(DEFAULT_BUILTIN_PROVIDERS)
    )
    max_app_results: int = 10

    @field_validator("icon_base_directories", "application_directories")
    @classmethod
    def expand_directories(cls, values: list[Path]) -> list[Path]:
        return _expand_paths(values)

    @field_validator("external_provider_directory")
    @classmethod
    def expand_external_directory(cls, value: Path | None) -> Path | None:
        return Path(value).expanduser() if value is not None else None

    @field_validator("icon_themes", "builtin_providers")
    @classmethod
    def normalize_names(cls, values: list[str]) -> list[str]:
        return _normalize_string_list(values)

    @field_validator("icon_sizes")
    @classmethod
    def validate_sizes(cls, values: list[int]) -> list[int]:
        if any(size <= 0 for size in values):
            raise ValueError("icon sizes must be positive")
        return values

    @field_validator("max_app_results")
    @classmethod
    def validate_max_results(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("max_app_results must be positive")
        return value


def load_launcher_config(path: str | Path) -> LauncherConfig:
    """Read a YAML config file.  Missing keys keep their defaults."""
    path = Path(path)
    with open(path, encoding="utf-8") as f:
        raw_data = yaml.safe_load(f)
    if raw_data is None:
        raise ValueError(f"Empty launcher config YAML: {path}")
    if not isinstance(raw_data, dict):
        raise ValueError(f"Launcher config YAML root must be a mapping: {path}")

    data: dict[str, Any] = raw_data
    return LauncherConfig(**data)


def resolve_config_path(explicit: str | Path | None = None) -> Path | None:
    """Pick the config file: explicit argument first, then ``$CENTRAL_FLOW_CONFIG``."""
    if explicit:
        return Path(explicit).expanduser()
    from_env = os.environ.get(CONFIG_ENV_VAR, "").strip()
    if from_env:
        return Path(from_env).expanduser()
    return None


def load_config_or_default(explicit: str | Path | None = None) -> LauncherConfig:
    path = resolve_config_path(explicit)
    if path is None:
        return LauncherConfig()
    if not path.is_file():
        logger.warning("Launcher config does not exist: %s (using defaults)", path)
        return LauncherConfig()
    return load_launcher_config(path)
