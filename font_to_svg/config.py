"""Configuration for font-to-svg.

Values are layered: dataclass defaults, then an optional YAML file, then
environment variables. The resulting Config is handed to the collaborators
that need it (FontResolver.from_config, FontCache.from_config) instead of
being read from globals.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml

from font_to_svg.exceptions import ConfigError

DEFAULT_FONTS_DIR = Path("fonts")
DEFAULT_UPLOADS_DIR = Path("uploads")
DEFAULT_FONT_FILE = "SourceHanSerifJP-Light.otf"
DEFAULT_CACHE_MAX_BYTES = 256 * 1024 * 1024

CONFIG_ENV_VAR = "FONT2SVG_CONFIG"
USER_CONFIG_PATH = Path.home() / ".config" / "font2svg" / "config.yaml"

# env var -> config field
ENV_OVERRIDES = {
    "FONT2SVG_FONTS_DIR": "fonts_dir",
    "FONT2SVG_UPLOADS_DIR": "uploads_dir",
    "FONT2SVG_DEFAULT_FONT": "default_font",
    "FONT2SVG_CACHE_MAX_BYTES": "cache_max_bytes",
    "FONT2SVG_LOG_LEVEL": "log_level",
}

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class Config:
    """Runtime configuration.

    Attributes:
        fonts_dir: Root directory of the bundled (default) fonts.
        uploads_dir: Root directory of user-uploaded fonts.
        default_font: File name, relative to fonts_dir, used when no font key is given.
        cache_max_bytes: Byte ceiling of the font resource cache.
        log_level: Logging level name used by the CLI.
    """

    fonts_dir: Path = field(default_factory=lambda: DEFAULT_FONTS_DIR)
    uploads_dir: Path = field(default_factory=lambda: DEFAULT_UPLOADS_DIR)
    default_font: str = DEFAULT_FONT_FILE
    cache_max_bytes: int = DEFAULT_CACHE_MAX_BYTES
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        self.fonts_dir = Path(self.fonts_dir).expanduser()
        self.uploads_dir = Path(self.uploads_dir).expanduser()
        self.default_font = str(self.default_font)
        try:
            self.cache_max_bytes = int(self.cache_max_bytes)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"cache_max_bytes must be an integer, got {self.cache_max_bytes!r}") from e
        if self.cache_max_bytes <= 0:
            raise ConfigError(f"cache_max_bytes must be positive, got {self.cache_max_bytes}")
        self.log_level = str(self.log_level).upper()
        if self.log_level not in LOG_LEVELS:
            raise ConfigError(f"log_level must be one of {', '.join(LOG_LEVELS)}, got {self.log_level!r}")

    @classmethod
    def load(cls, path: Path | str | None = None) -> Config:
        """Load configuration from YAML and environment.

        Args:
            path: Explicit config file. When None, $FONT2SVG_CONFIG is used,
                then ~/.config/font2svg/config.yaml if it exists.

        Returns:
            The merged Config.

        Raises:
            ConfigError: If the file is missing, malformed or holds bad values.
        """
        values: dict[str, Any] = {}

        config_path = cls._config_path(path)
        if config_path is not None:
            values.update(cls._read_yaml(config_path))

        for env_var, name in ENV_OVERRIDES.items():
            raw = os.environ.get(env_var)
            if raw:
                values[name] = raw

        return cls(**values)

    @staticmethod
    def _config_path(path: Path | str | None) -> Path | None:
        if path is not None:
            return Path(path)
        env_path = os.environ.get(CONFIG_ENV_VAR)
        if env_path:
            return Path(env_path)
        if USER_CONFIG_PATH.is_file():
            return USER_CONFIG_PATH
        return None

    @staticmethod
    def _read_yaml(config_path: Path) -> dict[str, Any]:
        if not config_path.is_file():
            raise ConfigError(f"Config file not found: {config_path}")
        try:
            data = yaml.safe_load(config_path.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(f"Config root must be a mapping in {config_path}")

        known = {f.name for f in fields(Config)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown config keys in {config_path}: {', '.join(unknown)}")
        return data
