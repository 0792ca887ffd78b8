from pathlib import Path
import yaml
from dataclasses import dataclass, field, fields
from typing import Any

from .exceptions import ConfigError

DEFAULT_CONFIG_PATH = Path(__file__).parent / "config.yaml"

@dataclass
class ResizeConfig:
    max_width: int = 510
    max_height: int = 580
    filter: str = "LANCZOS"
    blur_factor: float = 1.0

@dataclass
class TransparencyConfig:
    background_color: str = "white"
    threshold: int = 1279

@dataclass
class EngineConfig:
    jpeg_quality: int = 75
    fallback_format: str = "PNG"
    transparent_formats: set[str] = field(default_factory=lambda: {"GIF", "PNG", "WEBP"})
    lossy_formats: set[str] = field(default_factory=lambda: {"JPEG"})

    def __post_init__(self) -> None:
        self.transparent_formats = {name.upper() for name in self.transparent_formats}
        self.lossy_formats = {name.upper() for name in self.lossy_formats}

@dataclass
class OrientationConfig:
    fill_color: str = "#000"


def _section(cls: type, raw: Any, name: str) -> Any:
    if raw is None:
        return cls()
    if not isinstance(raw, dict):
        raise ConfigError(f"Section '{name}' must be a mapping")
    known = {f.name for f in fields(cls)}
    unknown = set(raw) - known
    if unknown:
        raise ConfigError(f"Unknown keys in section '{name}': {', '.join(sorted(unknown))}")
    return cls(**raw)


class Config:
    def __init__(self, config_path: Path | str | None = None):
        if config_path is None:
            config_path = DEFAULT_CONFIG_PATH

        try:
            with open(config_path) as f:
                config: dict[str, Any] | None = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Failed to load configuration from {config_path}: {e}") from e

        if config is None:
            config = {}
        if not isinstance(config, dict):
            raise ConfigError(f"Configuration in {config_path} must be a mapping")

        self.resize = _section(ResizeConfig, config.get("resize"), "resize")
        self.transparency = _section(TransparencyConfig, config.get("transparency"), "transparency")
        self.engine = _section(EngineConfig, config.get("engine"), "engine")
        self.orientation = _section(OrientationConfig, config.get("orientation"), "orientation")

    @classmethod
    def default(cls) -> "Config":
        return cls(DEFAULT_CONFIG_PATH)
