# Zingo — configuration
# Override the data directory, default locale and log level via config.yaml.

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml

from .errors import ConfigError

CONFIG_PATH = Path.home() / ".zingo" / "config.yaml"


@dataclass
class Config:
    """Runtime configuration."""

    data_dir: str = "~/.zingo"
    default_locale: str = "en"  # locale for board column titles
    log_level: str = "INFO"

    def resolve_paths(self):
        """Expand ~ in the data directory."""
        self.data_dir = str(Path(self.data_dir).expanduser())

    @property
    def level(self) -> int:
        level = logging.getLevelName(str(self.log_level).upper())
        if not isinstance(level, int):
            raise ConfigError(f"Unknown log level: {self.log_level}")
        return level

    @classmethod
    def load(cls, path: Optional[str] = None) -> "Config":
        """Load config from YAML file, falling back to defaults."""
        cfg_path = Path(path).expanduser() if path else CONFIG_PATH
        if cfg_path.exists():
            try:
                with open(cfg_path, "r") as f:
                    data = yaml.safe_load(f) or {}
                cfg = cls(**{k: v for k, v in data.items() if k in cls.__dataclass_fields__})
            except (OSError, yaml.YAMLError, AttributeError, TypeError):
                cfg = cls()
        else:
            cfg = cls()
        cfg.resolve_paths()
        return cfg
