"""
Configuration loading for the HQ time logger.

A config file provides the HQ endpoint, the login session and optional defaults:

    endpoint = "https://example.hellohq.io/dashboard"

    [session]
    key = "token"
    value = "..."

    [defaults]
    startTime = "09:00"
    pause = "30m"

    [defaults.csv]
    format = "date,start_time,end_time,pause"
"""

import json
import logging
import tomllib
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_NAME = "hqcli"
LOADERS = {
    ".toml": tomllib.loads,
    ".yaml": yaml.safe_load,
    ".yml": yaml.safe_load,
    ".json": json.loads,
}
DISCOVERED_SUFFIXES = (".toml", ".yaml", ".json")


class Session(BaseModel):
    key: str
    value: str


class CsvDefaults(BaseModel):
    format: str


class Defaults(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    start_time: Optional[str] = Field(None, alias="startTime")
    pause: Optional[str] = None
    csv: Optional[CsvDefaults] = None


class Config(BaseModel):
    endpoint: str
    session: Session
    defaults: Optional[Defaults] = None

    @property
    def default_start_time(self) -> Optional[str]:
        return self.defaults.start_time if self.defaults else None

    @property
    def default_pause(self) -> Optional[str]:
        return self.defaults.pause if self.defaults else None

    @property
    def default_csv_format(self) -> Optional[str]:
        if self.defaults and self.defaults.csv:
            return self.defaults.csv.format
        return None


def _read_file(path: Path) -> Dict[str, Any]:
    loader = LOADERS.get(path.suffix.lower())
    if loader is None:
        raise ConfigError(f"invalid config file type: {path}")

    try:
        data = loader(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError(f"Could not read config file {path}: {e}") from e
    except (tomllib.TOMLDecodeError, yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigError(f"Could not parse config file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a table/object at the top level")
    return data


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _validate(data: Dict[str, Any], source: str) -> Config:
    try:
        return Config.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {source}:\n{e}") from e


def load_config(path: str) -> Config:
    """Load the configuration from a single .toml, .yaml/.yml or .json file."""
    config_path = Path(path).expanduser()
    logger.debug(f"Loading config from {config_path}")
    return _validate(_read_file(config_path), str(config_path))


def config_candidates(home: Optional[Path] = None, cwd: Optional[Path] = None) -> List[Path]:
    """Config file locations in increasing priority."""
    home = home or Path.home()
    cwd = cwd or Path.cwd()
    user_dir = home / ".config"

    candidates = []
    for suffix in DISCOVERED_SUFFIXES:
        candidates.append(user_dir / f"{CONFIG_NAME}{suffix}")
        candidates.append(cwd / f"{CONFIG_NAME}{suffix}")
    return candidates


def discover_config(home: Optional[Path] = None, cwd: Optional[Path] = None) -> Config:
    """Merge all config files found in ~/.config and the working directory."""
    data: Dict[str, Any] = {}
    found = []
    for candidate in config_candidates(home, cwd):
        if candidate.is_file():
            logger.debug(f"Merging config from {candidate}")
            data = _merge(data, _read_file(candidate))
            found.append(str(candidate))

    if not found:
        raise ConfigError(
            f"No config file found. Create ~/.config/{CONFIG_NAME}.toml or pass --config."
        )
    return _validate(data, ", ".join(found))
