"""
Settings: log level, default size profile, per-profile overrides.
Read once at startup from the JSON or YAML file named by PHASEGRAPH_SETTINGS.
"""

import os
import sys
from pathlib import Path
from typing import Dict, Optional, Union

import orjson
import yaml
from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from layout.constants import DEFAULT_PROFILE, PROFILE_ALIASES, PROFILES, ConfigProfile, get_profile

SETTINGS_ENV = "PHASEGRAPH_SETTINGS"
LOG_LEVEL_ENV = "PHASEGRAPH_LOG_LEVEL"


class Settings(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    log_level: str = Field(default="INFO", alias="logLevel")
    default_size: str = Field(default=DEFAULT_PROFILE, alias="defaultSize")
    # {"compact": {"nodeWidth": 96}, ...}
    profile_overrides: Dict[str, Dict[str, int]] = Field(default_factory=dict, alias="profiles")

    @field_validator("profile_overrides")
    @classmethod
    def _resolve_overrides(cls, v):
        """Key overrides by canonical profile name, dropping unknown profiles and fields."""
        known = set()
        for name, field in ConfigProfile.model_fields.items():
            if name != "name":
                known.update({name, field.alias or name})
        resolved: Dict[str, Dict[str, int]] = {}
        for size, fields in v.items():
            key = PROFILE_ALIASES.get(size.strip().lower(), size.strip().lower())
            if key not in PROFILES:
                logger.warning("Ignoring overrides for unknown size profile {!r}", size)
                continue
            unknown = [k for k in fields if k not in known]
            if unknown:
                logger.warning("Ignoring unknown {} profile field(s): {}", key, ", ".join(unknown))
            resolved.setdefault(key, {}).update({k: val for k, val in fields.items() if k in known})
        return resolved

    def profile(self, size: Union[str, ConfigProfile, None] = None) -> ConfigProfile:
        """Built-in profile for `size` (or the default size) with overrides applied."""
        base = get_profile(size or self.default_size)
        overrides = self.profile_overrides.get(base.name)
        if not overrides:
            return base
        merged = base.model_dump(by_alias=True)
        for key, value in overrides.items():
            field = ConfigProfile.model_fields.get(key)
            merged[field.alias if field and field.alias else key] = value
        return ConfigProfile.model_validate(merged)

    def profiles(self) -> Dict[str, ConfigProfile]:
        return {name: self.profile(name) for name in ("compact", "normal")}


def load_settings(path: Optional[Union[str, Path]] = None) -> Settings:
    """Load settings from path (or $PHASEGRAPH_SETTINGS). Missing file -> defaults."""
    path = path or os.environ.get(SETTINGS_ENV)
    data: dict = {}
    if path:
        p = Path(path)
        if p.exists():
            raw = p.read_bytes()
            try:
                data = yaml.safe_load(raw) if p.suffix in (".yaml", ".yml") else orjson.loads(raw)
            except (orjson.JSONDecodeError, yaml.YAMLError) as e:
                raise ValueError(f"Invalid settings file {p}: {e}") from e
            if data is None:
                data = {}
            if not isinstance(data, dict):
                raise ValueError(f"Invalid settings file {p}: expected an object")
        else:
            logger.warning("Settings file {} not found, using defaults", p)

    env_level = os.environ.get(LOG_LEVEL_ENV)
    if env_level:
        data = {**data, "logLevel": env_level}

    try:
        settings = Settings.model_validate(data)
        for name in ("compact", "normal"):
            settings.profile(name)
    except ValidationError as e:
        raise ValueError(f"Invalid settings: {e.error_count()} field error(s)") from e
    return settings


def configure_logging(level: str = "INFO") -> None:
    """Single stderr sink at `level`."""
    logger.remove()
    logger.add(sys.stderr, level=level.upper())
