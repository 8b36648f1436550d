# davinci_shared/utils/config.py
# Copyright (c) 2026 Monolink Systems
# Licensed under AGPLv3 (Nebula Open Source Edition, non-corporate)

import yaml
from pathlib import Path
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict

CONFIG_FILENAME = "davinci_shared.yaml"

# YAML section -> key -> Settings field
YAML_FIELDS = {
    "logging": {
        "level": "LOG_LEVEL",
        "dir": "LOG_DIR",
        "console": "LOG_TO_CONSOLE",
        "backup_days": "LOG_BACKUP_DAYS",
    },
    "cgroup": {
        "root": "CGROUP_ROOT",
    },
}


def load_yaml_config(config_path: str | Path | None = None):
    target = Path(config_path) if config_path else Path.cwd() / CONFIG_FILENAME
    if not target.exists():
        return {}
    with open(target, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


class Settings(BaseSettings):
    LOG_LEVEL: str = "INFO"
    LOG_DIR: Optional[str] = None
    LOG_TO_CONSOLE: bool = True
    LOG_BACKUP_DAYS: int = 7
    CGROUP_ROOT: str = "/sys/fs/cgroup"

    model_config = SettingsConfigDict(
        env_prefix="DAVINCI_SHARED_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


def get_settings(config_path: str | Path | None = None) -> Settings:
    """Build settings from the YAML file, then environment variables, then defaults.

    Unknown sections and keys are ignored.
    """
    yaml_config = load_yaml_config(config_path)
    values = {}
    for section, fields in YAML_FIELDS.items():
        for key, value in (yaml_config.get(section) or {}).items():
            field = fields.get(str(key).lower())
            if field:
                values[field] = value
    return Settings(**values)
