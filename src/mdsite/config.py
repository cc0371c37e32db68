"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field


CONFIG_FILE = "config.yaml"


class Settings(BaseModel):
    app_name:          str  = "mdsite"
    content_dir:       str  = Field(default="content", description="Root that default URLs are computed relative to")
    output_dir:        str  = Field(default="_site",   description="Directory for rendered output files")
    output_format:     str  = Field(default="html", pattern="^(html|text)$", description="html or text")
    default_permalink: bool = Field(default=True,  description="Derive a URL from the source path when permalink is absent")
    wrap_page:         bool = Field(default=False, description="Wrap rendered HTML in a minimal page with a <title>")
    write_sidecar:     bool = Field(default=False, description="Write a metadata JSON file next to each output")
    log_level:         str  = Field(default="WARNING", pattern="^(DEBUG|INFO|WARNING|ERROR)$")


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then MDSITE_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {CONFIG_FILE}: expected a mapping")

    for name in Settings.model_fields:
        if val := os.getenv(f"MDSITE_{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
