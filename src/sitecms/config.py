"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field


CONFIG_FILE = "config.yaml"


class Settings(BaseModel):
    app_name:           str = "sitecms"
    db_url:             str = "sqlite:///sitecms.db"
    default_title:      str = Field(default="Untitled Document", description="Title used when a document has none")
    excerpt_length:     int = Field(default=160, ge=4,  description="Max excerpt length including the ellipsis")
    heading_max_length: int = Field(default=100, ge=1,  description="Plain-text lines shorter than this may be headings")
    parser_config:      str = Field(default="gfm-like", description="MarkdownIt parser preset name")
    output_dir:         str = Field(default="dist",     description="Directory for exported HTML files")
    log_level:          str = Field(default="WARNING", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then SITECMS_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e

    for name in Settings.model_fields:
        if val := os.getenv(f"SITECMS_{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
