"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field


CONFIG_FILE = "config.yaml"


class Settings(BaseModel):
    app_name:          str  = "mdedit"
    output_dir:        str  = Field(default="dist",   description="Directory for exported HTML files")
    max_code_lines:    int  = Field(default=10_000,   ge=1, description="Lines buffered per code fence before truncation")
    theme:             str  = Field(default="dark",   pattern="^(dark|light)$", description="Highlighter palette")
    title:             str  = Field(default="Markdown Export", description="Fallback HTML <title> for exports")
    include_footnotes: bool = Field(default=True,     description="Render collected footnote definitions after the body")
    log_level:         str  = Field(default="WARNING", description="Log level for the mdedit logger")


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then MDEDIT_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e

    for name in Settings.model_fields:
        if val := os.getenv(f"MDEDIT_{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
