"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field


CONFIG_FILE = "config.yaml"


class Settings(BaseModel):
    site_title:      str = Field(default="Writing",   description="Title shown in the page shell and index")
    output_dir:      str = Field(default="site",      description="Directory for rendered HTML, CSS and index files")
    stylesheet:      Optional[str] = Field(default=None, description="YAML style rules merged over the defaults")
    stylesheet_name: str = Field(default="style.css", pattern=r"^[\w.-]+\.css$", description="File name of the emitted CSS")
    inline_styles:   bool = Field(default=False, description="Also write resolved properties as style attributes")
    include_drafts:  bool = Field(default=False, description="Render documents whose header sets draft: true")
    jobs:            int = Field(default=1, ge=1,     description="Worker threads for per-document rendering")


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then MDSITE_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {CONFIG_FILE}: expected a mapping, got {type(data).__name__}")

    for name in Settings.model_fields:
        if val := os.getenv(f"MDSITE_{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    try:
        return Settings(**data)
    except ValueError as e:
        raise ValueError(f"Invalid settings: {e}") from e
