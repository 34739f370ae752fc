"""
Runtime settings.

Settings are read from a JSON file given explicitly, or named by the
PHYSCALC_CONFIG environment variable. Missing keys fall back to defaults.
"""

import json
import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

CONFIG_ENV_VAR = "PHYSCALC_CONFIG"


class Settings(BaseModel):
    """Calculator settings."""
    sig_figs: int = Field(default=6, ge=1, le=50, description="Significant figures shown in results")
    log_level: str = Field(default="WARNING", description="Logging level name for the CLI")
    data_dir: Optional[Path] = Field(
        default=None,
        description="Directory whose dataset files override the bundled ones",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level '{v}'")
        return level


def load_settings(path: Optional[str] = None) -> Settings:
    """
    Load settings from JSON.

    Args:
        path: Settings file. If None, $PHYSCALC_CONFIG is used when set.

    Returns:
        Validated Settings

    Raises:
        FileNotFoundError: If the named file doesn't exist
        ValueError: If the file is not valid JSON or fails validation
    """
    path = path or os.environ.get(CONFIG_ENV_VAR)
    if not path:
        return Settings()

    with open(path, encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {path}: {e}") from e

    try:
        return Settings(**data)
    except ValidationError as e:
        raise ValueError(f"Invalid settings in {path}: {e}") from e
