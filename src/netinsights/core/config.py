# src/netinsights/core/config.py
"""Configuration for the netinsights command line.

Settings are layered with the following precedence (highest to lowest):
1. CLI flags
2. YAML config file (--config)
3. Built-in Pydantic defaults

Example YAML:
    logging:
      level: DEBUG
      json_output: true
    source:
      data_key: entries
    filter:
      states: [failure]
      host: api.example.com
    output:
      format: json
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, field_validator

from netinsights.filtering import TaskFilter


class LoggingSettings(BaseModel):
    """Log level and renderer."""

    model_config = {"frozen": True, "extra": "forbid"}

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING",
        description="Root log level",
    )
    json_output: bool = Field(
        default=False,
        description="Emit JSON log lines instead of console output",
    )

    @field_validator("level", mode="before")
    @classmethod
    def upper_level(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.upper()
        return v


class SourceSettings(BaseModel):
    """How task record exports are read."""

    model_config = {"frozen": True, "extra": "forbid"}

    format: Literal["json", "jsonl"] | None = Field(
        default=None,
        description="Export format; auto-detected from the file extension when unset",
    )
    data_key: str = Field(
        default="tasks",
        min_length=1,
        description="Key holding the task array when the export is a JSON object",
    )
    encoding: str = Field(
        default="utf-8",
        description="Export file encoding",
    )


class OutputSettings(BaseModel):
    """How a snapshot is rendered."""

    model_config = {"frozen": True, "extra": "forbid"}

    format: Literal["console", "json"] = Field(
        default="console",
        description="Render as a human-readable summary or as JSON",
    )


class InsightsSettings(BaseModel):
    """Top-level netinsights configuration."""

    model_config = {"frozen": True, "extra": "forbid"}

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    source: SourceSettings = Field(default_factory=SourceSettings)
    filter: TaskFilter = Field(default_factory=TaskFilter)
    output: OutputSettings = Field(default_factory=OutputSettings)


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dicts, with override taking precedence.

    Returns:
        Merged configuration dict (new dict, does not mutate inputs).
    """
    result = dict(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_settings(
    config_file: Path | None = None,
    cli_overrides: dict[str, Any] | None = None,
) -> InsightsSettings:
    """Load settings with precedence handling.

    Args:
        config_file: Optional path to a YAML config file.
        cli_overrides: Optional nested dict of CLI flag overrides.

    Returns:
        Validated InsightsSettings.

    Raises:
        FileNotFoundError: If config_file does not exist.
        yaml.YAMLError: If the YAML is malformed.
        ValueError: If the YAML document is not a mapping.
        pydantic.ValidationError: If the merged config fails validation.
    """
    config_dict: dict[str, Any] = {}

    if config_file is not None:
        if not config_file.exists():
            raise FileNotFoundError(f"Config file not found: {config_file}")
        with config_file.open() as f:
            loaded = yaml.safe_load(f) or {}
        if not isinstance(loaded, dict):
            raise ValueError(f"Config file must be a YAML mapping, got {type(loaded).__name__}")
        config_dict = loaded

    if cli_overrides is not None:
        config_dict = deep_merge(config_dict, cli_overrides)

    return InsightsSettings(**config_dict)
