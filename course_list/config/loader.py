from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

"""Config loader for the course list generator.

Responsibilities:
- Load YAML config (default config/course_list.yml)
- Validate against config_schema.json (shipped next to this module)
- Expand paths (environment variables, ~) and make them absolute, so the
  rest of the program only sees final path values

Empty strings for paths / sheet / column are accepted here; the pipeline
rejects them with a descriptive InputValidationError before any I/O.
"""

SCHEMA_PATH = Path(__file__).with_name("config_schema.json")
DEFAULT_CONFIG_PATH = Path("config/course_list.yml")


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class CourseListConfig:
    source_path: Path | None
    sheet_name: str
    group_column: str
    destination_path: Path | None
    export_format: str | None = None
    show_price: bool = False
    auxiliaries: list[dict[str, str]] = field(default_factory=list)
    layout: dict[str, int] = field(default_factory=dict)
    headers: list[str] | None = None
    price_header: str | None = None


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: schema file missing / invalid, or the data violates it
            (missing keys, wrong types, show_price combined with auxiliaries)
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")

    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def expand_path(raw: str) -> Path | None:
    """Expand $VARS and ~ in raw and return an absolute path (None if empty)."""
    if not raw.strip():
        return None
    expanded = os.path.expanduser(os.path.expandvars(raw.strip()))
    return Path(expanded).resolve()


def load_config(path: Path = DEFAULT_CONFIG_PATH) -> CourseListConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError("config root must be a mapping")

    _validate_config_schema(data)

    source = data["source"]
    destination = data["destination"]
    return CourseListConfig(
        source_path=expand_path(source["path"]),
        sheet_name=source["sheet"],
        group_column=source["column"],
        destination_path=expand_path(destination["path"]),
        export_format=destination.get("format"),
        show_price=data.get("show_price", False),
        auxiliaries=data.get("auxiliaries", []),
        layout=data.get("layout", {}),
        headers=data.get("headers"),
        price_header=data.get("price_header"),
    )
