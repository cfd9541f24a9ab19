from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.config_models import (
    DEFAULT_FOLDING,
    BandRule,
    EngineConfig,
    MarkupConfig,
    NormalizerConfig,
    PainterConfig,
)

"""Config loader.

Responsibilities:
- Load a YAML config file (every section optional)
- Validate it against the bundled JSON schema
- Map it onto the frozen EngineConfig dataclasses, defaults filling the gaps
- Resolve which file to load (explicit path, environment, conventional path)
"""

__all__ = [
    "CONFIG_ENV_VAR",
    "DEFAULT_CONFIG_PATH",
    "ConfigError",
    "config_from_dict",
    "load_config",
    "resolve_config_path",
]

SCHEMA_PATH = Path(__file__).with_name("config_schema.json")
DEFAULT_CONFIG_PATH = Path("config/sortable.yml")
CONFIG_ENV_VAR = "SORTABLE_TABLE_CONFIG"


class ConfigError(Exception):
    pass


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: the schema file is missing or not valid JSON, or the data
            violates the schema (unknown keys, wrong types, ...).
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


def config_from_dict(data: dict[str, Any]) -> EngineConfig:
    """Validate a plain mapping and build the EngineConfig from it."""
    _validate_config_schema(data)

    norm_raw = data.get("normalizer", {})
    folding = dict(norm_raw.get("folding", DEFAULT_FOLDING))
    folding.update(norm_raw.get("extra_folding", {}))
    defaults = NormalizerConfig()
    normalizer = NormalizerConfig(
        folding=folding,
        articles=tuple(norm_raw.get("articles", defaults.articles)),
        numeric_noise=norm_raw.get("numeric_noise", defaults.numeric_noise),
    )

    painter = PainterConfig()
    bands_raw = data.get("painter", {}).get("bands")
    if bands_raw is not None:
        bands = []
        for b in bands_raw:
            if b["remainder"] >= b["modulus"]:
                raise ConfigError(
                    f"band '{b['class']}': remainder {b['remainder']} never reached with modulus {b['modulus']}"
                )
            bands.append(BandRule(css_class=b["class"], modulus=b["modulus"], remainder=b["remainder"]))
        painter = PainterConfig(bands=tuple(bands))

    markup_raw = data.get("markup", {})
    markup_defaults = MarkupConfig()
    markup = MarkupConfig(
        table_class=markup_raw.get("table_class", markup_defaults.table_class),
        exclusion_classes=tuple(markup_raw.get("exclusion_classes", markup_defaults.exclusion_classes)),
        sortable_class=markup_raw.get("sortable_class", markup_defaults.sortable_class),
        asc_class=markup_raw.get("asc_class", markup_defaults.asc_class),
        desc_class=markup_raw.get("desc_class", markup_defaults.desc_class),
        literal_attributes=tuple(markup_raw.get("literal_attributes", markup_defaults.literal_attributes)),
    )
    return EngineConfig(normalizer=normalizer, painter=painter, markup=markup)


def load_config(path: Path) -> EngineConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping, got {type(data).__name__}")
    return config_from_dict(data)


def resolve_config_path(explicit: Path | None = None) -> Path | None:
    """Pick the config file to load.

    Order: explicit path, then $SORTABLE_TABLE_CONFIG, then config/sortable.yml
    when it exists. None means "use built-in defaults". Explicit and
    environment paths are returned even if missing so load_config can report it.
    """
    if explicit is not None:
        return explicit
    env_path = os.getenv(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)
    if DEFAULT_CONFIG_PATH.exists():
        return DEFAULT_CONFIG_PATH
    return None
