"""Configuration loading utilities for adaptive colocalization runs."""

from __future__ import annotations

import json
from dataclasses import fields
from pathlib import Path
from typing import Any, Mapping

from adaptivecoloc.core.types import ASKTConfig


def load_json_config(path: str | Path) -> dict[str, Any]:
    """Read a JSON object holding scan settings.

    The object is either the settings mapping itself or a wrapper with an
    ``"askt"`` section; `load_askt_config` decides which.
    """
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")
    if config_path.suffix.lower() != ".json":
        raise ValueError(
            f"Unsupported config format for '{config_path}'. Use a .json config file."
        )

    try:
        with open(config_path, "r", encoding="utf-8") as fh:
            data = json.load(fh)
    except json.JSONDecodeError as exc:
        raise ValueError(
            f"Invalid JSON in config '{config_path}' at line {exc.lineno}, "
            f"column {exc.colno}: {exc.msg}"
        ) from exc

    if not isinstance(data, dict):
        raise ValueError(
            f"Invalid config root in '{config_path}': expected JSON object, got {type(data).__name__}."
        )
    return data


def askt_config_from_mapping(
    mapping: Mapping[str, Any], base: ASKTConfig | None = None
) -> ASKTConfig:
    """Build a validated `ASKTConfig`, overriding ``base`` with ``mapping``."""
    known = {f.name for f in fields(ASKTConfig)}
    unknown = sorted(set(mapping) - set(known))
    if unknown:
        raise ValueError(f"Unknown config key(s): {', '.join(unknown)}.")

    values = (base or ASKTConfig()).to_dict()
    for key, value in mapping.items():
        current = values[key]
        if isinstance(current, bool) or current is None:
            values[key] = value
        elif isinstance(current, int):
            values[key] = int(value)
        elif isinstance(current, float):
            values[key] = float(value)
        else:
            values[key] = str(value)
    return ASKTConfig(**values).validate()


def load_askt_config(path: str | Path) -> ASKTConfig:
    data = load_json_config(path)
    section = data.get("askt", data)
    if not isinstance(section, dict):
        raise ValueError(f"Config section 'askt' in '{path}' must be a JSON object.")
    return askt_config_from_mapping(section)
