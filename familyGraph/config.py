from __future__ import annotations

"""Loader for pipeline configuration."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import yaml

from familyGraph.kg.codec import DEFAULT_SYNTAX, DETECTORS, SUPPORTED_SYNTAXES
from familyGraph.utils.log_json import level_from_name

CONFIG_ENV = "FAMILYGRAPH_CONFIG"


@dataclass(slots=True)
class PipelineConfig:
    """Runtime settings for one pipeline run."""

    default_syntax: str = DEFAULT_SYNTAX
    detection: str = "hybrid"
    strict_prefixes: bool = False
    seed_path: Path | None = None
    log_level: str = "INFO"


def config_path() -> Path | None:
    env = os.getenv(CONFIG_ENV)
    if env:
        return Path(env)
    return None


def _from_mapping(raw: Mapping[str, Any], base_dir: Path) -> PipelineConfig:
    default_syntax = str(raw.get("default_syntax", DEFAULT_SYNTAX))
    if default_syntax not in SUPPORTED_SYNTAXES:
        raise ValueError(f"default_syntax must be one of {list(SUPPORTED_SYNTAXES)}")
    detection = str(raw.get("detection", "hybrid"))
    if detection not in DETECTORS:
        raise ValueError(f"detection must be one of {sorted(DETECTORS)}")
    log_level = str(raw.get("log_level", "INFO")).upper()
    level_from_name(log_level)
    strict_prefixes = raw.get("strict_prefixes", False)
    if not isinstance(strict_prefixes, bool):
        raise ValueError(
            f"strict_prefixes must be true or false, got {strict_prefixes!r}"
        )
    seed = raw.get("seed_path")
    seed_path = None
    if seed:
        seed_path = Path(seed)
        if not seed_path.is_absolute():
            seed_path = base_dir / seed_path
    return PipelineConfig(
        default_syntax=default_syntax,
        detection=detection,
        strict_prefixes=strict_prefixes,
        seed_path=seed_path,
        log_level=log_level,
    )


def load_config(path: Path | None = None) -> PipelineConfig:
    """Load settings from YAML, falling back to defaults.

    ``path`` wins over the ``FAMILYGRAPH_CONFIG`` environment variable. A
    relative ``seed_path`` is resolved against the config file's directory.
    """

    if path is None:
        path = config_path()
    if path is None or not path.exists():
        return PipelineConfig()
    raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(raw, Mapping):
        raise ValueError(f"{path} must contain a mapping")
    return _from_mapping(raw, path.parent)


__all__ = ["CONFIG_ENV", "PipelineConfig", "config_path", "load_config"]
