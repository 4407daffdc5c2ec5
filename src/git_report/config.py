from __future__ import annotations

import json
from pathlib import Path

CONFIG_KEYS = ("company", "logo", "repo", "template_dir")


def load_config(config_path: Path) -> dict:
    if not config_path.exists():
        return {}
    try:
        config = json.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ValueError(f"Invalid config file {config_path}: {e}") from e
    if not isinstance(config, dict):
        raise ValueError(f"Invalid config file {config_path}: expected a JSON object")
    return config


def config_str(config: dict, key: str, default: str = "") -> str:
    value = config.get(key)
    if value is None:
        return default
    return str(value).strip() or default
