"""routeguard configuration loading."""

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

import yaml

CONFIG_ENV_VAR = "ROUTEGUARD_CONFIG"


@dataclass
class RouteguardConfig:
    """Settings shared by the CLI and the admission plugin."""

    kubeconfig: str | None = None
    ingress_name: str = "cluster"
    log_level: str = "WARNING"
    log_file: str | None = None
    output: str = "table"

    def merged(self, **overrides: Any) -> "RouteguardConfig":
        """Return a copy with every override that is not None applied."""
        values = {f.name: getattr(self, f.name) for f in fields(self)}
        values.update({k: v for k, v in overrides.items() if v is not None})
        return RouteguardConfig(**values)


def load_config(path: str | Path | None = None) -> RouteguardConfig:
    """
    Load configuration from a YAML file.

    Args:
        path: Config file path. Falls back to $ROUTEGUARD_CONFIG; a missing
            file yields the defaults.

    Raises:
        ValueError: if the file is not a YAML mapping or holds unknown keys.
    """
    path = path or os.environ.get(CONFIG_ENV_VAR)
    if not path:
        return RouteguardConfig()

    config_path = Path(path)
    if not config_path.is_file():
        return RouteguardConfig()

    try:
        data = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Config file {config_path} must contain a mapping")

    # Accept both snake_case and kebab-case keys
    data = {str(k).replace("-", "_"): v for k, v in data.items()}
    known = {f.name for f in fields(RouteguardConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"Unknown config keys in {config_path}: {', '.join(unknown)}")

    return RouteguardConfig(**data)
