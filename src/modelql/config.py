"""
Configuration loading for a ModelQL runtime.

    config = RuntimeConfig.from_yaml("modelql.yaml")
    runtime = Runtime(config=config)

Example modelql.yaml:

    params_key: "$params"
    concurrent: true
    class_name_identity: true
"""

from __future__ import annotations


from dataclasses import dataclass
from pathlib import Path
from typing import Any, Union

import yaml

from .core.query_types import DEFAULT_PARAMS_KEY


@dataclass
class RuntimeConfig:
    """Runtime behaviour switches."""
    params_key: str = DEFAULT_PARAMS_KEY  # reserved key lifted into SubSelection.params
    concurrent: bool = True  # resolve sibling fields/elements with asyncio.gather
    class_name_identity: bool = True  # infer model from type(value).__name__ when no hook matches

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Create config from dictionary. Unknown keys are ignored."""
        params_key = data.get("params_key", DEFAULT_PARAMS_KEY)
        if not isinstance(params_key, str) or not params_key:
            raise ValueError(f"params_key must be a non-empty string, got {params_key!r}")

        return cls(
            params_key=params_key,
            concurrent=bool(data.get("concurrent", True)),
            class_name_identity=bool(data.get("class_name_identity", True)),
        )

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "RuntimeConfig":
        """Load config from a YAML file. An empty file yields the defaults."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ValueError(f"Config file must contain a mapping: {path}")

        return cls.from_dict(data)
