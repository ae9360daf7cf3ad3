"""
Model configuration loading and validation.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import jsonschema
import yaml

logger = logging.getLogger(__name__)

MODEL_CONFIG_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "model": {
            "type": "string",
            "enum": ["moving_average", "weighted_moving_average"],
        },
        "period": {"type": "integer", "minimum": 1},
        "weights": {
            "type": "array",
            "items": {"type": "number", "exclusiveMinimum": 0},
            "minItems": 1,
        },
    },
    "required": ["model"],
    "allOf": [
        {
            "if": {"properties": {"model": {"const": "moving_average"}}},
            "then": {"required": ["period"]},
        },
        {
            "if": {"properties": {"model": {"const": "weighted_moving_average"}}},
            "then": {"required": ["weights"]},
        },
    ],
}


class ConfigManager:
    """
    Loads, validates and merges model configurations.
    """

    def __init__(self, config_dir: Optional[str] = None):
        self.config_dir = Path(config_dir) if config_dir else Path("config")

    def _resolve(self, config_name: Union[str, Path]) -> Path:
        path = Path(config_name)
        if path.is_absolute() or path.exists():
            return path
        return self.config_dir / path

    def load_config(
        self,
        config_name: Union[str, Path],
        schema: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        Load a configuration file (YAML or JSON).
        Optionally validate against a schema.

        Args:
            config_name: File name relative to config_dir, or a path
            schema: JSON schema to validate against

        Returns:
            Loaded configuration dictionary
        """
        config_path = self._resolve(config_name)

        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, "r") as f:
            if config_path.suffix in (".yaml", ".yml"):
                config = yaml.safe_load(f)
            elif config_path.suffix == ".json":
                config = json.load(f)
            else:
                raise ValueError(f"Unsupported configuration format: {config_path.suffix}")

        logger.debug(f"Loaded configuration from {config_path}")

        if schema is not None:
            self.validate_config(config, schema)

        return config

    def validate_config(self, config: Dict[str, Any], schema: Dict[str, Any]) -> None:
        """
        Validate configuration against a schema.

        Raises:
            ValueError: If the configuration does not match the schema
        """
        try:
            jsonschema.validate(instance=config, schema=schema)
        except jsonschema.exceptions.ValidationError as e:
            path_str = " -> ".join(str(p) for p in e.path) if e.path else "root"
            error_msg = f"Configuration validation failed at '{path_str}': {e.message}"
            logger.error(error_msg)
            raise ValueError(error_msg) from e

    def merge_configs(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Deep merge two configurations, override taking precedence."""
        merged = base.copy()
        for key, value in override.items():
            if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
                merged[key] = self.merge_configs(merged[key], value)
            else:
                merged[key] = value
        return merged

    def get_value(self, config: Dict[str, Any], path: str, default: Any = None) -> Any:
        """
        Get a value from configuration using dot notation.

        Args:
            config: Configuration dictionary
            path: Dot-separated path (e.g., 'model.weights')
            default: Default value if path not found
        """
        current = config
        for key in path.split('.'):
            if isinstance(current, dict) and key in current:
                current = current[key]
            else:
                return default
        return current
