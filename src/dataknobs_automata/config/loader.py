"""Configuration loader for automaton definitions.

This module provides functionality to load automaton definitions from:
- Files (JSON, YAML)
- Dictionaries
- Environment variables referenced from either of the above
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Union

import yaml

from dataknobs_automata.config.schema import AutomatonConfig, validate_config

logger = logging.getLogger(__name__)


class ConfigLoader:
    """Load and process automaton definitions from various sources."""

    def __init__(self, env_prefix: str = "AUTOMATA_"):
        """Initialize the ConfigLoader.

        Args:
            env_prefix: Prefix tried as a fallback when resolving environment
                variables.
        """
        self._env_prefix = env_prefix

    def load_from_file(
        self,
        file_path: Union[str, Path],
        resolve_env: bool = True,
    ) -> AutomatonConfig:
        """Load a definition from a file.

        Args:
            file_path: Path to definition file (JSON or YAML).
            resolve_env: Whether to resolve environment variables.

        Returns:
            Validated AutomatonConfig instance.

        Raises:
            FileNotFoundError: If file doesn't exist.
            ValueError: If file format is not supported.
        """
        file_path = Path(file_path)

        if not file_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {file_path}")

        raw_config = self._load_file(file_path)
        if not isinstance(raw_config, dict):
            raise ValueError(f"Configuration file must contain a mapping: {file_path}")

        logger.debug(f"Loaded raw configuration from {file_path}")
        return self.load_from_dict(raw_config, resolve_env=resolve_env)

    def load_from_dict(
        self,
        config_dict: Dict[str, Any],
        resolve_env: bool = True,
    ) -> AutomatonConfig:
        """Load a definition from a dictionary.

        Args:
            config_dict: Definition dictionary.
            resolve_env: Whether to resolve environment variables.

        Returns:
            Validated AutomatonConfig instance.
        """
        processed_config = config_dict.copy()

        if resolve_env:
            processed_config = self._resolve_environment_vars(processed_config)

        return validate_config(processed_config)

    def _load_file(self, file_path: Path) -> Any:
        """Load raw configuration from a file.

        Raises:
            ValueError: If file format is not supported or the file cannot be parsed.
        """
        suffix = file_path.suffix.lower()

        with open(file_path) as f:
            if suffix == ".json":
                try:
                    return json.load(f)
                except json.JSONDecodeError as e:
                    raise ValueError(f"Invalid JSON in {file_path}: {e}") from e
            elif suffix in [".yaml", ".yml"]:
                try:
                    return yaml.safe_load(f)
                except yaml.YAMLError as e:
                    raise ValueError(f"Invalid YAML in {file_path}: {e}") from e
            else:
                raise ValueError(f"Unsupported file format: {suffix}")

    def _resolve_environment_vars(self, config: Any) -> Any:
        """Resolve environment variables in configuration.

        Supports:
        - ${VAR_NAME} - Required variable
        - ${VAR_NAME:-default} - Variable with default value
        - ${VAR_NAME:?error message} - Required with custom error
        - $VAR_NAME - Optional variable, left untouched when unset

        Unprefixed names are also looked up with the loader's prefix.
        """
        if isinstance(config, str):
            if config.startswith("${") and config.endswith("}"):
                var_expr = config[2:-1]

                if ":-" in var_expr:
                    var_name, default_value = var_expr.split(":-", 1)
                    return self._lookup(var_name, default_value)

                elif ":?" in var_expr:
                    var_name, error_msg = var_expr.split(":?", 1)
                    value = self._lookup(var_name)
                    if value is None:
                        raise ValueError(f"Required environment variable: {error_msg}")
                    return value

                else:
                    value = self._lookup(var_expr)
                    if value is None:
                        raise ValueError(f"Environment variable not found: {var_expr}")
                    return value

            elif config.startswith("$") and len(config) > 1:
                value = self._lookup(config[1:])
                return config if value is None else value

            return config

        elif isinstance(config, dict):
            return {key: self._resolve_environment_vars(value) for key, value in config.items()}

        elif isinstance(config, list):
            return [self._resolve_environment_vars(item) for item in config]

        else:
            return config

    def _lookup(self, var_name: str, default: str | None = None) -> str | None:
        if var_name in os.environ:
            return os.environ[var_name]
        prefixed_var = f"{self._env_prefix}{var_name}"
        if prefixed_var in os.environ:
            return os.environ[prefixed_var]
        return default
