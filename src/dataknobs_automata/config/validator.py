"""Configuration validation utilities."""

from pathlib import Path
from typing import Any, Dict, List

from pydantic import ValidationError as SchemaValidationError

from dataknobs_automata.config.builder import FSMBuilder
from dataknobs_automata.config.loader import ConfigLoader
from dataknobs_automata.config.schema import AutomatonConfig
from dataknobs_automata.core.exceptions import AutomatonError


class ConfigValidator:
    """Configuration validation utility.

    Loads a definition and builds the machine, collecting both schema and
    automaton invariant errors as messages.
    """

    def __init__(self, builder: FSMBuilder | None = None):
        self.loader = ConfigLoader()
        self.builder = builder or FSMBuilder()

    def validate_file(self, file_path: str) -> List[str]:
        """Validate configuration file.

        Args:
            file_path: Path to configuration file

        Returns:
            List of validation errors (empty if valid)
        """
        try:
            config = self.loader.load_from_file(Path(file_path))
        except (OSError, ValueError, SchemaValidationError) as e:
            return self._messages(e)
        return self._validate_semantics(config)

    def validate_dict(self, config_dict: Dict[str, Any]) -> List[str]:
        """Validate configuration dictionary.

        Args:
            config_dict: Configuration dictionary

        Returns:
            List of validation errors (empty if valid)
        """
        try:
            config = self.loader.load_from_dict(config_dict)
        except (ValueError, SchemaValidationError) as e:
            return self._messages(e)
        return self._validate_semantics(config)

    def _validate_semantics(self, config: AutomatonConfig) -> List[str]:
        try:
            self.builder.build(config)
        except (AutomatonError, ValueError, TypeError) as e:
            return [str(e)]
        return []

    @staticmethod
    def _messages(error: Exception) -> List[str]:
        if isinstance(error, SchemaValidationError):
            return [
                f"{'.'.join(str(loc) for loc in detail['loc']) or 'config'}: {detail['msg']}"
                for detail in error.errors()
            ]
        return [str(error)]
