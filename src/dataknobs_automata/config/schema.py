"""Configuration schema definitions for automata using Pydantic.

This module defines the schema for declarative automaton definitions as they
appear in JSON or YAML files:

- Automaton identity (name, version, description)
- States, alphabet, initial and final states
- Transition table or a reference to a transition function
- Output table or a reference to an output function

The schema only checks the *shape* of a definition. Semantic invariants
(initial state membership, closure of the transition table, ...) are checked
by :class:`~dataknobs_automata.core.validator.FSMValidator` when the builder
constructs the machine.
"""

from typing import Any, Dict, List, Literal

from pydantic import BaseModel, Field, field_validator, model_validator


def _as_name(value: Any) -> Any:
    """Coerce scalar YAML values (``0``, ``1``) to state/symbol names."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


class FunctionReference(BaseModel):
    """Reference to a Python callable."""

    type: Literal["custom", "registered"]
    name: str
    module: str | None = None
    params: Dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="after")
    def validate_reference(self) -> "FunctionReference":
        """Validate that the reference has required fields based on type."""
        if self.type == "custom" and not self.module:
            raise ValueError("Custom functions require both 'module' and 'name'")
        return self


class AutomatonConfig(BaseModel):
    """Complete declarative automaton definition."""

    name: str
    version: str = "1.0.0"
    description: str | None = None

    states: List[str]
    alphabet: List[str]
    initial_state: str
    final_states: List[str] | None = None

    transitions: Dict[str, Dict[str, str]] | None = None
    transition_function: FunctionReference | None = None

    outputs: Dict[str, Any] | None = None
    output_function: FunctionReference | None = None

    metadata: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("states", "alphabet", "final_states", mode="before")
    @classmethod
    def coerce_names(cls, v: Any) -> Any:
        """Accept unquoted numeric names in YAML."""
        if isinstance(v, (list, tuple, set)):
            return [_as_name(item) for item in v]
        return v

    @field_validator("initial_state", mode="before")
    @classmethod
    def coerce_initial_state(cls, v: Any) -> Any:
        return _as_name(v)

    @field_validator("transitions", mode="before")
    @classmethod
    def coerce_transitions(cls, v: Any) -> Any:
        if not isinstance(v, dict):
            return v
        result: Dict[Any, Any] = {}
        for state, row in v.items():
            if isinstance(row, dict):
                row = {_as_name(symbol): _as_name(target) for symbol, target in row.items()}
            result[_as_name(state)] = row
        return result

    @field_validator("outputs", mode="before")
    @classmethod
    def coerce_output_keys(cls, v: Any) -> Any:
        if not isinstance(v, dict):
            return v
        return {_as_name(state): output for state, output in v.items()}

    @model_validator(mode="after")
    def validate_automaton(self) -> "AutomatonConfig":
        """Validate that exactly one transition source and at most one output source is given."""
        if self.transitions is None and self.transition_function is None:
            raise ValueError("Either 'transitions' or 'transition_function' is required")
        if self.transitions is not None and self.transition_function is not None:
            raise ValueError("'transitions' and 'transition_function' are mutually exclusive")
        if self.outputs is not None and self.output_function is not None:
            raise ValueError("'outputs' and 'output_function' are mutually exclusive")
        return self

    @property
    def effective_final_states(self) -> List[str]:
        """Final states, defaulting to every state when not given."""
        if self.final_states is None:
            return list(self.states)
        return list(self.final_states)


def generate_json_schema() -> Dict[str, Any]:
    """Generate JSON schema for automaton definitions.

    Returns:
        JSON schema dictionary.
    """
    return AutomatonConfig.model_json_schema()


def validate_config(config: Dict[str, Any]) -> AutomatonConfig:
    """Validate an automaton definition dictionary.

    Args:
        config: Definition dictionary.

    Returns:
        Validated AutomatonConfig instance.

    Raises:
        pydantic.ValidationError: If the definition is malformed.
    """
    return AutomatonConfig.model_validate(config)
