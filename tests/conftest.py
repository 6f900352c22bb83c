"""Pytest configuration and shared fixtures for dataknobs_automata tests."""

import json
from typing import Any, Dict

import pytest
import yaml

from dataknobs_automata.core.config import FSMConfig


PARITY_TRANSITIONS = {
    ("even", "0"): "even",
    ("even", "1"): "odd",
    ("odd", "0"): "odd",
    ("odd", "1"): "even",
}


def parity_transition(state: str, symbol: str) -> str:
    return PARITY_TRANSITIONS[(state, symbol)]


def parity_output(state: str) -> str:
    return state.upper()


def make_parity_config(**overrides: Any) -> FSMConfig:
    """Build a parity-of-ones configuration, overriding selected fields."""
    fields: Dict[str, Any] = {
        "states": {"even", "odd"},
        "alphabet": {"0", "1"},
        "initial_state": "even",
        "final_states": {"even"},
        "transition": parity_transition,
        "output_mapper": parity_output,
    }
    fields.update(overrides)
    return FSMConfig(**fields)


@pytest.fixture
def parity_config():
    """Valid parity configuration accepting an even number of ones."""
    return make_parity_config()


@pytest.fixture
def parity_definition():
    """Declarative equivalent of the parity configuration."""
    return {
        "name": "parity",
        "description": "Accepts strings with an even number of ones",
        "states": ["even", "odd"],
        "alphabet": ["0", "1"],
        "initial_state": "even",
        "final_states": ["even"],
        "transitions": {
            "even": {"0": "even", "1": "odd"},
            "odd": {"0": "odd", "1": "even"},
        },
        "outputs": {"even": "EVEN", "odd": "ODD"},
    }


@pytest.fixture
def parity_yaml_file(tmp_path, parity_definition):
    """Parity definition written as YAML."""
    path = tmp_path / "parity.yaml"
    path.write_text(yaml.safe_dump(parity_definition))
    return path


@pytest.fixture
def parity_json_file(tmp_path, parity_definition):
    """Parity definition written as JSON."""
    path = tmp_path / "parity.json"
    path.write_text(json.dumps(parity_definition))
    return path


@pytest.fixture
def make_config():
    """Factory for parity configurations with selected fields overridden."""
    return make_parity_config
