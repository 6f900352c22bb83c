"""Mod-three pattern.

Computes the remainder of a binary number divided by 3 by walking a
three-state automaton over its digits, most significant bit first. State
``S<r>`` means "the prefix read so far is congruent to r modulo 3"; reading
bit ``b`` moves to ``S<(2r + b) mod 3>``.
"""

import functools
import re
from enum import Enum
from typing import Any, Dict

from dataknobs_automata.core.config import FSMConfig
from dataknobs_automata.core.exceptions import ValidationError
from dataknobs_automata.core.fsm import FiniteStateMachine

MAX_BINARY_LENGTH = 1000

_BINARY_PATTERN = re.compile(r"[01]+")


class ModThreeState(str, Enum):
    """Remainder states."""
    S0 = "S0"
    S1 = "S1"
    S2 = "S2"


BINARY_ALPHABET = frozenset({"0", "1"})

MOD_THREE_TRANSITIONS: Dict[ModThreeState, Dict[str, ModThreeState]] = {
    ModThreeState.S0: {"0": ModThreeState.S0, "1": ModThreeState.S1},
    ModThreeState.S1: {"0": ModThreeState.S2, "1": ModThreeState.S0},
    ModThreeState.S2: {"0": ModThreeState.S1, "1": ModThreeState.S2},
}

MOD_THREE_OUTPUTS: Dict[ModThreeState, int] = {
    ModThreeState.S0: 0,
    ModThreeState.S1: 1,
    ModThreeState.S2: 2,
}

# Declarative equivalent, used by ``dataknobs-automata config create``
MOD_THREE_DEFINITION: Dict[str, Any] = {
    "name": "mod_three",
    "description": "Remainder of a binary number modulo 3",
    "states": [state.value for state in ModThreeState],
    "alphabet": sorted(BINARY_ALPHABET),
    "initial_state": ModThreeState.S0.value,
    "final_states": [state.value for state in ModThreeState],
    "transitions": {
        state.value: {symbol: target.value for symbol, target in row.items()}
        for state, row in MOD_THREE_TRANSITIONS.items()
    },
    "outputs": {state.value: output for state, output in MOD_THREE_OUTPUTS.items()},
}


class InvalidBinaryInputError(ValidationError):
    """Raised when a mod-three input is not a usable binary string."""

    def __init__(self, reason: str, value: Any = None):
        super().__init__(f"Invalid input: {reason}", context={"value": value})
        self.reason = reason


def _transition(state: ModThreeState, symbol: str) -> ModThreeState:
    return MOD_THREE_TRANSITIONS[state][symbol]


def _output(state: ModThreeState) -> int:
    return MOD_THREE_OUTPUTS[state]


def create_mod_three_config() -> FSMConfig[ModThreeState, str, int]:
    """Create the mod-three automaton configuration."""
    return FSMConfig(
        states=frozenset(ModThreeState),
        alphabet=BINARY_ALPHABET,
        initial_state=ModThreeState.S0,
        final_states=frozenset(ModThreeState),
        transition=_transition,
        output_mapper=_output,
    )


@functools.lru_cache(maxsize=1)
def get_mod_three_fsm() -> FiniteStateMachine[ModThreeState, str, int]:
    """Shared mod-three machine; safe to reuse since it holds no run state."""
    return FiniteStateMachine(create_mod_three_config())


def validate_binary_input(value: Any) -> None:
    """Validate a binary string input.

    Args:
        value: Candidate input.

    Raises:
        InvalidBinaryInputError: If the value is None, not a string, empty,
            contains anything other than 0s and 1s, or is longer than
            MAX_BINARY_LENGTH.
    """
    if value is None:
        raise InvalidBinaryInputError("input cannot be None", value)

    if not isinstance(value, str):
        raise InvalidBinaryInputError("input must be a string", value)

    if len(value) == 0:
        raise InvalidBinaryInputError("input cannot be empty", value)

    if not _BINARY_PATTERN.fullmatch(value):
        raise InvalidBinaryInputError("must contain only 0s and 1s", value)

    if len(value) > MAX_BINARY_LENGTH:
        raise InvalidBinaryInputError("binary string is too long", len(value))


def mod_three(value: str) -> int:
    """Calculate the remainder of a binary number divided by 3.

    Args:
        value: Binary string, most significant bit first.

    Returns:
        0, 1 or 2.

    Raises:
        InvalidBinaryInputError: If the input is not a valid binary string.
    """
    validate_binary_input(value)
    return get_mod_three_fsm().process_with_output(value)
