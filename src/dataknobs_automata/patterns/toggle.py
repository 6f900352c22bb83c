"""Light toggle pattern.

A two-state switch: every ``TOGGLE`` flips the light between ``ON`` and
``OFF``. Both states are final, so any input produces an output.
"""

from enum import Enum
from typing import Any, Dict

from dataknobs_automata.core.config import FSMConfig
from dataknobs_automata.core.fsm import FiniteStateMachine


class LightState(str, Enum):
    """Light states."""
    ON = "ON"
    OFF = "OFF"


class ToggleSymbol(str, Enum):
    """Toggle input."""
    TOGGLE = "TOGGLE"


TOGGLE_TRANSITIONS: Dict[LightState, LightState] = {
    LightState.ON: LightState.OFF,
    LightState.OFF: LightState.ON,
}

TOGGLE_OUTPUTS: Dict[LightState, str] = {
    LightState.ON: "Light is ON",
    LightState.OFF: "Light is OFF",
}

TOGGLE_DEFINITION: Dict[str, Any] = {
    "name": "toggle",
    "description": "Two-state light switch",
    "states": [state.value for state in LightState],
    "alphabet": [ToggleSymbol.TOGGLE.value],
    "initial_state": LightState.OFF.value,
    "final_states": [state.value for state in LightState],
    "transitions": {
        state.value: {ToggleSymbol.TOGGLE.value: target.value}
        for state, target in TOGGLE_TRANSITIONS.items()
    },
    "outputs": {state.value: output for state, output in TOGGLE_OUTPUTS.items()},
}


def _transition(state: LightState, symbol: ToggleSymbol) -> LightState:
    return TOGGLE_TRANSITIONS[state]


def create_toggle_config(
    initial_state: LightState = LightState.OFF,
) -> FSMConfig[LightState, ToggleSymbol, str]:
    """Create the toggle automaton configuration.

    Args:
        initial_state: State the light starts in.
    """
    return FSMConfig(
        states=frozenset(LightState),
        alphabet=frozenset(ToggleSymbol),
        initial_state=initial_state,
        final_states=frozenset(LightState),
        transition=_transition,
        output_mapper=TOGGLE_OUTPUTS.__getitem__,
    )


def create_toggle_fsm(
    initial_state: LightState = LightState.OFF,
) -> FiniteStateMachine[LightState, ToggleSymbol, str]:
    """Create a toggle machine starting in the given state."""
    return FiniteStateMachine(create_toggle_config(initial_state))
